"""Click building blocks shared by the reformcal commands.

``CalCommand`` and ``CalGroup`` take an ``examples`` string shown by an
eager ``--examples`` flag.  ``format_option`` and ``today_option`` are
the parser options that ``parse``, ``fragments`` and ``shift`` share.
"""

from __future__ import annotations

import datetime
from collections.abc import Callable
from typing import Any, TypeVar

import click

from reformcal.domain.formats import FIXED_FORMATS
from reformcal.services.parse import FREE_FORM

_F = TypeVar("_F", bound=Callable[..., Any])


def _add_examples_option(cmd: click.Command, examples: str) -> None:
    def show_examples(ctx: click.Context, _param: click.Parameter, value: bool) -> None:
        if not value or ctx.resilient_parsing:
            return
        click.echo(f"Examples for '{ctx.command_path}':\n")
        click.echo(examples)
        ctx.exit(0)

    cmd.params.append(
        click.Option(
            ["--examples"],
            is_flag=True,
            expose_value=False,
            is_eager=True,
            callback=show_examples,
            help="Show usage examples.",
        )
    )


class CalCommand(click.Command):
    """Command with an optional ``--examples`` flag."""

    def __init__(self, *args: Any, examples: str | None = None, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self.examples = examples
        if examples:
            _add_examples_option(self, examples)


class CalGroup(click.Group):
    """Group with an optional ``--examples`` flag; its subcommands are CalCommands."""

    command_class = CalCommand

    def __init__(self, *args: Any, examples: str | None = None, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self.examples = examples
        if examples:
            _add_examples_option(self, examples)


class IsoDate(click.ParamType):
    """A proleptic Gregorian ``YYYY-MM-DD`` read into :class:`datetime.date`."""

    name = "YYYY-MM-DD"

    def convert(self, value: Any, param: click.Parameter | None, ctx: click.Context | None) -> datetime.date:
        if isinstance(value, datetime.date):
            return value
        try:
            return datetime.date.fromisoformat(str(value))
        except ValueError:
            self.fail(f"{value!r} is not a YYYY-MM-DD date", param, ctx)


def format_option(func: _F) -> _F:
    """``--format``: free-form parsing or one of the fixed formats."""
    return click.option(
        "--format",
        "fmt",
        type=click.Choice([FREE_FORM, *FIXED_FORMATS]),
        default=FREE_FORM,
        show_default=True,
        help="Parser to use.",
    )(func)


def today_option(func: _F) -> _F:
    """``--today``: reference date for completing partial input."""
    return click.option(
        "--today",
        type=IsoDate(),
        default=None,
        help="Reference date for partial input (default: the host's today).",
    )(func)
