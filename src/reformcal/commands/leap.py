"""Command: leap-year query under a reform policy."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from reformcal.commands._base import CalCommand

if TYPE_CHECKING:
    from reformcal.commands._context import AppContext


@click.command(
    cls=CalCommand,
    examples="""\
  reformcal leap 2000
  reformcal leap 1900 --julian
  reformcal -q --reform england leap 1700""",
)
@click.argument("year", type=int)
@click.option("--julian", is_flag=True, help="Ask the proleptic Julian calendar.")
@click.option("--gregorian", is_flag=True, help="Ask the proleptic Gregorian calendar.")
@click.pass_obj
def leap(app: AppContext, year: int, julian: bool, gregorian: bool) -> None:
    """Whether YEAR has a February 29."""
    if julian and gregorian:
        raise click.UsageError("--julian and --gregorian are mutually exclusive")
    reform = "julian" if julian else "gregorian" if gregorian else None
    app.emit(app.convert_service.leap(year, reform=reform))
