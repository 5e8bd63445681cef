"""Commands: parse date/time text, and inspect the raw parser fragments."""

from __future__ import annotations

import datetime
from typing import TYPE_CHECKING

import click

from reformcal.commands._base import CalCommand, format_option, today_option

if TYPE_CHECKING:
    from reformcal.commands._context import AppContext


@click.command(
    cls=CalCommand,
    examples="""\
  reformcal parse "Sat Aug 28 02:55:50 +09:00 1999"
  reformcal parse "H11.08.28"
  reformcal --reform england parse "1582-10-10"
  reformcal parse "2001-02-03T04:05:06.123+07:00" --format iso8601
  reformcal parse "w1" --today 2024-03-15
  reformcal parse "99-01-01" --no-comp""",
)
@click.argument("text")
@format_option
@click.option("--no-comp", is_flag=True, help="Keep two-digit years as written.")
@click.option("--date-only", is_flag=True, help="Drop any time of day from the result.")
@today_option
@click.pass_obj
def parse(
    app: AppContext,
    text: str,
    fmt: str,
    no_comp: bool,
    date_only: bool,
    today: datetime.date | None,
) -> None:
    """Parse TEXT into a calendar date."""
    app.emit(
        app.parse_service.parse(
            text,
            fmt=fmt,
            complete_century=False if no_comp else None,
            with_time=False if date_only else None,
            today=today,
        )
    )


@click.command(
    cls=CalCommand,
    examples="""\
  reformcal fragments "Sat Aug 28 02:55:50 +09:00 1999"
  reformcal --json fragments "H11.08.28"
  reformcal fragments "Mon, 1 Jan 2001 00:00:00 GMT" --format httpdate""",
)
@click.argument("text")
@format_option
@click.option("--no-comp", is_flag=True, help="Keep two-digit years as written.")
@click.pass_obj
def fragments(app: AppContext, text: str, fmt: str, no_comp: bool) -> None:
    """Show the fields the parser extracts from TEXT, without resolving them."""
    app.emit(
        app.parse_service.fragments(
            text,
            fmt=fmt,
            complete_century=False if no_comp else None,
        )
    )
