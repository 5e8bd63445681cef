"""Command: move a date by days, months, and years."""

from __future__ import annotations

import datetime
from typing import TYPE_CHECKING

import click

from reformcal.commands._base import CalCommand, today_option

if TYPE_CHECKING:
    from reformcal.commands._context import AppContext


@click.command(
    cls=CalCommand,
    examples="""\
  reformcal shift 2001-01-31 --months 1
  reformcal shift 1582-10-04 --days 1
  reformcal shift 2000-02-29 --years 1
  reformcal shift "Feb 3" --days -7 --today 2024-06-01""",
)
@click.argument("text")
@click.option("--days", type=int, default=0, help="Days to add (negative to go back).")
@click.option("--months", type=int, default=0, help="Months to add; the day is clamped.")
@click.option("--years", type=int, default=0, help="Years to add; the day is clamped.")
@today_option
@click.pass_obj
def shift(
    app: AppContext,
    text: str,
    days: int,
    months: int,
    years: int,
    today: datetime.date | None,
) -> None:
    """Parse TEXT, then shift it by --years/--months and then --days."""
    app.emit(
        app.convert_service.shift(
            text,
            days=days,
            months=months,
            years=years,
            today=today,
        )
    )
