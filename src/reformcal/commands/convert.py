"""Command group: build a day from one coordinate system and show all of them."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import click

from reformcal.commands._base import CalGroup

if TYPE_CHECKING:
    from reformcal.commands._context import AppContext

_CONVERT_EXAMPLES = """\
  reformcal convert jd 2299161
  reformcal convert civil 1582 10 15
  reformcal convert civil -- -4712 1 1
  reformcal convert ordinal 2001 34
  reformcal convert commercial 2001 5 6
  reformcal convert weeknum 2001 5 6 --monday
  reformcal convert nth-kday 2001 2 -- -1 1"""


def _run(app: AppContext, system: str, values: tuple[int, ...], **kwargs: Any) -> None:
    app.emit(app.convert_service.convert(system, values, **kwargs))


@click.group(cls=CalGroup, examples=_CONVERT_EXAMPLES)
@click.pass_obj
def convert(app: AppContext) -> None:
    """Convert a day between coordinate systems.

    Negative values need a ``--`` separator before them.
    """


@convert.command(examples="  reformcal convert jd 2451944")
@click.argument("jd", type=int)
@click.pass_obj
def jd(app: AppContext, jd: int) -> None:
    """From a chronological Julian Day Number."""
    _run(app, "jd", (jd,))


@convert.command(
    examples="""\
  reformcal convert civil 2001 2 3
  reformcal convert civil 2001 2 -1
  reformcal --reform england convert civil 1582 10 10"""
)
@click.argument("year", type=int)
@click.argument("month", type=int)
@click.argument("day", type=int)
@click.pass_obj
def civil(app: AppContext, year: int, month: int, day: int) -> None:
    """From YEAR MONTH DAY; negative month or day counts from the end."""
    _run(app, "civil", (year, month, day))


@convert.command(examples="  reformcal convert ordinal 2001 34\n  reformcal convert ordinal 2001 -- -1")
@click.argument("year", type=int)
@click.argument("yday", type=int)
@click.pass_obj
def ordinal(app: AppContext, year: int, yday: int) -> None:
    """From YEAR and day of year YDAY."""
    _run(app, "ordinal", (year, yday))


@convert.command(examples="  reformcal convert commercial 2001 5 6")
@click.argument("cwyear", type=int)
@click.argument("cweek", type=int)
@click.argument("cwday", type=int)
@click.pass_obj
def commercial(app: AppContext, cwyear: int, cweek: int, cwday: int) -> None:
    """From ISO week-year CWYEAR, week CWEEK, and weekday CWDAY (1=Monday)."""
    _run(app, "commercial", (cwyear, cweek, cwday))


@convert.command(examples="  reformcal convert weeknum 2001 5 6\n  reformcal convert weeknum 2001 5 6 --monday")
@click.argument("year", type=int)
@click.argument("week", type=int)
@click.argument("wday", type=int)
@click.option("--monday", is_flag=True, help="Weeks start on Monday instead of Sunday.")
@click.pass_obj
def weeknum(app: AppContext, year: int, week: int, wday: int, monday: bool) -> None:
    """From YEAR, week number WEEK, and weekday WDAY (0=Sunday)."""
    _run(app, "weeknum", (year, week, wday), first=1 if monday else 0)


@convert.command(name="nth-kday", examples="  reformcal convert nth-kday 2001 2 -- -1 1")
@click.argument("year", type=int)
@click.argument("month", type=int)
@click.argument("n", type=int)
@click.argument("k", type=int)
@click.pass_obj
def nth_kday(app: AppContext, year: int, month: int, n: int, k: int) -> None:
    """The N-th weekday K (0=Sunday) of YEAR-MONTH; N=-1 is the last."""
    _run(app, "nth_kday", (year, month, n, k))
