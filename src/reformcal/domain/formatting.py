"""Render date values in the fixed interchange formats."""

from __future__ import annotations

import math
from typing import TYPE_CHECKING

from reformcal.domain.names import ABBR_DAY_NAMES, ABBR_MONTH_NAMES

if TYPE_CHECKING:
    from reformcal.domain.value import DateValue

# (first JDN of the era, initial, year offset), newest first.
JIS_ERA_TABLE: tuple[tuple[int, str, int], ...] = (
    (2458605, "R", 2018),
    (2447535, "H", 1988),
    (2424875, "S", 1925),
    (2419614, "T", 1911),
    (2405160, "M", 1867),
)


def format_year(year: int) -> str:
    """At least four digits, with a leading minus for negative years."""
    return f"-{-year:04d}" if year < 0 else f"{year:04d}"


def _date_part(value: DateValue) -> str:
    return f"{format_year(value.year)}-{value.month:02d}-{value.day:02d}"


def _clock(value: DateValue, n: int = 0) -> str:
    text = f"{value.hour:02d}:{value.minute:02d}:{value.second:02d}"
    if n > 0:
        digits = math.floor(value.sec_fraction * 10**n)
        text += f".{digits:0{n}d}"
    return text


def _compact_zone(offset: int) -> str:
    sign = "-" if offset < 0 else "+"
    hours, rest = divmod(abs(offset), 3600)
    return f"{sign}{hours:02d}{rest // 60:02d}"


def iso8601(value: DateValue, n: int = 0) -> str:
    """``YYYY-MM-DD``, or ``YYYY-MM-DDTHH:MM:SS[.f]+HH:MM`` for timed values."""
    if not value.has_time:
        return _date_part(value)
    return f"{_date_part(value)}T{_clock(value, n)}{value.zone}"


xmlschema = iso8601


def rfc3339(value: DateValue, n: int = 0) -> str:
    if not value.has_time:
        return f"{_date_part(value)}T00:00:00+00:00"
    return iso8601(value, n)


def rfc2822(value: DateValue) -> str:
    """e.g. ``Sat, 3 Feb 2001 04:05:06 +0700``."""
    return (
        f"{ABBR_DAY_NAMES[value.wday]}, {value.day} {ABBR_MONTH_NAMES[value.month - 1]} "
        f"{format_year(value.year)} {_clock(value)} {_compact_zone(value.offset)}"
    )


def httpdate(value: DateValue) -> str:
    """IMF-fixdate, always in GMT."""
    utc = value.new_offset(0)
    return (
        f"{ABBR_DAY_NAMES[utc.wday]}, {utc.day:02d} {ABBR_MONTH_NAMES[utc.month - 1]} "
        f"{format_year(utc.year)} {_clock(utc)} GMT"
    )


def jisx0301(value: DateValue, n: int = 0) -> str:
    """Japanese era date (``H13.02.03``); days before Meiji 6 use ISO 8601."""
    for first_jd, era, base in JIS_ERA_TABLE:
        if value.jd >= first_jd:
            date_text = f"{era}{value.year - base:02d}.{value.month:02d}.{value.day:02d}"
            break
    else:
        date_text = _date_part(value)
    if not value.has_time:
        return date_text
    return f"{date_text}T{_clock(value, n)}{value.zone}"


def asctime(value: DateValue) -> str:
    """e.g. ``Sat Feb  3 04:05:06 2001``."""
    return (
        f"{ABBR_DAY_NAMES[value.wday]} {ABBR_MONTH_NAMES[value.month - 1]} {value.day:2d} "
        f"{_clock(value)} {format_year(value.year)}"
    )


WRITERS = {
    "iso8601": iso8601,
    "xmlschema": xmlschema,
    "rfc3339": rfc3339,
    "rfc2822": rfc2822,
    "httpdate": httpdate,
    "jisx0301": jisx0301,
    "asctime": asctime,
}
