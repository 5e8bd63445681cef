"""Round-trip validation of raw calendar coordinates.

Each validator normalizes negative indices relative to the coordinate's
own period (``-1`` is the last month, day, week, ...), converts to a JDN,
and converts back.  A coordinate is valid only when the round trip
reproduces the normalized fields exactly.  Validators return the JDN, or
``None`` when the coordinate does not exist; they never clamp.
"""

from __future__ import annotations

from reformcal.domain.conversion import (
    civil_to_jd,
    commercial_to_jd,
    find_ldom,
    find_ldoy,
    jd_to_civil,
    jd_to_commercial,
    jd_to_nth_kday,
    jd_to_ordinal,
    jd_to_weeknum,
    nth_kday_to_jd,
    ordinal_to_jd,
    weeknum_to_jd,
)
from reformcal.domain.reform import CalendarReform


def valid_jd(jd: int, reform: CalendarReform) -> int:
    """Every integer is a valid JDN."""
    return jd


def normalize_civil(
    year: int, month: int, day: int, reform: CalendarReform
) -> tuple[int, int, int] | None:
    """Resolve negative month/day indices; ``None`` when out of range."""
    if month < 0:
        month += 13
    if not 1 <= month <= 12:
        return None
    if day < 0:
        last = find_ldom(year, month, reform)
        ry, rm, rd = jd_to_civil(last + day + 1, reform)
        if (ry, rm) != (year, month):
            return None
        day = rd
    return year, month, day


def valid_civil(year: int, month: int, day: int, reform: CalendarReform) -> int | None:
    normalized = normalize_civil(year, month, day, reform)
    if normalized is None:
        return None
    year, month, day = normalized
    jd = civil_to_jd(year, month, day, reform)
    if jd_to_civil(jd, reform) != (year, month, day):
        return None
    return jd


def valid_ordinal(year: int, yday: int, reform: CalendarReform) -> int | None:
    if yday < 0:
        ry, rd = jd_to_ordinal(find_ldoy(year, reform) + yday + 1, reform)
        if ry != year:
            return None
        yday = rd
    jd = ordinal_to_jd(year, yday, reform)
    if jd_to_ordinal(jd, reform) != (year, yday):
        return None
    return jd


def valid_commercial(cwyear: int, cweek: int, cwday: int, reform: CalendarReform) -> int | None:
    if cwday < 0:
        cwday += 8
    if cweek < 0:
        first_of_next = commercial_to_jd(cwyear + 1, 1, 1, reform)
        ry, rw, _ = jd_to_commercial(first_of_next + cweek * 7, reform)
        if ry != cwyear:
            return None
        cweek = rw
    jd = commercial_to_jd(cwyear, cweek, cwday, reform)
    if jd_to_commercial(jd, reform) != (cwyear, cweek, cwday):
        return None
    return jd


def valid_weeknum(
    year: int, week: int, wday: int, first: int, reform: CalendarReform
) -> int | None:
    """Validate a ``%U`` (*first* = 0) or ``%W`` (*first* = 1) week-number date."""
    if wday < 0:
        wday += 7
    if week < 0:
        first_of_next = weeknum_to_jd(year + 1, 1, first, first, reform)
        ry, rw, _ = jd_to_weeknum(first_of_next + week * 7, first, reform)
        if ry != year:
            return None
        week = rw
    jd = weeknum_to_jd(year, week, wday, first, reform)
    if jd_to_weeknum(jd, first, reform) != (year, week, wday):
        return None
    return jd


def valid_nth_kday(year: int, month: int, n: int, k: int, reform: CalendarReform) -> int | None:
    """Validate "the *n*-th weekday *k* of a month" (``n`` may be negative, never 0)."""
    if k < 0:
        k += 7
    if month < 0:
        month += 13
    if n == 0 or not 1 <= month <= 12 or not 0 <= k <= 6:
        return None
    if n < 0:
        ny, nm = (year + 1, 1) if month == 12 else (year, month + 1)
        ry, rm, rn, _ = jd_to_nth_kday(nth_kday_to_jd(ny, nm, 1, k, reform) + n * 7, reform)
        if (ry, rm) != (year, month):
            return None
        n = rn
    jd = nth_kday_to_jd(year, month, n, k, reform)
    if jd_to_nth_kday(jd, reform) != (year, month, n, k):
        return None
    return jd


def valid_time(hour: int, minute: int, second: int) -> tuple[int, int, int, int] | None:
    """Normalize hour/minute/second into ``(day_carry, hour, minute, second)``.

    A negative field adds one period (no cascading).  ``24:00:00`` rolls
    over into the next day.
    """
    if second < 0:
        second += 60
    if minute < 0:
        minute += 60
    if hour < 0:
        hour += 24
    if not 0 <= second < 60 or not 0 <= minute < 60 or not 0 <= hour <= 24:
        return None
    if hour == 24:
        if minute or second:
            return None
        return 1, 0, 0, 0
    return 0, hour, minute, second
