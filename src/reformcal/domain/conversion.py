"""Reform-aware conversion between JDN and calendar coordinates.

All functions are pure and integer-only.  Gregorian civil dates use the
Neri-Schneider affine transform over a March-based year; Julian civil
dates use the classical proleptic formula.  Every coordinate system is
parameterized by a :class:`~reformcal.domain.reform.CalendarReform`.

The converters assume valid input.  Round-trip checking of raw,
possibly negative-indexed fields lives in :mod:`reformcal.domain.validation`.
"""

from __future__ import annotations

from reformcal.domain.errors import InvalidCoordinateError
from reformcal.domain.reform import CalendarReform

# Neri-Schneider constants (epoch: proleptic Gregorian 0000-03-01)
NS_EPOCH = 1721120
NS_DAYS_IN_4_YEARS = 1461
NS_DAYS_IN_400_YEARS = 146097
NS_DAYS_BEFORE_NEW_YEAR = 306
NS_YEAR_MULTIPLIER = 2939745
NS_MONTH_COEFF = 2141
NS_MONTH_OFFSET = 197913
NS_YEARS_PER_CENTURY = 100

# Proleptic Julian 0000-03-01
JULIAN_MARCH_EPOCH = 1721118

UNIX_EPOCH_JD = 2440588
MJD_EPOCH_JD = 2400001
LD_EPOCH_JD = 2299160

_MONTH_DAYS: tuple[tuple[int, ...], tuple[int, ...]] = (
    (0, 31, 28, 31, 30, 31, 30, 31, 31, 30, 31, 30, 31),
    (0, 31, 29, 31, 30, 31, 30, 31, 31, 30, 31, 30, 31),
)


# --- Leap years ---


def gregorian_leap(year: int) -> bool:
    return year % 4 == 0 and (year % 100 != 0 or year % 400 == 0)


def julian_leap(year: int) -> bool:
    return year % 4 == 0


def is_leap(year: int, reform: CalendarReform) -> bool:
    """Whether *year* has a February 29 under *reform*.

    For a cutover policy the answer comes from the calendar actually in
    force at the end of February of that year.
    """
    if reform.gregorian_only:
        return gregorian_leap(year)
    if reform.julian_only:
        return julian_leap(year)
    jd = civil_to_jd(year, 3, 1, reform)
    return jd_to_civil(jd - 1, reform)[2] == 29


# --- Single-calendar civil conversion ---


def gregorian_civil_to_jd(year: int, month: int, day: int) -> int:
    j = 1 if month < 3 else 0
    y0 = year - j
    m0 = month + 12 if j else month
    d0 = day - 1

    q1 = y0 // 100
    yc = (NS_DAYS_IN_4_YEARS * y0) // 4 - q1 + q1 // 4
    mc = (NS_DAYS_BEFORE_NEW_YEAR * m0 - 914) // 10
    return yc + mc + d0 + NS_EPOCH


def gregorian_jd_to_civil(jd: int) -> tuple[int, int, int]:
    r0 = jd - NS_EPOCH

    # century and day within the 400-year cycle
    n1 = 4 * r0 + 3
    q1 = n1 // NS_DAYS_IN_400_YEARS
    r1 = (n1 % NS_DAYS_IN_400_YEARS) // 4

    # year within the century and day of the March-based year
    n2 = 4 * r1 + 3
    u2 = NS_YEAR_MULTIPLIER * n2
    q2 = u2 >> 32
    r2 = (u2 & 0xFFFFFFFF) // NS_YEAR_MULTIPLIER // 4

    # month and day
    n3 = NS_MONTH_COEFF * r2 + NS_MONTH_OFFSET
    q3 = n3 >> 16
    r3 = (n3 & 0xFFFF) // NS_MONTH_COEFF

    y0 = NS_YEARS_PER_CENTURY * q1 + q2
    j = r2 >= NS_DAYS_BEFORE_NEW_YEAR
    return y0 + j, q3 - 12 if j else q3, r3 + 1


def julian_civil_to_jd(year: int, month: int, day: int) -> int:
    if month <= 2:
        year -= 1
        month += 12
    return (1461 * (year + 4716)) // 4 + (306001 * (month + 1)) // 10000 + day - 1524


def julian_jd_to_civil(jd: int) -> tuple[int, int, int]:
    r0 = jd - JULIAN_MARCH_EPOCH
    y0, rem = divmod(4 * r0 + 3, 1461)
    doy = rem // 4
    mp = (5 * doy + 2) // 153
    day = doy - (153 * mp + 2) // 5 + 1
    month = mp + 3 if mp < 10 else mp - 9
    return y0 + (month <= 2), month, day


# --- Reform-aware civil conversion ---


def civil_to_jd(year: int, month: int, day: int, reform: CalendarReform) -> int:
    """Convert civil fields to a JDN.

    The Gregorian candidate decides which calendar applies: when it falls
    before the cutover the Julian result for the same fields is used.
    """
    if reform.julian_only:
        return julian_civil_to_jd(year, month, day)
    jd = gregorian_civil_to_jd(year, month, day)
    if reform.is_gregorian_at(jd):
        return jd
    return julian_civil_to_jd(year, month, day)


def jd_to_civil(jd: int, reform: CalendarReform) -> tuple[int, int, int]:
    if reform.is_gregorian_at(jd):
        return gregorian_jd_to_civil(jd)
    return julian_jd_to_civil(jd)


def civil_round_trips(year: int, month: int, day: int, reform: CalendarReform) -> int | None:
    """Return the JDN of the fields when converting back reproduces them."""
    if not 1 <= month <= 12 or not 1 <= day <= 31:
        return None
    jd = civil_to_jd(year, month, day, reform)
    if jd_to_civil(jd, reform) != (year, month, day):
        return None
    return jd


# --- Boundary searches ---


def find_fdoy(year: int, reform: CalendarReform) -> int:
    """JDN of the first existing day of *year*."""
    if reform.gregorian_only:
        return gregorian_civil_to_jd(year, 1, 1)
    for day in range(1, 31):
        jd = civil_round_trips(year, 1, day, reform)
        if jd is not None:
            return jd
    raise InvalidCoordinateError(f"no first day found for year {year}", year=year)


def find_ldoy(year: int, reform: CalendarReform) -> int:
    """JDN of the last existing day of *year*."""
    if reform.gregorian_only:
        return gregorian_civil_to_jd(year, 12, 31)
    for day in range(31, 1, -1):
        jd = civil_round_trips(year, 12, day, reform)
        if jd is not None:
            return jd
    raise InvalidCoordinateError(f"no last day found for year {year}", year=year)


def find_fdom(year: int, month: int, reform: CalendarReform) -> int:
    """JDN of the first existing day of *month*."""
    if reform.gregorian_only:
        return gregorian_civil_to_jd(year, month, 1)
    for day in range(1, 31):
        jd = civil_round_trips(year, month, day, reform)
        if jd is not None:
            return jd
    raise InvalidCoordinateError(f"no first day found for {year}-{month:02d}", year=year, month=month)


def find_ldom(year: int, month: int, reform: CalendarReform) -> int:
    """JDN of the last existing day of *month*."""
    if reform.gregorian_only:
        return gregorian_civil_to_jd(year, month, gregorian_last_day_of_month(year, month))
    for day in range(31, 1, -1):
        jd = civil_round_trips(year, month, day, reform)
        if jd is not None:
            return jd
    raise InvalidCoordinateError(f"no last day found for {year}-{month:02d}", year=year, month=month)


def gregorian_last_day_of_month(year: int, month: int) -> int:
    return _MONTH_DAYS[gregorian_leap(year)][month]


def julian_last_day_of_month(year: int, month: int) -> int:
    return _MONTH_DAYS[julian_leap(year)][month]


def last_day_of_month(year: int, month: int, reform: CalendarReform) -> int:
    """Day number of the last existing day of *month* under *reform*."""
    return jd_to_civil(find_ldom(year, month, reform), reform)[2]


# --- Ordinal ---


def ordinal_to_jd(year: int, yday: int, reform: CalendarReform) -> int:
    return find_fdoy(year, reform) + yday - 1


def jd_to_ordinal(jd: int, reform: CalendarReform) -> tuple[int, int]:
    year = jd_to_civil(jd, reform)[0]
    return year, jd - find_fdoy(year, reform) + 1


# --- Commercial (ISO week) ---


def commercial_to_jd(cwyear: int, cweek: int, cwday: int, reform: CalendarReform) -> int:
    # Monday on or before January 4 starts week 1.
    rjd2 = find_fdoy(cwyear, reform) + 3
    return (rjd2 - rjd2 % 7) + 7 * (cweek - 1) + (cwday - 1)


def jd_to_commercial(jd: int, reform: CalendarReform) -> tuple[int, int, int]:
    a = jd_to_civil(jd - 3, reform)[0]
    rjd2 = commercial_to_jd(a + 1, 1, 1, reform)
    if jd >= rjd2:
        year = a + 1
    else:
        rjd2 = commercial_to_jd(a, 1, 1, reform)
        year = a
    week = 1 + (jd - rjd2) // 7
    day = (jd + 1) % 7 or 7
    return year, week, day


# --- Week number (%U: first=0 Sunday, %W: first=1 Monday) ---


def weeknum_to_jd(year: int, week: int, wday: int, first: int, reform: CalendarReform) -> int:
    rjd2 = find_fdoy(year, reform) + 6
    return (rjd2 - (rjd2 - first + 1) % 7 - 7) + 7 * week + wday


def jd_to_weeknum(jd: int, first: int, reform: CalendarReform) -> tuple[int, int, int]:
    year = jd_to_civil(jd, reform)[0]
    rjd = find_fdoy(year, reform) + 6
    j = jd - (rjd - (rjd - first + 1) % 7) + 7
    return year, j // 7, j % 7


# --- nth weekday of month ---


def nth_kday_to_jd(year: int, month: int, n: int, k: int, reform: CalendarReform) -> int:
    """JDN of the *n*-th weekday *k* (0=Sunday) of a month; negative *n* counts from the end."""
    if n > 0:
        rjd2 = find_fdom(year, month, reform) - 1
    else:
        rjd2 = find_ldom(year, month, reform) + 7
    return (rjd2 - (rjd2 - k + 1) % 7) + 7 * n


def jd_to_nth_kday(jd: int, reform: CalendarReform) -> tuple[int, int, int, int]:
    year, month, _ = jd_to_civil(jd, reform)
    rjd = find_fdom(year, month, reform)
    return year, month, (jd - rjd) // 7 + 1, jd_to_wday(jd)


# --- Weekday ---


def jd_to_wday(jd: int) -> int:
    """Weekday of *jd*, 0=Sunday.  JDN 0 is a Monday."""
    return (jd + 1) % 7
