"""The date value: a JDN under a reform policy, with an optional time of day.

A :class:`DateValue` is immutable.  Its civil projection (year, month,
day) is computed once on construction; the other coordinate views are
derived on demand.  Values order and compare by the instant they denote,
so a timed value with an offset equals the same instant in UTC.
"""

from __future__ import annotations

import datetime
import functools
import math
from collections.abc import Iterator
from dataclasses import dataclass, field
from fractions import Fraction
from typing import Any

from reformcal.domain import formatting
from reformcal.domain.conversion import (
    LD_EPOCH_JD,
    MJD_EPOCH_JD,
    is_leap,
    jd_to_civil,
    jd_to_commercial,
    jd_to_ordinal,
    jd_to_wday,
    jd_to_weeknum,
)
from reformcal.domain.errors import InvalidCoordinateError
from reformcal.domain.reform import DEFAULT_REFORM, CalendarReform
from reformcal.domain.validation import (
    valid_civil,
    valid_commercial,
    valid_nth_kday,
    valid_ordinal,
    valid_time,
    valid_weeknum,
)
from reformcal.domain.zones import format_offset, zone_to_offset

DAY_SECONDS = 86400
MAX_OFFSET = DAY_SECONDS

# Python's date.toordinal() is 1 on proleptic Gregorian 0001-01-01.
ORDINAL_EPOCH_JD = 1721425

ReformLike = CalendarReform | str | int | float | None


def _reform(value: ReformLike) -> CalendarReform:
    if value is None:
        return DEFAULT_REFORM
    return CalendarReform.coerce(value)


@dataclass(frozen=True)
class DayFraction:
    """Time of day as a bare fraction of a day, with no clock fields."""

    value: Fraction

    def __post_init__(self) -> None:
        if not 0 <= self.value < 1:
            raise InvalidCoordinateError(f"day fraction {self.value} is outside [0, 1)")

    @property
    def day_fraction(self) -> Fraction:
        return self.value

    @property
    def utc_offset(self) -> int:
        return 0


@dataclass(frozen=True)
class ClockTime:
    """Wall-clock time of day in a fixed UTC offset."""

    seconds: int
    sub_second: Fraction = Fraction(0)
    utc_offset: int = 0

    def __post_init__(self) -> None:
        if not 0 <= self.seconds < DAY_SECONDS:
            raise InvalidCoordinateError(f"seconds into day {self.seconds} out of range")
        if not 0 <= self.sub_second < 1:
            raise InvalidCoordinateError(f"sub-second {self.sub_second} is outside [0, 1)")
        if not -MAX_OFFSET <= self.utc_offset <= MAX_OFFSET:
            raise InvalidCoordinateError(f"offset {self.utc_offset} out of range")

    @property
    def hour(self) -> int:
        return self.seconds // 3600

    @property
    def minute(self) -> int:
        return self.seconds % 3600 // 60

    @property
    def second(self) -> int:
        return self.seconds % 60

    @property
    def day_fraction(self) -> Fraction:
        return (self.seconds + self.sub_second) / DAY_SECONDS


TimeOfDay = DayFraction | ClockTime


@functools.total_ordering
@dataclass(frozen=True, eq=False)
class DateValue:
    """A day number, its reform policy, and an optional time of day."""

    jd: int
    reform: CalendarReform = DEFAULT_REFORM
    time: TimeOfDay | None = None
    year: int = field(init=False)
    month: int = field(init=False)
    day: int = field(init=False)

    def __post_init__(self) -> None:
        year, month, day = jd_to_civil(self.jd, self.reform)
        object.__setattr__(self, "year", year)
        object.__setattr__(self, "month", month)
        object.__setattr__(self, "day", day)

    # --- Constructors ---

    @classmethod
    def from_jd(cls, jd: int, reform: ReformLike = None) -> DateValue:
        return cls(jd, _reform(reform))

    @classmethod
    def civil(cls, year: int = -4712, month: int = 1, day: int = 1, reform: ReformLike = None) -> DateValue:
        """Date from civil fields; negative month and day count from the end."""
        policy = _reform(reform)
        jd = valid_civil(year, month, day, policy)
        if jd is None:
            raise InvalidCoordinateError(
                f"invalid civil date {year}-{month}-{day}", year=year, month=month, day=day
            )
        return cls(jd, policy)

    @classmethod
    def ordinal(cls, year: int = -4712, yday: int = 1, reform: ReformLike = None) -> DateValue:
        policy = _reform(reform)
        jd = valid_ordinal(year, yday, policy)
        if jd is None:
            raise InvalidCoordinateError(f"invalid ordinal date {year}-{yday}", year=year, yday=yday)
        return cls(jd, policy)

    @classmethod
    def commercial(
        cls, cwyear: int = -4712, cweek: int = 1, cwday: int = 1, reform: ReformLike = None
    ) -> DateValue:
        policy = _reform(reform)
        jd = valid_commercial(cwyear, cweek, cwday, policy)
        if jd is None:
            raise InvalidCoordinateError(
                f"invalid commercial date {cwyear}-W{cweek}-{cwday}",
                cwyear=cwyear,
                cweek=cweek,
                cwday=cwday,
            )
        return cls(jd, policy)

    @classmethod
    def weeknum(
        cls, year: int, week: int, wday: int, first: int = 0, reform: ReformLike = None
    ) -> DateValue:
        """Date from a week number; weeks start on Sunday (*first* = 0) or Monday (1)."""
        policy = _reform(reform)
        jd = valid_weeknum(year, week, wday, first, policy)
        if jd is None:
            raise InvalidCoordinateError(
                f"invalid week-number date {year}/{week}/{wday}", year=year, week=week, wday=wday
            )
        return cls(jd, policy)

    @classmethod
    def nth_kday(cls, year: int, month: int, n: int, k: int, reform: ReformLike = None) -> DateValue:
        """The *n*-th weekday *k* (0=Sunday) of a month; ``n=-1`` is the last one."""
        policy = _reform(reform)
        jd = valid_nth_kday(year, month, n, k, policy)
        if jd is None:
            raise InvalidCoordinateError(
                f"no weekday {k} number {n} in {year}-{month}", year=year, month=month, n=n, k=k
            )
        return cls(jd, policy)

    @classmethod
    def from_jd_time(
        cls,
        jd: int,
        hour: int = 0,
        minute: int = 0,
        second: int = 0,
        *,
        sub_second: Fraction | int = 0,
        offset: int = 0,
        reform: ReformLike = None,
    ) -> DateValue:
        """Timed value on local day *jd*; ``24:00:00`` rolls into the next day."""
        normalized = valid_time(hour, minute, second)
        if normalized is None:
            raise InvalidCoordinateError(
                f"invalid time {hour}:{minute}:{second}", hour=hour, minute=minute, second=second
            )
        if not -MAX_OFFSET <= offset <= MAX_OFFSET:
            raise InvalidCoordinateError(f"offset {offset} out of range", offset=offset)
        carry, h, m, s = normalized
        clock = ClockTime(h * 3600 + m * 60 + s, Fraction(sub_second), offset)
        return cls(jd + carry, _reform(reform), clock)

    @classmethod
    def from_date(cls, value: datetime.date, reform: ReformLike = None) -> DateValue:
        """Value for a stdlib date (always proleptic Gregorian)."""
        return cls(value.toordinal() + ORDINAL_EPOCH_JD, _reform(reform))

    def at(
        self,
        hour: int = 0,
        minute: int = 0,
        second: int = 0,
        *,
        sub_second: Fraction | int = 0,
        offset: int = 0,
    ) -> DateValue:
        """This day at the given wall-clock time."""
        return DateValue.from_jd_time(
            self.jd, hour, minute, second, sub_second=sub_second, offset=offset, reform=self.reform
        )

    # --- Derived views ---

    @property
    def has_time(self) -> bool:
        return self.time is not None

    @property
    def day_fraction(self) -> Fraction:
        return self.time.day_fraction if self.time is not None else Fraction(0)

    @property
    def offset(self) -> int:
        return self.time.utc_offset if self.time is not None else 0

    @property
    def zone(self) -> str:
        return format_offset(self.offset)

    @property
    def hour(self) -> int:
        return self._clock_seconds() // 3600

    @property
    def minute(self) -> int:
        return self._clock_seconds() % 3600 // 60

    @property
    def second(self) -> int:
        return self._clock_seconds() % 60

    @property
    def sec_fraction(self) -> Fraction:
        if isinstance(self.time, ClockTime):
            return self.time.sub_second
        seconds = self.day_fraction * DAY_SECONDS
        return seconds - math.floor(seconds)

    @property
    def ajd(self) -> Fraction:
        """Astronomical Julian Day: the instant, counted from noon UTC."""
        return self.jd + self.day_fraction - Fraction(self.offset, DAY_SECONDS) - Fraction(1, 2)

    @property
    def amjd(self) -> Fraction:
        return self.ajd - Fraction(4800001, 2)

    @property
    def mjd(self) -> int:
        return self.jd - MJD_EPOCH_JD

    @property
    def ld(self) -> int:
        """Lilian day number (1 on 1582-10-15)."""
        return self.jd - LD_EPOCH_JD

    @property
    def wday(self) -> int:
        return jd_to_wday(self.jd)

    @property
    def yday(self) -> int:
        return jd_to_ordinal(self.jd, self.reform)[1]

    @property
    def cwyear(self) -> int:
        return jd_to_commercial(self.jd, self.reform)[0]

    @property
    def cweek(self) -> int:
        return jd_to_commercial(self.jd, self.reform)[1]

    @property
    def cwday(self) -> int:
        return jd_to_commercial(self.jd, self.reform)[2]

    @property
    def wnum0(self) -> int:
        return jd_to_weeknum(self.jd, 0, self.reform)[1]

    @property
    def wnum1(self) -> int:
        return jd_to_weeknum(self.jd, 1, self.reform)[1]

    @property
    def leap(self) -> bool:
        return is_leap(self.year, self.reform)

    @property
    def is_gregorian(self) -> bool:
        return self.reform.is_gregorian_at(self.jd)

    @property
    def is_julian(self) -> bool:
        return not self.is_gregorian

    @property
    def start(self) -> float:
        return self.reform.start_value

    def _clock_seconds(self) -> int:
        if isinstance(self.time, ClockTime):
            return self.time.seconds
        return math.floor(self.day_fraction * DAY_SECONDS)

    # --- Policy and offset changes ---

    def new_start(self, reform: ReformLike = None) -> DateValue:
        """Same day under another reform policy; the JDN is unchanged."""
        return DateValue(self.jd, _reform(reform), self.time)

    def new_offset(self, offset: int | str = 0) -> DateValue:
        """Same instant seen from another UTC offset."""
        if isinstance(offset, str):
            parsed = zone_to_offset(offset)
            if parsed is None:
                raise InvalidCoordinateError(f"invalid offset {offset!r}", offset=offset)
            offset = int(parsed)
        if not -MAX_OFFSET <= offset <= MAX_OFFSET:
            raise InvalidCoordinateError(f"offset {offset} out of range", offset=offset)
        local = self.day_fraction * DAY_SECONDS - self.offset + offset
        return _from_local_seconds(self.jd * DAY_SECONDS + local, offset, self.reform)

    def to_date(self) -> DateValue:
        """The day alone, without a time of day."""
        return DateValue(self.jd, self.reform)

    # --- Arithmetic ---

    def __add__(self, other: Any) -> DateValue:
        if isinstance(other, bool) or not isinstance(other, (int, Fraction, float)):
            return NotImplemented
        if isinstance(other, int):
            return DateValue(self.jd + other, self.reform, self.time)
        delta = Fraction(other)
        if isinstance(self.time, ClockTime):
            local = self.jd * DAY_SECONDS + self.time.seconds + self.time.sub_second
            return _from_local_seconds(local + delta * DAY_SECONDS, self.offset, self.reform)
        total = self.jd + self.day_fraction + delta
        jd = math.floor(total)
        fraction = total - jd
        time = DayFraction(fraction) if fraction or self.time is not None else None
        return DateValue(jd, self.reform, time)

    __radd__ = __add__

    def __sub__(self, other: Any) -> Any:
        if isinstance(other, DateValue):
            return self.ajd - other.ajd
        if isinstance(other, bool) or not isinstance(other, (int, Fraction, float)):
            return NotImplemented
        return self + (-other)

    def shift_months(self, n: int) -> DateValue:
        """Move *n* months, clamping the day to the target month's last valid day."""
        t = self.year * 12 + (self.month - 1) + n
        year, month = divmod(t, 12)
        month += 1
        day = self.day
        while True:
            jd = valid_civil(year, month, day, self.reform)
            if jd is not None:
                break
            day -= 1
            if day < 1:
                raise InvalidCoordinateError(f"no valid day in {year}-{month}", year=year, month=month)
        return self + (jd - self.jd)

    def __rshift__(self, n: int) -> DateValue:
        return self.shift_months(n)

    def __lshift__(self, n: int) -> DateValue:
        return self.shift_months(-n)

    def next_day(self, n: int = 1) -> DateValue:
        return self + n

    def prev_day(self, n: int = 1) -> DateValue:
        return self - n

    def next_month(self, n: int = 1) -> DateValue:
        return self.shift_months(n)

    def prev_month(self, n: int = 1) -> DateValue:
        return self.shift_months(-n)

    def next_year(self, n: int = 1) -> DateValue:
        return self.shift_months(n * 12)

    def prev_year(self, n: int = 1) -> DateValue:
        return self.shift_months(-n * 12)

    def step(self, limit: DateValue, by: int | Fraction = 1) -> Iterator[DateValue]:
        """Yield values from this one towards *limit* (inclusive) in steps of *by* days."""
        if by == 0:
            raise ValueError("step must not be zero")
        current = self
        if by > 0:
            while current <= limit:
                yield current
                current = current + by
        else:
            while current >= limit:
                yield current
                current = current + by

    # --- Comparison ---

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, DateValue):
            return NotImplemented
        return self.ajd == other.ajd

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, DateValue):
            return NotImplemented
        return self.ajd < other.ajd

    def __hash__(self) -> int:
        return hash(self.ajd)

    # --- Rendering ---

    def __str__(self) -> str:
        return formatting.iso8601(self)

    def to_dict(self) -> dict[str, Any]:
        """Plain-data view used by services and JSON output."""
        data: dict[str, Any] = {
            "jd": self.jd,
            "reform": self.reform.label(),
            "year": self.year,
            "month": self.month,
            "day": self.day,
            "yday": self.yday,
            "wday": self.wday,
            "cwyear": self.cwyear,
            "cweek": self.cweek,
            "cwday": self.cwday,
            "mjd": self.mjd,
            "calendar": "gregorian" if self.is_gregorian else "julian",
            "iso8601": str(self),
        }
        if self.time is not None:
            data.update(
                hour=self.hour,
                minute=self.minute,
                second=self.second,
                sec_fraction=str(self.sec_fraction),
                offset=self.offset,
                zone=self.zone,
            )
        return data


def _from_local_seconds(total: Fraction | int, offset: int, reform: CalendarReform) -> DateValue:
    days, rest = divmod(Fraction(total), DAY_SECONDS)
    seconds = math.floor(rest)
    return DateValue(int(days), reform, ClockTime(seconds, rest - seconds, offset))
