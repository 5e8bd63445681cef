"""Resolve completed fragments into a JDN and build date values."""

from __future__ import annotations

import logging
from fractions import Fraction

from reformcal.domain.completion import ReferenceProvider, complete_fragments, rewrite_seconds
from reformcal.domain.errors import InvalidCoordinateError, UnresolvableFragmentsError
from reformcal.domain.fragments import Fragments
from reformcal.domain.reform import CalendarReform
from reformcal.domain.validation import (
    valid_civil,
    valid_commercial,
    valid_ordinal,
    valid_weeknum,
)
from reformcal.domain.value import DateValue

logger = logging.getLogger(__name__)

MAX_OFFSET = 86400


def resolve_jd(frags: Fragments, reform: CalendarReform) -> int | None:
    """First JDN produced by the coordinate systems the fragments cover.

    Tried in order: ``jd``, ordinal, civil, commercial, Sunday-based week
    number, Monday-based week number.  A system whose fields are present
    but invalid is skipped.
    """
    if frags.jd is not None:
        return frags.jd

    if frags.yday is not None and frags.year is not None:
        jd = valid_ordinal(frags.year, frags.yday, reform)
        if jd is not None:
            return jd

    if frags.mday is not None and frags.mon is not None and frags.year is not None:
        jd = valid_civil(frags.year, frags.mon, frags.mday, reform)
        if jd is not None:
            return jd

    # commercial: cwday, else wday with Sunday as 7
    wday = frags.cwday
    if wday is None and frags.wday is not None:
        wday = frags.wday or 7
    if wday is not None and frags.cweek is not None and frags.cwyear is not None:
        jd = valid_commercial(frags.cwyear, frags.cweek, wday, reform)
        if jd is not None:
            return jd

    # Sunday-based weeks: wday, else cwday with Sunday as 0
    wday = frags.wday
    if wday is None and frags.cwday is not None:
        wday = 0 if frags.cwday == 7 else frags.cwday
    if wday is not None and frags.wnum0 is not None and frags.year is not None:
        jd = valid_weeknum(frags.year, frags.wnum0, wday, 0, reform)
        if jd is not None:
            return jd

    # Monday-based weeks count days from Monday
    wday = frags.wday if frags.wday is not None else frags.cwday
    if wday is not None:
        wday = (wday - 1) % 7
    if wday is not None and frags.wnum1 is not None and frags.year is not None:
        jd = valid_weeknum(frags.year, frags.wnum1, wday, 1, reform)
        if jd is not None:
            return jd

    return None


def build_value(
    frags: Fragments,
    reform: CalendarReform,
    today: ReferenceProvider,
    *,
    with_time: bool = True,
    warnings: list[str] | None = None,
) -> DateValue:
    """Build a :class:`DateValue` from parsed fragments.

    Without *with_time* the result is a pure date and time fields are
    ignored.  Year, month and day given together skip completion entirely.

    Raises:
        UnresolvableFragmentsError: When no coordinate system yields a day.
        InvalidCoordinateError: When the time of day cannot exist.
    """
    if frags.is_empty():
        raise UnresolvableFragmentsError("no date fields to resolve")

    if (
        not with_time
        and frags.jd is None
        and frags.yday is None
        and frags.year is not None
        and frags.mon is not None
        and frags.mday is not None
    ):
        jd = valid_civil(frags.year, frags.mon, frags.mday, reform)
        if jd is None:
            raise UnresolvableFragmentsError(
                f"{frags.year}-{frags.mon}-{frags.mday} does not exist",
                fields=sorted(frags.to_dict()),
            )
        return DateValue(jd, reform)

    frags = rewrite_seconds(frags)
    orig_sec = frags.sec
    completed = complete_fragments(frags, today, with_time=with_time)
    jd = resolve_jd(completed, reform)
    if jd is None:
        raise UnresolvableFragmentsError(
            "fragments do not resolve to a day", fields=sorted(frags.to_dict())
        )
    if not with_time:
        return DateValue(jd, reform)

    if orig_sec is not None and orig_sec > 60:
        raise InvalidCoordinateError(f"second {orig_sec} is out of range", second=orig_sec)

    offset = completed.offset or 0
    if not -MAX_OFFSET <= offset <= MAX_OFFSET:
        logger.warning("invalid offset is ignored: %s", offset)
        if warnings is not None:
            warnings.append(f"Invalid offset {offset} ignored")
        offset = 0
    seconds = _round_half_away(offset)
    if seconds != offset:
        logger.warning("fraction of offset is ignored: %s", offset)
        if warnings is not None:
            warnings.append(f"Fraction of offset {offset} ignored")

    return DateValue.from_jd_time(
        jd,
        completed.hour,
        completed.min,
        completed.sec,
        sub_second=completed.sec_fraction or Fraction(0),
        offset=seconds,
        reform=reform,
    )


def _round_half_away(value: int | Fraction) -> int:
    half = Fraction(1, 2)
    return int(value + half) if value >= 0 else -int(-value + half)
