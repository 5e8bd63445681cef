"""Tests for JDN resolution and DateValue construction from fragments."""

from __future__ import annotations

from collections.abc import Callable
from fractions import Fraction

import pytest

from reformcal.domain.errors import ErrorCode, InvalidCoordinateError, UnresolvableFragmentsError
from reformcal.domain.fragments import Fragments
from reformcal.domain.parser import parse_fragments
from reformcal.domain.reform import DEFAULT_REFORM, ENGLAND, CalendarReform
from reformcal.domain.resolver import build_value, resolve_jd
from reformcal.domain.value import DateValue

SAMPLE_JD = 2451944  # 2001-02-03, a Saturday
REFERENCE_JD = 2460385  # 2024-03-15


class TestResolveJd:
    def test_direct_jd_wins(self) -> None:
        assert resolve_jd(Fragments(jd=5, year=2001, mon=2, mday=3), DEFAULT_REFORM) == 5

    def test_ordinal(self) -> None:
        assert resolve_jd(Fragments(year=2001, yday=34), DEFAULT_REFORM) == SAMPLE_JD

    def test_civil(self) -> None:
        assert resolve_jd(Fragments(year=2001, mon=2, mday=3), DEFAULT_REFORM) == SAMPLE_JD

    def test_commercial_with_cwday(self) -> None:
        assert resolve_jd(Fragments(cwyear=2001, cweek=5, cwday=6), DEFAULT_REFORM) == SAMPLE_JD

    def test_commercial_maps_sunday(self) -> None:
        jd = resolve_jd(Fragments(cwyear=2001, cweek=5, wday=0), DEFAULT_REFORM)
        assert jd == SAMPLE_JD + 1

    def test_sunday_based_week(self) -> None:
        assert resolve_jd(Fragments(year=2001, wnum0=4, wday=6), DEFAULT_REFORM) == SAMPLE_JD

    def test_monday_based_week(self) -> None:
        assert resolve_jd(Fragments(year=2001, wnum1=5, wday=6), DEFAULT_REFORM) == SAMPLE_JD

    def test_invalid_civil_falls_through_to_commercial(self) -> None:
        frags = Fragments(year=2001, mon=2, mday=30, cwyear=2001, cweek=5, cwday=6)
        assert resolve_jd(frags, DEFAULT_REFORM) == SAMPLE_JD

    def test_nothing_resolves(self) -> None:
        assert resolve_jd(Fragments(year=2001, mon=2, mday=30), DEFAULT_REFORM) is None
        assert resolve_jd(Fragments(hour=1), DEFAULT_REFORM) is None

    def test_reform_matters(self) -> None:
        frags = Fragments(year=1752, mon=9, mday=5)
        assert resolve_jd(frags, DEFAULT_REFORM) is not None
        assert resolve_jd(frags, CalendarReform.cutover(ENGLAND)) is None


class TestBuildValue:
    def test_empty_is_unresolvable(self, no_reference: Callable[[], DateValue]) -> None:
        with pytest.raises(UnresolvableFragmentsError) as exc_info:
            build_value(Fragments(), DEFAULT_REFORM, no_reference)
        assert exc_info.value.code == ErrorCode.UNRESOLVABLE_FRAGMENTS

    def test_pure_date_skips_completion(self, no_reference: Callable[[], DateValue]) -> None:
        value = build_value(Fragments(year=2001, mon=2, mday=3), DEFAULT_REFORM, no_reference, with_time=False)
        assert value.jd == SAMPLE_JD
        assert not value.has_time

    def test_nonexistent_pure_date(self, no_reference: Callable[[], DateValue]) -> None:
        with pytest.raises(UnresolvableFragmentsError) as exc_info:
            build_value(Fragments(year=2001, mon=2, mday=30), DEFAULT_REFORM, no_reference, with_time=False)
        assert exc_info.value.detail["fields"] == ["mday", "mon", "year"]

    def test_timed_value(self, no_reference: Callable[[], DateValue]) -> None:
        frags = Fragments(year=2001, mon=2, mday=3, hour=4, min=5, sec=6, offset=7 * 3600)
        value = build_value(frags, DEFAULT_REFORM, no_reference)
        assert value.jd == SAMPLE_JD
        assert (value.hour, value.minute, value.second) == (4, 5, 6)
        assert value.offset == 7 * 3600

    def test_fraction_is_kept(self, no_reference: Callable[[], DateValue]) -> None:
        frags = Fragments(year=2001, mon=2, mday=3, hour=4, sec_fraction=Fraction(1, 4))
        assert build_value(frags, DEFAULT_REFORM, no_reference).sec_fraction == Fraction(1, 4)

    def test_time_only_uses_reference(self, today: Callable[[], DateValue]) -> None:
        value = build_value(Fragments(hour=10, min=30), DEFAULT_REFORM, today)
        assert value.jd == REFERENCE_JD
        assert value.hour == 10

    def test_partial_date_uses_reference(self, today: Callable[[], DateValue]) -> None:
        value = build_value(Fragments(mon=2, mday=3), DEFAULT_REFORM, today, with_time=False)
        assert (value.year, value.month, value.day) == (2024, 2, 3)

    def test_unix_seconds(self, no_reference: Callable[[], DateValue]) -> None:
        value = build_value(Fragments(seconds=86400 * 2 + 60), DEFAULT_REFORM, no_reference)
        assert (value.year, value.month, value.day) == (1970, 1, 3)
        assert value.minute == 1

    def test_leap_second_is_clamped(self, no_reference: Callable[[], DateValue]) -> None:
        frags = Fragments(year=2001, mon=2, mday=3, hour=23, min=59, sec=60)
        assert build_value(frags, DEFAULT_REFORM, no_reference).second == 59

    def test_second_above_sixty_is_invalid(self, no_reference: Callable[[], DateValue]) -> None:
        frags = Fragments(year=2001, mon=2, mday=3, hour=0, min=0, sec=61)
        with pytest.raises(InvalidCoordinateError):
            build_value(frags, DEFAULT_REFORM, no_reference)

    def test_out_of_range_offset_is_dropped(self, no_reference: Callable[[], DateValue]) -> None:
        warnings: list[str] = []
        frags = Fragments(year=2001, mon=2, mday=3, hour=1, offset=90000)
        value = build_value(frags, DEFAULT_REFORM, no_reference, warnings=warnings)
        assert value.offset == 0
        assert warnings == ["Invalid offset 90000 ignored"]

    def test_fractional_offset_is_rounded_with_warning(self, no_reference: Callable[[], DateValue]) -> None:
        frags = parse_fragments("2001-02-03T04:05:06+09.7559")
        assert frags.offset == Fraction(878031, 25)
        warnings: list[str] = []
        value = build_value(frags, DEFAULT_REFORM, no_reference, warnings=warnings)
        assert value.offset == 35121
        assert warnings == ["Fraction of offset 878031/25 ignored"]

    def test_half_second_offset_rounds_away_from_zero(self, no_reference: Callable[[], DateValue]) -> None:
        warnings: list[str] = []
        frags = Fragments(year=2001, mon=2, mday=3, hour=1, offset=Fraction(-7, 2))
        assert build_value(frags, DEFAULT_REFORM, no_reference, warnings=warnings).offset == -4
        assert len(warnings) == 1

    def test_whole_offset_has_no_warning(self, no_reference: Callable[[], DateValue]) -> None:
        warnings: list[str] = []
        frags = Fragments(year=2001, mon=2, mday=3, hour=1, offset=Fraction(3600))
        assert build_value(frags, DEFAULT_REFORM, no_reference, warnings=warnings).offset == 3600
        assert warnings == []

    def test_unresolvable_lists_fields(self, today: Callable[[], DateValue]) -> None:
        with pytest.raises(UnresolvableFragmentsError) as exc_info:
            build_value(Fragments(year=2001, mon=2, mday=30, hour=1), DEFAULT_REFORM, today)
        assert "hour" in exc_info.value.detail["fields"]
