"""Tests for JDN <-> calendar coordinate conversion."""

from __future__ import annotations

import pytest

from reformcal.domain.conversion import (
    civil_to_jd,
    commercial_to_jd,
    find_fdoy,
    find_ldoy,
    gregorian_civil_to_jd,
    gregorian_jd_to_civil,
    is_leap,
    jd_to_civil,
    jd_to_commercial,
    jd_to_nth_kday,
    jd_to_ordinal,
    jd_to_wday,
    jd_to_weeknum,
    julian_civil_to_jd,
    julian_jd_to_civil,
    last_day_of_month,
    nth_kday_to_jd,
    ordinal_to_jd,
    weeknum_to_jd,
)
from reformcal.domain.reform import ENGLAND, ITALY, CalendarReform

GREGORIAN = CalendarReform.gregorian()
JULIAN = CalendarReform.julian()
ITALIAN = CalendarReform.cutover(ITALY)
ENGLISH = CalendarReform.cutover(ENGLAND)

# 2001-02-03, a Saturday
SAMPLE_JD = 2451944


class TestLeapYears:
    def test_gregorian_rules(self) -> None:
        assert is_leap(2000, GREGORIAN)
        assert not is_leap(1900, GREGORIAN)
        assert is_leap(2004, GREGORIAN)
        assert not is_leap(2001, GREGORIAN)

    def test_julian_rules(self) -> None:
        assert is_leap(1900, JULIAN)
        assert is_leap(-4, JULIAN)
        assert not is_leap(2001, JULIAN)

    def test_cutover_uses_calendar_in_force(self) -> None:
        assert is_leap(1500, ITALIAN)
        assert not is_leap(1700, ITALIAN)
        assert is_leap(1700, ENGLISH)


class TestSingleCalendar:
    def test_gregorian_known_days(self) -> None:
        assert gregorian_civil_to_jd(2000, 1, 1) == 2451545
        assert gregorian_jd_to_civil(2451545) == (2000, 1, 1)
        assert gregorian_civil_to_jd(2001, 2, 3) == SAMPLE_JD

    def test_julian_epoch(self) -> None:
        assert julian_civil_to_jd(-4712, 1, 1) == 0
        assert julian_jd_to_civil(0) == (-4712, 1, 1)

    @pytest.mark.parametrize("jd", [-100000, -1, 0, 1, 1721424, 2299160, 2451544, 2460000, 5373484])
    def test_gregorian_round_trip(self, jd: int) -> None:
        assert gregorian_civil_to_jd(*gregorian_jd_to_civil(jd)) == jd

    @pytest.mark.parametrize("jd", [-100000, -1, 0, 1, 1721424, 2299160, 2451544, 2460000, 5373484])
    def test_julian_round_trip(self, jd: int) -> None:
        assert julian_civil_to_jd(*julian_jd_to_civil(jd)) == jd


class TestReformAwareCivil:
    def test_italian_gap(self) -> None:
        assert civil_to_jd(1582, 10, 4, ITALIAN) == ITALY - 1
        assert civil_to_jd(1582, 10, 15, ITALIAN) == ITALY
        assert jd_to_civil(ITALY - 1, ITALIAN) == (1582, 10, 4)
        assert jd_to_civil(ITALY, ITALIAN) == (1582, 10, 15)

    def test_english_gap(self) -> None:
        assert jd_to_civil(ENGLAND - 1, ENGLISH) == (1752, 9, 2)
        assert jd_to_civil(ENGLAND, ENGLISH) == (1752, 9, 14)

    def test_round_trip_across_reform(self) -> None:
        for jd in range(ITALY - 400, ITALY + 400):
            assert civil_to_jd(*jd_to_civil(jd, ITALIAN), ITALIAN) == jd

    def test_round_trip_over_many_years(self) -> None:
        for jd in range(-1000000, 3000000, 9973):
            for reform in (GREGORIAN, JULIAN, ITALIAN):
                assert civil_to_jd(*jd_to_civil(jd, reform), reform) == jd

    def test_julian_only(self) -> None:
        assert civil_to_jd(2001, 1, 21, JULIAN) == SAMPLE_JD


class TestBoundaries:
    def test_first_and_last_day_of_reform_year(self) -> None:
        assert jd_to_civil(find_fdoy(1582, ITALIAN), ITALIAN) == (1582, 1, 1)
        assert jd_to_civil(find_ldoy(1582, ITALIAN), ITALIAN) == (1582, 12, 31)
        assert find_ldoy(1582, ITALIAN) - find_fdoy(1582, ITALIAN) + 1 == 355

    def test_last_day_of_month(self) -> None:
        assert last_day_of_month(2001, 2, GREGORIAN) == 28
        assert last_day_of_month(2000, 2, GREGORIAN) == 29
        assert last_day_of_month(1900, 2, JULIAN) == 29
        assert last_day_of_month(1582, 10, ITALIAN) == 31


class TestOrdinal:
    def test_to_and_from(self) -> None:
        assert ordinal_to_jd(2001, 34, GREGORIAN) == SAMPLE_JD
        assert jd_to_ordinal(SAMPLE_JD, GREGORIAN) == (2001, 34)

    def test_reform_year_skips_days(self) -> None:
        assert jd_to_ordinal(ITALY, ITALIAN) == (1582, 278)


class TestCommercial:
    def test_sample(self) -> None:
        assert jd_to_commercial(SAMPLE_JD, GREGORIAN) == (2001, 5, 6)
        assert commercial_to_jd(2001, 5, 6, GREGORIAN) == SAMPLE_JD

    def test_year_boundary_weeks(self) -> None:
        new_year = civil_to_jd(2020, 1, 1, GREGORIAN)
        assert jd_to_commercial(new_year, GREGORIAN) == (2020, 1, 3)
        assert jd_to_commercial(civil_to_jd(2019, 12, 30, GREGORIAN), GREGORIAN) == (2020, 1, 1)
        assert jd_to_commercial(civil_to_jd(2021, 1, 3, GREGORIAN), GREGORIAN) == (2020, 53, 7)


class TestWeekNumber:
    def test_sunday_based(self) -> None:
        assert jd_to_weeknum(SAMPLE_JD, 0, GREGORIAN) == (2001, 4, 6)
        assert weeknum_to_jd(2001, 4, 6, 0, GREGORIAN) == SAMPLE_JD

    def test_monday_based(self) -> None:
        assert jd_to_weeknum(SAMPLE_JD, 1, GREGORIAN) == (2001, 5, 5)
        assert weeknum_to_jd(2001, 5, 5, 1, GREGORIAN) == SAMPLE_JD


class TestNthKday:
    def test_last_monday_of_february(self) -> None:
        jd = nth_kday_to_jd(2001, 2, -1, 1, GREGORIAN)
        assert jd_to_civil(jd, GREGORIAN) == (2001, 2, 26)

    def test_first_saturday(self) -> None:
        jd = nth_kday_to_jd(2001, 2, 1, 6, GREGORIAN)
        assert jd == SAMPLE_JD
        assert jd_to_nth_kday(jd, GREGORIAN) == (2001, 2, 1, 6)


class TestWeekday:
    def test_jd_zero_is_monday(self) -> None:
        assert jd_to_wday(0) == 1

    def test_sample_is_saturday(self) -> None:
        assert jd_to_wday(SAMPLE_JD) == 6
