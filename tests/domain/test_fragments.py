"""Tests for the Fragments map."""

from __future__ import annotations

from fractions import Fraction

import pytest

from reformcal.domain.fragments import FIELD_NAMES, Fragments


class TestFragments:
    def test_empty(self) -> None:
        frags = Fragments()
        assert frags.is_empty()
        assert frags.to_dict() == {}

    def test_flags_do_not_count_as_fields(self) -> None:
        frags = Fragments(needs_century_completion=True, is_bc_era=True)
        assert frags.is_empty()
        assert "is_bc_era" not in frags.to_dict()

    def test_has_and_count(self) -> None:
        frags = Fragments(year=2001, mday=3)
        assert frags.has("year")
        assert not frags.has("mon")
        assert frags.count(("year", "mon", "mday")) == 2

    def test_zero_is_present(self) -> None:
        assert Fragments(hour=0).has("hour")

    def test_copy_is_independent(self) -> None:
        frags = Fragments(year=2001)
        clone = frags.copy()
        clone.year = 1999
        assert frags.year == 2001

    def test_to_dict_keeps_field_order(self) -> None:
        frags = Fragments(sec_fraction=Fraction(1, 2), year=2001, wday=6)
        assert list(frags.to_dict()) == ["year", "wday", "sec_fraction"]

    def test_from_dict_round_trip(self) -> None:
        data = {"year": 2001, "mon": 2, "zone": "GMT", "offset": 0}
        assert Fragments.from_dict(data).to_dict() == data

    def test_from_dict_rejects_unknown_fields(self) -> None:
        with pytest.raises(KeyError, match="bogus"):
            Fragments.from_dict({"bogus": 1})

    def test_field_names_cover_dataclass(self) -> None:
        assert set(FIELD_NAMES) <= set(Fragments.__dataclass_fields__)
