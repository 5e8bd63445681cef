"""Tests for the shared click parameter types."""

from __future__ import annotations

import datetime

import click
import pytest

from reformcal.commands._base import IsoDate


class TestIsoDate:
    def test_reads_iso_date(self) -> None:
        assert IsoDate().convert("1582-10-15", None, None) == datetime.date(1582, 10, 15)

    def test_passes_dates_through(self) -> None:
        day = datetime.date(2024, 3, 15)
        assert IsoDate().convert(day, None, None) is day

    def test_rejects_words(self) -> None:
        with pytest.raises(click.BadParameter, match="not a YYYY-MM-DD date"):
            IsoDate().convert("tomorrow", None, None)
