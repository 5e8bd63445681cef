"""Tests for the config section models."""

import pytest
from pydantic import ValidationError

from reformcal.config.models import CalendarConfig, OutputConfig, ParserConfig


class TestCalendarConfig:
    def test_default_reform(self) -> None:
        assert CalendarConfig().reform == "italy"

    @pytest.mark.parametrize("reform", ["england", "JULIAN", "gregorian", 2361222, "2299161"])
    def test_accepts_known_reforms(self, reform: str | int) -> None:
        assert CalendarConfig(reform=reform).reform == reform

    def test_rejects_unknown_name(self) -> None:
        with pytest.raises(ValidationError):
            CalendarConfig(reform="mars")

    def test_frozen(self) -> None:
        cfg = CalendarConfig()
        with pytest.raises(ValidationError):
            cfg.reform = "julian"  # type: ignore[misc]


class TestParserConfig:
    def test_defaults(self) -> None:
        cfg = ParserConfig()
        assert cfg.limit == 128
        assert cfg.complete_century is True

    def test_limit_can_be_disabled(self) -> None:
        assert ParserConfig(limit=None).limit is None

    def test_limit_must_be_positive(self) -> None:
        with pytest.raises(ValidationError):
            ParserConfig(limit=0)


class TestOutputConfig:
    def test_default(self) -> None:
        assert OutputConfig().fraction_digits == 0

    @pytest.mark.parametrize("digits", [-1, 10])
    def test_bounds(self, digits: int) -> None:
        with pytest.raises(ValidationError):
            OutputConfig(fraction_digits=digits)
