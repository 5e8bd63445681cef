"""Shared pytest fixtures and test helpers for reformcal tests."""

from __future__ import annotations

import datetime
import logging
from collections.abc import Callable, Generator

import pytest
import structlog
from click.testing import CliRunner

from reformcal.config.settings import CalendarSettings
from reformcal.domain.reform import DEFAULT_REFORM
from reformcal.domain.value import DateValue
from reformcal.services.telemetry import disable_telemetry

REFERENCE_DAY = datetime.date(2024, 3, 15)  # a Friday


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture(autouse=True)
def _restore_logging() -> Generator[None]:
    """Undo handler and level changes made by configure_logging()."""
    root = logging.getLogger()
    original_handlers = root.handlers[:]
    original_level = root.level
    pkg = logging.getLogger("reformcal")
    pkg_level = pkg.level
    yield
    root.handlers = original_handlers
    root.setLevel(original_level)
    pkg.setLevel(pkg_level)
    structlog.contextvars.clear_contextvars()


@pytest.fixture(autouse=True)
def _reset_telemetry() -> Generator[None]:
    """The --verbose flag enables telemetry for the whole context."""
    yield
    disable_telemetry()


@pytest.fixture(autouse=True)
def _isolated_config(tmp_path_factory: pytest.TempPathFactory, monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep host config files and REFORMCAL_* env vars out of every test."""
    monkeypatch.delenv("REFORMCAL_CONFIG", raising=False)
    monkeypatch.delenv("REFORMCAL_REFORM", raising=False)
    monkeypatch.chdir(tmp_path_factory.mktemp("cwd"))


@pytest.fixture
def settings() -> CalendarSettings:
    """Default settings with no TOML file."""
    return CalendarSettings.from_cli()


@pytest.fixture
def today() -> Callable[[], DateValue]:
    """Reference-date provider pinned to 2024-03-15."""
    return lambda: DateValue.from_date(REFERENCE_DAY, DEFAULT_REFORM)


@pytest.fixture
def no_reference() -> Callable[[], DateValue]:
    """Reference provider for cases that must not need one."""

    def provide() -> DateValue:
        raise AssertionError("reference date was requested")

    return provide
