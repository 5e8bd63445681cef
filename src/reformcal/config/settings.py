"""CalendarSettings: CLI flags, env vars, and ``reformcal.toml`` in one object.

Priority chain (highest to lowest):
  1. Init kwargs  (CLI flags passed by Click)
  2. Env vars     (``REFORMCAL_*`` prefix, ``__`` for nested sections,
                   e.g. ``REFORMCAL_PARSER__LIMIT=64``)
  3. TOML file    (``reformcal.toml`` discovered via walk-up)
  4. Code defaults baked into the section models
"""

from __future__ import annotations

import logging
import threading
import tomllib
from collections.abc import Collection
from pathlib import Path
from typing import Any

import click
from pydantic import Field
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource, SettingsConfigDict

from reformcal.config.discovery import find_config
from reformcal.config.models import CalendarConfig, OutputConfig, ParserConfig

logger = logging.getLogger(__name__)

SECTIONS = ("calendar", "parser", "output")


def load_toml(path: Path, known: Collection[str] = SECTIONS) -> dict[str, Any]:
    """Read the top-level keys of *path* named in *known*.

    Anything else is dropped with a warning.

    Raises:
        click.ClickException: The file is not valid TOML.
    """
    try:
        data = tomllib.loads(path.read_text(encoding="utf-8"))
    except tomllib.TOMLDecodeError as exc:
        raise click.ClickException(f"Invalid TOML in {path}: {exc}") from exc
    for key in sorted(set(data) - set(known)):
        logger.warning("ignoring unknown key %r in %s", key, path)
    return {key: value for key, value in data.items() if key in known}


class TomlSettingsSource(PydanticBaseSettingsSource):
    """Settings source backed by a ``reformcal.toml`` file."""

    def __init__(self, settings_cls: type[BaseSettings], toml_path: Path | None) -> None:
        super().__init__(settings_cls)
        self._sections: dict[str, Any] = {}
        if toml_path and toml_path.is_file():
            self._sections = load_toml(toml_path, settings_cls.model_fields)

    def get_field_value(self, field: Any, field_name: str) -> tuple[Any, str, bool]:
        return self._sections.get(field_name), field_name, field_name in self._sections

    def __call__(self) -> dict[str, Any]:
        return dict(self._sections)


# The TOML path for the settings object being built on this thread.
_building = threading.local()


class CalendarSettings(BaseSettings):
    """Settings for the reformcal CLI and services.

    Attributes:
        config_path: The TOML file in use, or None.
        reform: ``--reform`` override; wins over ``[calendar] reform``.
    """

    model_config = SettingsConfigDict(
        frozen=True,
        env_prefix="REFORMCAL_",
        env_nested_delimiter="__",
    )

    config_path: Path | None = None

    # --- CLI flags ---
    json_output: bool = False
    quiet: bool = False
    verbose: bool = False
    log_json: bool = False
    reform: str | None = None

    # --- TOML sections ---
    calendar: CalendarConfig = Field(default_factory=CalendarConfig)
    parser: ParserConfig = Field(default_factory=ParserConfig)
    output: OutputConfig = Field(default_factory=OutputConfig)

    @property
    def effective_reform(self) -> str | int:
        return self.reform if self.reform is not None else self.calendar.reform

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        toml = TomlSettingsSource(settings_cls, getattr(_building, "toml_path", None))
        return init_settings, env_settings, toml

    @classmethod
    def from_cli(
        cls,
        *,
        config_path: str | None = None,
        start: Path | None = None,
        **cli_flags: Any,
    ) -> CalendarSettings:
        """Build settings for one CLI invocation.

        *config_path* names the TOML file; without it ``reformcal.toml``
        is looked up from *start*.  A missing explicit file means no file.
        Flags left at None do not shadow env vars or TOML values.
        """
        if config_path:
            explicit = Path(config_path)
            toml_path = explicit if explicit.is_file() else None
        else:
            toml_path = find_config(start)

        _building.toml_path = toml_path
        try:
            return cls(
                config_path=toml_path,
                **{name: value for name, value in cli_flags.items() if value is not None},
            )
        finally:
            _building.toml_path = None
