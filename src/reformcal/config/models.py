"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults live here, reformcal.toml only holds overrides.
"""

from __future__ import annotations

from pydantic import BaseModel, Field, field_validator

from reformcal.domain.reform import CalendarReform


class CalendarConfig(BaseModel):
    """[calendar] section."""

    model_config = {"frozen": True}

    # "italy", "england", "julian", "gregorian", or a cutover JDN
    reform: str | int = "italy"

    @field_validator("reform")
    @classmethod
    def _known_reform(cls, value: str | int) -> str | int:
        CalendarReform.coerce(value)
        return value


class ParserConfig(BaseModel):
    """[parser] section."""

    model_config = {"frozen": True}

    limit: int | None = Field(default=128, ge=1)
    complete_century: bool = True


class OutputConfig(BaseModel):
    """[output] section."""

    model_config = {"frozen": True}

    fraction_digits: int = Field(default=0, ge=0, le=9)
