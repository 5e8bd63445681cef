"""The fragment map exchanged by parser, completer, and resolver.

Every field is optional; ``None`` means "not present".  Two transient
flags steer completion and are consumed by
:func:`reformcal.domain.completion.finalize_fragments`.
"""

from __future__ import annotations

from dataclasses import dataclass, field, fields, replace
from fractions import Fraction
from typing import Any

FIELD_NAMES: tuple[str, ...] = (
    "year",
    "mon",
    "mday",
    "yday",
    "cwyear",
    "cweek",
    "cwday",
    "wday",
    "wnum0",
    "wnum1",
    "hour",
    "min",
    "sec",
    "sec_fraction",
    "zone",
    "offset",
    "jd",
    "seconds",
    "leftover",
)


@dataclass
class Fragments:
    """Loosely-typed date/time fields recovered from text."""

    year: int | None = None
    mon: int | None = None
    mday: int | None = None
    yday: int | None = None
    cwyear: int | None = None
    cweek: int | None = None
    cwday: int | None = None
    wday: int | None = None
    wnum0: int | None = None
    wnum1: int | None = None
    hour: int | None = None
    min: int | None = None
    sec: int | None = None
    sec_fraction: Fraction | None = None
    zone: str | None = None
    offset: int | Fraction | None = None
    jd: int | None = None
    seconds: int | Fraction | None = None
    leftover: str | None = None

    # Completion-control flags, not part of the public field set.
    needs_century_completion: bool | None = field(default=None, repr=False)
    is_bc_era: bool = field(default=False, repr=False)

    def has(self, name: str) -> bool:
        return getattr(self, name) is not None

    def count(self, names: tuple[str, ...]) -> int:
        return sum(1 for name in names if getattr(self, name) is not None)

    def copy(self) -> Fragments:
        return replace(self)

    def is_empty(self) -> bool:
        return not any(getattr(self, name) is not None for name in FIELD_NAMES)

    def to_dict(self) -> dict[str, Any]:
        """Present fields only, in declaration order."""
        return {
            f.name: getattr(self, f.name)
            for f in fields(self)
            if f.name in FIELD_NAMES and getattr(self, f.name) is not None
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Fragments:
        unknown = set(data) - set(FIELD_NAMES)
        if unknown:
            msg = f"unknown fragment fields: {', '.join(sorted(unknown))}"
            raise KeyError(msg)
        return cls(**data)
