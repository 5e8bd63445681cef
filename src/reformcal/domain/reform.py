"""Julian/Gregorian reform policy.

A reform is either one of two proleptic sentinels (always Julian, always
Gregorian) or a cutover JDN: days before it use Julian rules, days on or
after it use Gregorian rules.  Cutover values must lie inside the
historical reform window; :meth:`CalendarReform.coerce` replaces values
outside it with :data:`DEFAULT_REFORM` and logs a warning.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from enum import StrEnum
from typing import Any

from reformcal.domain.errors import InvalidReformError

logger = logging.getLogger(__name__)

ITALY = 2299161  # 1582-10-15
ENGLAND = 2361222  # 1752-09-14

REFORM_BEGIN_JD = 2298874  # 1582-01-01
REFORM_END_JD = 2426355  # 1930-12-31

REFORM_BEGIN_YEAR = 1582
REFORM_END_YEAR = 1930


class ReformKind(StrEnum):
    """The three shapes a reform policy can take."""

    JULIAN = "julian"
    GREGORIAN = "gregorian"
    CUTOVER = "cutover"


@dataclass(frozen=True)
class CalendarReform:
    """Reform policy: a sentinel kind, plus the cutover JDN for ``CUTOVER``."""

    kind: ReformKind
    start: int | None = None

    def __post_init__(self) -> None:
        if self.kind is ReformKind.CUTOVER:
            if self.start is None or not valid_start(self.start):
                raise InvalidReformError(
                    f"reform start {self.start} is outside {REFORM_BEGIN_JD}..{REFORM_END_JD}",
                    start=self.start,
                )
        elif self.start is not None:
            raise InvalidReformError(f"{self.kind} reform takes no start", start=self.start)

    # --- Constructors ---

    @classmethod
    def julian(cls) -> CalendarReform:
        return cls(ReformKind.JULIAN)

    @classmethod
    def gregorian(cls) -> CalendarReform:
        return cls(ReformKind.GREGORIAN)

    @classmethod
    def cutover(cls, jd: int) -> CalendarReform:
        return cls(ReformKind.CUTOVER, jd)

    @classmethod
    def coerce(cls, value: Any, warnings: list[str] | None = None) -> CalendarReform:
        """Build a reform from a policy, a name, a JDN, or an infinity sentinel.

        Accepted names are ``italy``, ``england``, ``julian`` and
        ``gregorian`` (case-insensitive); digit strings are read as JDNs.
        ``+inf`` means always Julian and ``-inf`` always Gregorian.
        A JDN outside the reform window is replaced by the default with a
        warning, appended to *warnings* when given.  Anything else raises
        :class:`InvalidReformError`.
        """
        if isinstance(value, CalendarReform):
            return value
        if isinstance(value, str):
            name = value.strip().lower()
            if name in _NAMED:
                return _NAMED[name]
            try:
                value = int(name)
            except ValueError:
                raise InvalidReformError(f"unknown reform {value!r}", reform=value) from None
        if isinstance(value, bool):
            raise InvalidReformError(f"unknown reform {value!r}", reform=value)
        if isinstance(value, float):
            if math.isnan(value):
                return _fallback(value, warnings)
            if math.isinf(value):
                return cls.julian() if value > 0 else cls.gregorian()
            if not value.is_integer():
                return _fallback(value, warnings)
            value = int(value)
        if isinstance(value, int):
            if not valid_start(value):
                return _fallback(value, warnings)
            return cls.cutover(value)
        raise InvalidReformError(f"unknown reform {value!r}", reform=repr(value))

    # --- Queries ---

    @property
    def gregorian_only(self) -> bool:
        return self.kind is ReformKind.GREGORIAN

    @property
    def julian_only(self) -> bool:
        return self.kind is ReformKind.JULIAN

    @property
    def start_value(self) -> float:
        """The cutover as a number: ``inf`` for Julian, ``-inf`` for Gregorian."""
        if self.kind is ReformKind.JULIAN:
            return math.inf
        if self.kind is ReformKind.GREGORIAN:
            return -math.inf
        assert self.start is not None
        return float(self.start)

    def is_gregorian_at(self, jd: int) -> bool:
        """Whether Gregorian rules are in force on day *jd*."""
        if self.kind is ReformKind.GREGORIAN:
            return True
        if self.kind is ReformKind.JULIAN:
            return False
        assert self.start is not None
        return jd >= self.start

    def label(self) -> str:
        if self.kind is not ReformKind.CUTOVER:
            return str(self.kind)
        for name, reform in _NAMED.items():
            if reform == self:
                return name
        return str(self.start)

    def __str__(self) -> str:
        return self.label()


def valid_start(jd: int) -> bool:
    """Whether *jd* lies inside the historical reform window."""
    return REFORM_BEGIN_JD <= jd <= REFORM_END_JD


def _fallback(value: Any, warnings: list[str] | None) -> CalendarReform:
    logger.warning("invalid reform start %r is ignored, using %s", value, DEFAULT_REFORM)
    if warnings is not None:
        warnings.append(f"Invalid reform start {value!r} ignored; using {DEFAULT_REFORM}")
    return DEFAULT_REFORM


_NAMED: dict[str, CalendarReform] = {
    "italy": CalendarReform(ReformKind.CUTOVER, ITALY),
    "england": CalendarReform(ReformKind.CUTOVER, ENGLAND),
    "julian": CalendarReform(ReformKind.JULIAN),
    "gregorian": CalendarReform(ReformKind.GREGORIAN),
}

DEFAULT_REFORM = _NAMED["italy"]
