"""Error taxonomy for the calendar engine.

Validators in :mod:`reformcal.domain.validation` report failure by
returning ``None``.  Constructors and resolvers turn that into one of the
typed exceptions below; the service layer turns those into a failed
:class:`~reformcal.services.result.ServiceResult` keyed by :class:`ErrorCode`.
"""

from __future__ import annotations

from enum import StrEnum
from typing import Any


class ErrorCode(StrEnum):
    """Stable error codes surfaced in ``ServiceError.code``."""

    INVALID_COORDINATE = "INVALID_COORDINATE"
    INVALID_REFORM = "INVALID_REFORM"
    INPUT_TOO_LONG = "INPUT_TOO_LONG"
    UNRESOLVABLE_FRAGMENTS = "UNRESOLVABLE_FRAGMENTS"
    MALFORMED_FIXED_FORMAT = "MALFORMED_FIXED_FORMAT"


class CalendarError(ValueError):
    """Base class for every failure raised by the calendar engine."""

    code: ErrorCode = ErrorCode.INVALID_COORDINATE

    def __init__(self, message: str, **detail: Any) -> None:
        super().__init__(message)
        self.message = message
        self.detail = detail


class InvalidCoordinateError(CalendarError):
    """Coordinate fields failed validation or the round-trip check."""

    code = ErrorCode.INVALID_COORDINATE


class InvalidReformError(CalendarError):
    """A reform value lies outside the historical reform window."""

    code = ErrorCode.INVALID_REFORM


class InputTooLongError(CalendarError):
    """Parser input exceeds the configured length limit."""

    code = ErrorCode.INPUT_TOO_LONG


class UnresolvableFragmentsError(CalendarError):
    """Completion and resolution produced no valid coordinate."""

    code = ErrorCode.UNRESOLVABLE_FRAGMENTS


class MalformedFixedFormatError(CalendarError):
    """A fixed-format matcher did not accept the input."""

    code = ErrorCode.MALFORMED_FIXED_FORMAT
