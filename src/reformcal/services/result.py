"""ServiceResult and ServiceError: the contract every service returns.

The CLI and any other front end consume this type; domain exceptions
never cross it.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field

from reformcal.domain.errors import CalendarError


class ServiceError(BaseModel):
    """Structured error payload within a ServiceResult."""

    model_config = {"frozen": True}

    code: str
    message: str
    detail: dict[str, Any] = Field(default_factory=dict)

    @classmethod
    def from_exception(cls, exc: CalendarError) -> ServiceError:
        return cls(code=str(exc.code), message=exc.message, detail=exc.detail)


class ServiceResult(BaseModel):
    """Return type for all service operations.

    Attributes:
        ok: Whether the operation succeeded.
        op: Name of the operation (e.g. ``"parse"``).
        data: Operation-specific payload on success.
        warnings: Non-fatal issues, such as a replaced reform start.
        error: Structured error if ``ok`` is False.
        meta: Optional metadata (timing spans in verbose mode).
    """

    model_config = {"frozen": True}

    ok: bool
    op: str
    data: dict[str, Any] = Field(default_factory=dict)
    warnings: list[str] = Field(default_factory=list)
    error: ServiceError | None = None
    meta: dict[str, Any] | None = None

    @classmethod
    def failure(cls, op: str, exc: CalendarError, warnings: list[str] | None = None) -> ServiceResult:
        """Failed result carrying the exception's code, message, and detail."""
        return cls(
            ok=False,
            op=op,
            error=ServiceError.from_exception(exc),
            warnings=list(warnings or []),
        )
