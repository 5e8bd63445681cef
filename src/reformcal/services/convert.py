"""ConvertService: coordinate conversion, date shifting, and leap-year queries.

Three surfaces:
- convert: build a day from one coordinate system and show it in all others
- shift: move a parsed date by days, months and years
- leap: whether a year has February 29 under a reform policy
"""

from __future__ import annotations

import datetime
import logging
from typing import Any

from reformcal.domain import formatting
from reformcal.domain.conversion import is_leap, last_day_of_month
from reformcal.domain.errors import CalendarError
from reformcal.domain.value import DateValue
from reformcal.services.base import BaseService
from reformcal.services.parse import ParseService
from reformcal.services.result import ServiceError, ServiceResult
from reformcal.services.telemetry import trace_span, traced

logger = logging.getLogger(__name__)

# system name -> number of integer arguments
SYSTEMS: dict[str, int] = {
    "jd": 1,
    "civil": 3,
    "ordinal": 2,
    "commercial": 3,
    "weeknum": 3,
    "nth_kday": 4,
}


def describe(value: DateValue, fraction_digits: int = 0) -> dict[str, Any]:
    """Value fields plus its rendering in every fixed format."""
    data = value.to_dict()
    data["ordinal"] = f"{formatting.format_year(value.year)}-{value.yday:03d}"
    data["commercial"] = f"{formatting.format_year(value.cwyear)}-W{value.cweek:02d}-{value.cwday}"
    data["formats"] = {
        "iso8601": formatting.iso8601(value, fraction_digits),
        "rfc3339": formatting.rfc3339(value, fraction_digits),
        "rfc2822": formatting.rfc2822(value),
        "httpdate": formatting.httpdate(value),
        "jisx0301": formatting.jisx0301(value, fraction_digits),
        "asctime": formatting.asctime(value),
    }
    return data


class ConvertService(BaseService):
    """Converts between coordinate systems under a reform policy."""

    @traced
    def convert(
        self,
        system: str,
        values: tuple[int, ...],
        *,
        first: int = 0,
        reform: Any = None,
    ) -> ServiceResult:
        """Build a day from *values* in *system* and describe it.

        Args:
            system: One of :data:`SYSTEMS`.
            values: The coordinate fields, in the system's order.
            first: First weekday for ``weeknum`` (0 Sunday, 1 Monday).
            reform: Reform override.
        """
        arity = SYSTEMS.get(system)
        if arity is None:
            return ServiceResult(
                ok=False,
                op="convert",
                error=ServiceError(
                    code="UNKNOWN_SYSTEM",
                    message=f"Unknown coordinate system: {system}",
                    detail={"known": sorted(SYSTEMS)},
                ),
            )
        if len(values) != arity:
            return ServiceResult(
                ok=False,
                op="convert",
                error=ServiceError(
                    code="BAD_ARGUMENTS",
                    message=f"{system} takes {arity} values, got {len(values)}",
                ),
            )

        warnings: list[str] = []
        try:
            policy = self._reform(reform, warnings)
            with trace_span("construct") as span:
                if span:
                    span.annotate("system", system)
                if system == "jd":
                    value = DateValue.from_jd(values[0], policy)
                elif system == "civil":
                    value = DateValue.civil(*values, reform=policy)
                elif system == "ordinal":
                    value = DateValue.ordinal(*values, reform=policy)
                elif system == "commercial":
                    value = DateValue.commercial(*values, reform=policy)
                elif system == "weeknum":
                    value = DateValue.weeknum(*values, first=first, reform=policy)
                else:
                    value = DateValue.nth_kday(*values, reform=policy)
        except CalendarError as exc:
            return ServiceResult.failure("convert", exc, warnings)

        with trace_span("describe"):
            data = describe(value, self._settings.output.fraction_digits)
        data["system"] = system
        data["input"] = list(values)
        return ServiceResult(ok=True, op="convert", data=data, warnings=warnings)

    @traced
    def shift(
        self,
        text: str,
        *,
        days: int = 0,
        months: int = 0,
        years: int = 0,
        today: datetime.date | None = None,
        reform: Any = None,
    ) -> ServiceResult:
        """Parse *text*, then move it by *years* and *months* (day clamped), then *days*."""
        warnings: list[str] = []
        try:
            policy = self._reform(reform, warnings)
            _, start = ParseService(self._settings).resolve_text(text, policy, warnings, today=today)
            moved = start.shift_months(years * 12 + months) + days
        except CalendarError as exc:
            return ServiceResult.failure("shift", exc, warnings)

        digits = self._settings.output.fraction_digits
        return ServiceResult(
            ok=True,
            op="shift",
            data={
                "input": text,
                "from": formatting.iso8601(start, digits),
                "to": formatting.iso8601(moved, digits),
                "days": days,
                "months": months,
                "years": years,
                "elapsed_days": str(moved - start),
                "value": moved.to_dict(),
            },
            warnings=warnings,
        )

    @traced
    def leap(self, year: int, *, reform: Any = None) -> ServiceResult:
        """Whether *year* is a leap year, with the length of its February."""
        warnings: list[str] = []
        try:
            policy = self._reform(reform, warnings)
            result = is_leap(year, policy)
            february = last_day_of_month(year, 2, policy)
        except CalendarError as exc:
            return ServiceResult.failure("leap", exc, warnings)
        return ServiceResult(
            ok=True,
            op="leap",
            data={
                "year": year,
                "leap": result,
                "reform": policy.label(),
                "february_days": february,
            },
            warnings=warnings,
        )
