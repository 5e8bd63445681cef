"""ParseService: text to fragments, and text to date values.

Two surfaces:
- fragments: run a parser and report the raw fragment map
- parse: run a parser, complete the fragments, and resolve a DateValue

Free-form text goes through the loose parser; named formats go through
the strict fixed-format matchers.  Both feed the same resolver.
"""

from __future__ import annotations

import datetime
import logging
from fractions import Fraction
from typing import Any

from reformcal.domain.errors import CalendarError
from reformcal.domain.formats import match_fixed
from reformcal.domain.formatting import iso8601
from reformcal.domain.fragments import Fragments
from reformcal.domain.parser import parse_fragments
from reformcal.domain.reform import CalendarReform
from reformcal.domain.resolver import build_value
from reformcal.domain.value import DateValue
from reformcal.services.base import BaseService
from reformcal.services.result import ServiceResult
from reformcal.services.telemetry import trace_span, traced

logger = logging.getLogger(__name__)

FREE_FORM = "free"

_TIME_FIELDS = ("hour", "min", "sec", "sec_fraction", "seconds")


def plain_fragments(frags: Fragments) -> dict[str, Any]:
    """Fragment fields as JSON-friendly values (fractions become strings)."""
    return {
        key: str(value) if isinstance(value, Fraction) else value
        for key, value in frags.to_dict().items()
    }


class ParseService(BaseService):
    """Parses date/time text under the configured reform and limits."""

    def parse_text(self, text: str, fmt: str = FREE_FORM, complete_century: bool | None = None) -> Fragments:
        """Fragments for *text* from the free-form parser or a fixed-format matcher.

        Raises:
            InputTooLongError: When *text* exceeds the configured limit.
            MalformedFixedFormatError: When *text* does not fit *fmt*.
        """
        parser = self._settings.parser
        if fmt == FREE_FORM:
            comp = parser.complete_century if complete_century is None else complete_century
            return parse_fragments(text, complete_century=comp, limit=parser.limit)
        return match_fixed(fmt, text, limit=parser.limit)

    def resolve_text(
        self,
        text: str,
        policy: CalendarReform,
        warnings: list[str],
        *,
        fmt: str = FREE_FORM,
        complete_century: bool | None = None,
        with_time: bool | None = None,
        today: datetime.date | None = None,
    ) -> tuple[Fragments, DateValue]:
        """Parse and resolve *text*; raises the domain's CalendarError on failure."""
        with trace_span("parse_text") as span:
            frags = self.parse_text(text, fmt, complete_century)
            if span:
                span.annotate("fields", len(frags.to_dict()))
        timed = with_time if with_time is not None else any(frags.has(f) for f in _TIME_FIELDS)
        with trace_span("resolve"):
            value = build_value(
                frags,
                policy,
                self._reference(policy, today),
                with_time=timed,
                warnings=warnings,
            )
        return frags, value

    # ------------------------------------------------------------------
    # fragments: raw parser output
    # ------------------------------------------------------------------

    @traced
    def fragments(
        self,
        text: str,
        *,
        fmt: str = FREE_FORM,
        complete_century: bool | None = None,
    ) -> ServiceResult:
        """Parse *text* and return the fragment map without resolving it."""
        try:
            frags = self.parse_text(text, fmt, complete_century)
        except CalendarError as exc:
            return ServiceResult.failure("fragments", exc)
        return ServiceResult(
            ok=True,
            op="fragments",
            data={"input": text, "format": fmt, "fragments": plain_fragments(frags)},
        )

    # ------------------------------------------------------------------
    # parse: text to DateValue
    # ------------------------------------------------------------------

    @traced
    def parse(
        self,
        text: str,
        *,
        fmt: str = FREE_FORM,
        complete_century: bool | None = None,
        with_time: bool | None = None,
        today: datetime.date | None = None,
        reform: Any = None,
    ) -> ServiceResult:
        """Parse *text* into a date value.

        Args:
            text: Input text.
            fmt: ``"free"`` or a fixed format name (``iso8601``, ``rfc3339``,
                ``xmlschema``, ``rfc2822``, ``httpdate``, ``jisx0301``).
            complete_century: Override the configured two-digit year completion.
            with_time: Force a timed or pure-date result.  By default the
                result is timed when the text carries time fields.
            today: Reference date for completing partial input.
            reform: Reform override (name, JDN, or policy).
        """
        warnings: list[str] = []
        try:
            policy = self._reform(reform, warnings)
            frags, value = self.resolve_text(
                text,
                policy,
                warnings,
                fmt=fmt,
                complete_century=complete_century,
                with_time=with_time,
                today=today,
            )
        except CalendarError as exc:
            logger.debug("parse failed: %s", exc)
            return ServiceResult.failure("parse", exc, warnings)

        data = value.to_dict()
        data["text"] = iso8601(value, self._settings.output.fraction_digits)
        data["input"] = text
        data["format"] = fmt
        data["fragments"] = plain_fragments(frags)
        return ServiceResult(ok=True, op="parse", data=data, warnings=warnings)
