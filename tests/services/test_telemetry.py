"""Tests for service telemetry spans."""

from __future__ import annotations

import pytest

from reformcal.config.settings import CalendarSettings
from reformcal.services.convert import ConvertService
from reformcal.services.parse import ParseService
from reformcal.services.result import ServiceError, ServiceResult
from reformcal.services.telemetry import (
    Span,
    enable_telemetry,
    get_current_span,
    trace_span,
    traced,
)


@traced
def _lookup(ok: bool = True) -> ServiceResult:
    with trace_span("table") as span:
        if span:
            span.annotate("rows", 12)
        with trace_span("row"):
            pass
    if ok:
        return ServiceResult(ok=True, op="lookup", meta={"source": "names"})
    return ServiceResult(ok=False, op="lookup", error=ServiceError(code="NOT_FOUND", message="no such month"))


class TestSpan:
    def test_open_span_has_no_duration(self) -> None:
        assert Span(name="resolve").duration_ms == 0.0

    def test_end_is_idempotent(self) -> None:
        span = Span(name="resolve")
        span.end()
        first = span.finished
        span.end()
        assert span.finished == first
        assert span.duration_ms >= 0

    def test_child_is_attached(self) -> None:
        root = Span(name="parse")
        child = root.child("parse_text")
        assert root.children == [child]

    def test_to_dict_omits_empty_parts(self) -> None:
        span = Span(name="leap")
        span.end()
        assert set(span.to_dict()) == {"name", "duration_ms"}

    def test_to_dict_nests(self) -> None:
        root = Span(name="parse")
        root.child("resolve").annotate("strategy", "civil")
        data = root.to_dict()
        assert data["children"][0]["name"] == "resolve"
        assert data["children"][0]["annotations"] == {"strategy": "civil"}


class TestTraceSpan:
    def test_disabled_yields_none(self) -> None:
        with trace_span("resolve") as span:
            assert span is None

    def test_outside_traced_call_yields_none(self) -> None:
        enable_telemetry()
        with trace_span("resolve") as span:
            assert span is None
        assert get_current_span() is None


class TestTraced:
    def test_disabled_leaves_meta_alone(self) -> None:
        assert _lookup().meta == {"source": "names"}

    def test_tree_attached(self) -> None:
        enable_telemetry()
        meta = _lookup().meta
        assert meta is not None
        assert meta["source"] == "names"
        tree = meta["telemetry"]
        assert tree["name"] == "_lookup"
        assert tree["children"][0]["annotations"] == {"rows": 12}
        assert tree["children"][0]["children"][0]["name"] == "row"

    def test_failure_annotates_error_code(self) -> None:
        enable_telemetry()
        meta = _lookup(ok=False).meta
        assert meta is not None
        assert meta["telemetry"]["annotations"] == {"error": "NOT_FOUND"}

    def test_plain_return_values_pass_through(self) -> None:
        @traced
        def year() -> int:
            return 1582

        enable_telemetry()
        assert year() == 1582

    def test_exception_closes_root(self) -> None:
        @traced
        def broken() -> ServiceResult:
            raise RuntimeError("boom")

        enable_telemetry()
        with pytest.raises(RuntimeError):
            broken()
        assert get_current_span() is None


class TestServices:
    def test_parse_tree(self, settings: CalendarSettings) -> None:
        enable_telemetry()
        result = ParseService(settings).parse("2001-02-03")
        assert result.ok
        assert result.meta is not None
        tree = result.meta["telemetry"]
        assert tree["name"] == "ParseService.parse"
        assert [c["name"] for c in tree["children"]] == ["parse_text", "resolve"]
        assert tree["children"][0]["annotations"] == {"fields": 3}

    def test_failed_parse_is_traced(self, settings: CalendarSettings) -> None:
        enable_telemetry()
        result = ParseService(settings).parse("hello world")
        assert not result.ok
        assert result.meta is not None
        assert result.meta["telemetry"]["annotations"] == {"error": "UNRESOLVABLE_FRAGMENTS"}

    def test_convert_tree(self, settings: CalendarSettings) -> None:
        enable_telemetry()
        result = ConvertService(settings).convert("civil", (2001, 2, 3))
        assert result.meta is not None
        children = result.meta["telemetry"]["children"]
        assert [c["name"] for c in children] == ["construct", "describe"]
        assert children[0]["annotations"] == {"system": "civil"}

    def test_quiet_without_verbose(self, settings: CalendarSettings) -> None:
        result = ConvertService(settings).convert("jd", (2451944,))
        assert result.ok
        assert result.meta is None
