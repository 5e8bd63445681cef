"""Timing spans for service calls.

A service method decorated with ``@traced`` opens the root span and the
domain steps it runs open children with ``trace_span``.  With telemetry
off (the default) both cost one ContextVar lookup and ``meta`` stays
None.  Under ``--verbose`` the finished tree is stored in
``ServiceResult.meta["telemetry"]``.
"""

from __future__ import annotations

import functools
import time
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass, field
from typing import Any, ParamSpec, TypeVar

import structlog

from reformcal.services.result import ServiceResult

log = structlog.get_logger("reformcal.telemetry")

_enabled: ContextVar[bool] = ContextVar("reformcal_telemetry", default=False)
_active: ContextVar[Span | None] = ContextVar("reformcal_span", default=None)


@dataclass
class Span:
    """One timed step of a service call."""

    name: str
    started: float = field(default_factory=time.perf_counter)
    finished: float | None = None
    children: list[Span] = field(default_factory=list)
    annotations: dict[str, Any] = field(default_factory=dict)

    @property
    def duration_ms(self) -> float:
        if self.finished is None:
            return 0.0
        return (self.finished - self.started) * 1000

    def end(self) -> None:
        if self.finished is None:
            self.finished = time.perf_counter()

    def annotate(self, key: str, value: Any) -> None:
        self.annotations[key] = value

    def child(self, name: str) -> Span:
        span = Span(name=name)
        self.children.append(span)
        return span

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"name": self.name, "duration_ms": round(self.duration_ms, 3)}
        if self.annotations:
            data["annotations"] = dict(self.annotations)
        if self.children:
            data["children"] = [child.to_dict() for child in self.children]
        return data


def enable_telemetry() -> None:
    """Turn span collection on for the current context (``--verbose``)."""
    _enabled.set(True)


def disable_telemetry() -> None:
    _enabled.set(False)
    _active.set(None)


def get_current_span() -> Span | None:
    """The innermost open span, or None when nothing is being traced."""
    if not _enabled.get():
        return None
    return _active.get()


@contextmanager
def trace_span(name: str) -> Iterator[Span | None]:
    """Time a step inside a traced call.

    Yields None outside a ``@traced`` call, so callers guard annotations
    with ``if span:``.
    """
    parent = get_current_span()
    if parent is None:
        yield None
        return

    span = parent.child(name)
    token = _active.set(span)
    try:
        yield span
    finally:
        span.end()
        _active.reset(token)


_P = ParamSpec("_P")
_R = TypeVar("_R")


def traced(func: Callable[_P, _R]) -> Callable[_P, _R]:  # noqa: UP047
    """Open a root span around a service method and attach its tree to the result.

    A failed result annotates the root span with its error code.
    """

    @functools.wraps(func)
    def wrapper(*args: _P.args, **kwargs: _P.kwargs) -> _R:
        if not _enabled.get():
            return func(*args, **kwargs)

        root = Span(name=func.__qualname__)
        token = _active.set(root)
        try:
            result = func(*args, **kwargs)
        finally:
            root.end()
            _active.reset(token)

        if not isinstance(result, ServiceResult):
            return result
        if result.error is not None:
            root.annotate("error", result.error.code)
        log.debug(
            "service call traced",
            op=result.op,
            span=root.name,
            ok=result.ok,
            duration_ms=round(root.duration_ms, 3),
        )
        meta = dict(result.meta or {})
        meta["telemetry"] = root.to_dict()
        return result.model_copy(update={"meta": meta})  # type: ignore[return-value]

    return wrapper
