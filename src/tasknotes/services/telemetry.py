"""Per-operation timing for verbose runs.

With ``-v`` every :func:`traced` service call returns a span tree in
``ServiceResult.meta["telemetry"]``: a root span for the operation,
annotated with its outcome, and one child per stage opened with
:func:`trace_span` (reading the body, evaluating the transition, the
rename, the template). Without ``-v`` a call costs one ContextVar lookup.
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

from tasknotes.services.result import ServiceResult

log = structlog.get_logger("tasknotes.telemetry")

_enabled: ContextVar[bool] = ContextVar("tasknotes_telemetry", default=False)
_active_span: ContextVar[Span | None] = ContextVar("tasknotes_active_span", default=None)


@dataclass
class Span:
    """One timed stage of a service call."""

    name: str
    annotations: dict[str, Any] = field(default_factory=dict)
    children: list[Span] = field(default_factory=list)
    started: float = field(default_factory=time.perf_counter)
    finished: float | None = None

    @property
    def duration_ms(self) -> float:
        if self.finished is None:
            return 0.0
        return (self.finished - self.started) * 1000

    def finish(self) -> None:
        self.finished = time.perf_counter()

    def annotate(self, **values: Any) -> None:
        self.annotations.update(values)

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"name": self.name, "duration_ms": round(self.duration_ms, 2)}
        if self.annotations:
            data["annotations"] = dict(self.annotations)
        if self.children:
            data["children"] = [child.to_dict() for child in self.children]
        return data


def enable_telemetry() -> None:
    """Turn span collection on for this context (``-v``)."""
    _enabled.set(True)


def disable_telemetry() -> None:
    _enabled.set(False)


@contextmanager
def trace_span(name: str, **annotations: Any) -> Iterator[Span | None]:
    """Time a stage inside the active traced call.

    Yields None when telemetry is off or no traced call is running, so
    callers guard annotations with ``if span:``.
    """
    parent = _active_span.get() if _enabled.get() else None
    if parent is None:
        yield None
        return

    span = Span(name=name, annotations=dict(annotations))
    parent.children.append(span)
    token = _active_span.set(span)
    try:
        yield span
    finally:
        span.finish()
        _active_span.reset(token)


def _outcome(result: ServiceResult) -> dict[str, Any]:
    outcome: dict[str, Any] = {"op": result.op, "ok": result.ok}
    if result.error is not None:
        outcome["code"] = result.error.code
    path = result.data.get("path")
    if isinstance(path, str):
        outcome["path"] = path
    return outcome


_P = ParamSpec("_P")
_R = TypeVar("_R")


def traced(func: Callable[_P, _R]) -> Callable[_P, _R]:
    """Open a root span around a service method.

    A returned :class:`ServiceResult` gets the span tree merged into its
    ``meta`` and its outcome (op, ok, error code, note path) recorded on
    the root span and in a ``span.complete`` debug log line.
    """

    @functools.wraps(func)
    def wrapper(*args: _P.args, **kwargs: _P.kwargs) -> _R:
        if not _enabled.get():
            return func(*args, **kwargs)

        span = Span(name=func.__qualname__)
        token = _active_span.set(span)
        try:
            result = func(*args, **kwargs)
        except Exception as exc:
            span.finish()
            log.debug(
                "span.complete",
                span_name=span.name,
                ok=False,
                exception=type(exc).__name__,
            )
            raise
        finally:
            _active_span.reset(token)

        span.finish()
        if isinstance(result, ServiceResult):
            span.annotate(**_outcome(result))
            meta = {**(result.meta or {}), "telemetry": span.to_dict()}
            result = result.model_copy(update={"meta": meta})  # type: ignore[assignment]
        log.debug(
            "span.complete",
            span_name=span.name,
            duration_ms=round(span.duration_ms, 2),
            stages=[child.name for child in span.children],
            **span.annotations,
        )
        return result

    return wrapper
