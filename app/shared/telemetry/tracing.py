"""Span helpers used by the Snipe-IT client and the audit/asset services."""

import asyncio
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from functools import wraps
from typing import Any

from opentelemetry import trace
from opentelemetry.trace import Status, StatusCode

_tracer = trace.get_tracer("app")

# Keyword arguments copied onto spans. Tokens and passwords never appear here.
SPAN_ARGUMENTS = frozenset(
    {
        "asset_id",
        "asset_tag",
        "audit_id",
        "audit_ids",
        "location_id",
        "force_refresh",
        "resolved_by",
        "user_name",
    }
)


@contextmanager
def _span(name: str, static: dict | None, kwargs: dict[str, Any]) -> Iterator[trace.Span]:
    with _tracer.start_as_current_span(name, record_exception=False) as span:
        for key, value in (static or {}).items():
            span.set_attribute(key, value)
        for key, value in kwargs.items():
            if key in SPAN_ARGUMENTS:
                span.set_attribute(f"arg.{key}", str(value))
        try:
            yield span
        except Exception as e:
            span.record_exception(e)
            span.set_status(Status(StatusCode.ERROR, str(e)))
            raise
        span.set_status(Status(StatusCode.OK))


def traced(operation_name: str | None = None, attributes: dict | None = None) -> Callable:
    """Wrap a function (sync or async) in a span named ``operation_name``.

    With no tracer provider registered the API hands out non-recording
    spans, so decorated code behaves the same when telemetry is off.
    Exceptions are recorded on the span and re-raised unchanged.
    """

    def decorator(func: Callable) -> Callable:
        name = operation_name or f"{func.__module__}.{func.__qualname__}"

        if asyncio.iscoroutinefunction(func):

            @wraps(func)
            async def run_async(*args: Any, **kwargs: Any) -> Any:
                with _span(name, attributes, kwargs):
                    return await func(*args, **kwargs)

            return run_async

        @wraps(func)
        def run(*args: Any, **kwargs: Any) -> Any:
            with _span(name, attributes, kwargs):
                return func(*args, **kwargs)

        return run

    return decorator


def add_span_attributes(**attributes: str | int | float | bool) -> None:
    span = trace.get_current_span()
    if span.is_recording():
        span.set_attributes(attributes)


def get_trace_id() -> str | None:
    """Hex trace id of the active span, for correlating error logs."""
    ctx = trace.get_current_span().get_span_context()
    return format(ctx.trace_id, "032x") if ctx.is_valid else None
