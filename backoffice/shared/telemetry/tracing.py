"""Tracing helpers on the OpenTelemetry API.

Spans are no-ops until a tracer provider is installed by the host process.
"""

import inspect
from collections.abc import Callable
from functools import wraps
from typing import Any

from opentelemetry import trace
from opentelemetry.trace import Status, StatusCode

# Only these kwarg names are copied onto spans; anything else may carry PII
# (application responses, notes).
_SPAN_ARG_KEYS = frozenset({
    "application_id", "template_id", "user_id", "action", "result",
    "department", "external_id",
})


def _record_ids_on_span(span: trace.Span, kwargs: dict) -> None:
    for key in _SPAN_ARG_KEYS.intersection(kwargs):
        if kwargs[key] is not None:
            span.set_attribute(f"backoffice.{key}", str(kwargs[key]))


def traced(operation_name: str | None = None) -> Callable:
    """Decorator that wraps an async use case method in a span.

    Errors are recorded on the span and re-raised unchanged.
    """

    def decorator(func: Callable) -> Callable:
        if not inspect.iscoroutinefunction(func):
            raise TypeError(f"@traced supports async callables only: {func.__qualname__}")
        tracer = trace.get_tracer(__name__)
        span_name = operation_name or f"{func.__module__}.{func.__qualname__}"

        @wraps(func)
        async def wrapper(*args: Any, **kwargs: Any) -> Any:
            with tracer.start_as_current_span(span_name) as span:
                _record_ids_on_span(span, kwargs)
                try:
                    result = await func(*args, **kwargs)
                except Exception as e:
                    span.set_status(Status(StatusCode.ERROR, str(e)))
                    span.record_exception(e)
                    raise
                span.set_status(Status(StatusCode.OK))
                return result

        return wrapper

    return decorator


def add_span_event(name: str, attributes: dict | None = None) -> None:
    """Add an event to the current span (e.g. a rate-limit backoff)."""
    span = trace.get_current_span()
    if span and span.is_recording():
        span.add_event(name, attributes=attributes or {})
