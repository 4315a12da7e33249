"""Utility functions and decorators for distributed tracing."""

import inspect
from collections.abc import Callable
from functools import wraps
from typing import Any

from opentelemetry import trace
from opentelemetry.trace import Status, StatusCode

# Only these kwarg names are copied onto spans (case-insensitive). Filter
# values and free-text queries are user data and stay off spans.
_SAFE_SPAN_ATTR_KEYS = frozenset({"facet", "limit", "strategy", "dedupe"})


def _set_safe_span_attrs(span: trace.Span, kwargs: dict[str, Any]) -> None:
    for key, value in kwargs.items():
        if not key.startswith("_") and key.lower() in _SAFE_SPAN_ATTR_KEYS:
            span.set_attribute(f"arg.{key}", str(value))


def traced(
    operation_name: str | None = None,
    attributes: dict[str, str | int | float | bool] | None = None,
) -> Callable:
    """Decorator to create a span around a function (sync or async).

    Exceptions mark the span as ERROR, are recorded, and re-raised.

    Args:
        operation_name: Span name (defaults to module.funcname).
        attributes: Optional static attributes to set on the span.

    Returns:
        Decorated function.
    """

    def decorator(func: Callable) -> Callable:
        tracer = trace.get_tracer(__name__)
        span_name = operation_name or f"{func.__module__}.{func.__name__}"

        def _start() -> Any:
            return tracer.start_as_current_span(
                span_name, record_exception=True, set_status_on_exception=True
            )

        def _annotate(span: trace.Span, kwargs: dict[str, Any]) -> None:
            if attributes:
                for key, value in attributes.items():
                    span.set_attribute(key, value)
            _set_safe_span_attrs(span, kwargs)

        @wraps(func)
        async def async_wrapper(*args: Any, **kwargs: Any) -> Any:
            with _start() as span:
                _annotate(span, kwargs)
                result = await func(*args, **kwargs)
                span.set_status(Status(StatusCode.OK))
                return result

        @wraps(func)
        def sync_wrapper(*args: Any, **kwargs: Any) -> Any:
            with _start() as span:
                _annotate(span, kwargs)
                result = func(*args, **kwargs)
                span.set_status(Status(StatusCode.OK))
                return result

        if inspect.iscoroutinefunction(func):
            return async_wrapper
        return sync_wrapper

    return decorator


def add_span_attributes(**attributes: str | int | float | bool) -> None:
    """Add attributes to the current span."""
    span = trace.get_current_span()
    if span and span.is_recording():
        for key, value in attributes.items():
            span.set_attribute(key, value)
