"""Span helpers for search operations.

Spans opened by traced() carry the collection kind, tenant and per-kind
limit of the call they wrap. Search terms are user input and are never
written to a span.
"""

import inspect
from collections.abc import Callable
from functools import wraps
from typing import Any

from opentelemetry import trace

# Call arguments copied onto the span, keyed by parameter name.
SPAN_ARGUMENTS = {"tenant_id": "search.tenant_id", "limit": "search.limit"}


def _call_attributes(
    signature: inspect.Signature, args: tuple, kwargs: dict
) -> dict[str, str | int]:
    arguments = signature.bind_partial(*args, **kwargs).arguments
    attributes: dict[str, str | int] = {}
    kind = getattr(arguments.get("self"), "kind", None)
    if kind is not None:
        attributes["search.kind"] = getattr(kind, "value", str(kind))
    for name, key in SPAN_ARGUMENTS.items():
        value = arguments.get(name)
        if isinstance(value, (str, int)):
            attributes[key] = value
    return attributes


def traced(span_name: str) -> Callable:
    """Run a coroutine function inside a span called span_name.

    Exceptions are recorded on the span and mark it as an error before
    propagating.

    Raises:
        TypeError: func is not a coroutine function.
    """

    def decorator(func: Callable) -> Callable:
        if not inspect.iscoroutinefunction(func):
            raise TypeError(f"traced() wraps coroutine functions, not {func.__qualname__}")
        signature = inspect.signature(func)

        @wraps(func)
        async def wrapper(*args: Any, **kwargs: Any) -> Any:
            tracer = trace.get_tracer(__name__)
            with tracer.start_as_current_span(
                span_name, attributes=_call_attributes(signature, args, kwargs)
            ):
                return await func(*args, **kwargs)

        return wrapper

    return decorator


def add_span_attributes(**attributes: str | int | float | bool) -> None:
    """Add attributes to the current span, if one is recording."""
    span = trace.get_current_span()
    if span.is_recording():
        for key, value in attributes.items():
            span.set_attribute(key, value)
