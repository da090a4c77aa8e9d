"""Tracing decorator and context manager.

Both record exceptions on the span and re-raise them. With telemetry
disabled they add no span at all.
"""

from __future__ import annotations

from collections.abc import Callable, Generator
from contextlib import contextmanager
from functools import wraps
from typing import TYPE_CHECKING, Any, TypeVar

from book_catalog_tool.telemetry.service import TelemetryService

if TYPE_CHECKING:
    from opentelemetry.trace import Span

F = TypeVar("F", bound=Callable[..., Any])


@contextmanager
def trace_span(
    name: str,
    attributes: dict[str, Any] | None = None,
) -> Generator[Span | None]:
    """Trace a block of code.

    Yields:
        The span, or None if telemetry is disabled.

    Example:
        >>> with trace_span("catalog.save", {"catalog.path": str(path)}) as span:
        ...     if span:
        ...         span.set_attribute("catalog.books", len(catalog))
    """
    service = TelemetryService.get_instance()
    if not service.is_enabled:
        yield None
        return

    with service.tracer.start_as_current_span(name, attributes=attributes) as span:
        try:
            yield span
        except Exception as e:
            from opentelemetry.trace import Status, StatusCode

            span.record_exception(e)
            span.set_status(Status(StatusCode.ERROR, str(e)))
            raise


def traced(name: str | None = None) -> Callable[[F], F]:
    """Decorator form of trace_span; the span name defaults to the function name."""

    def decorator(func: F) -> F:
        @wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            with trace_span(name or func.__name__):
                return func(*args, **kwargs)

        return wrapper  # type: ignore[return-value]

    return decorator
