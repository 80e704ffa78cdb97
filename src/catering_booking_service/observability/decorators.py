"""OpenTelemetry tracing decorators."""

import asyncio
import functools
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from typing import Any, TypeVar

from opentelemetry import trace
from opentelemetry.trace import Span

from catering_booking_service.errors import (
    BookingServiceError,
    ConsistencyError,
    NotFoundError,
    StorageError,
    ValidationError,
)
from catering_booking_service.observability.metrics import record_storage_failure

# Type variable for generic function signatures
F = TypeVar("F", bound=Callable[..., Any])


def error_category(error: Exception) -> str:
    """Classify an exception into the booking error taxonomy.

    Args:
        error: Exception raised by an operation

    Returns:
        One of "validation", "not_found", "consistency", "storage" or "unexpected"
    """
    if isinstance(error, ValidationError):
        return "validation"
    if isinstance(error, NotFoundError):
        return "not_found"
    if isinstance(error, ConsistencyError):
        return "consistency"
    if isinstance(error, StorageError):
        return "storage"
    return "unexpected"


@contextmanager
def _operation_span(
    tracer: trace.Tracer, name: str, service_name: str, func_name: str | None
) -> Iterator[Span]:
    with tracer.start_as_current_span(name, record_exception=False) as span:
        span.set_attribute("service.name", service_name)

        # Add function name if using custom span name
        if func_name:
            span.set_attribute("function.name", func_name)

        try:
            yield span
            span.set_attribute("success", True)
        except Exception as e:
            span.set_attribute("success", False)
            span.set_attribute("error.type", type(e).__name__)
            span.set_attribute("error.category", error_category(e))
            span.set_attribute("error.message", str(e))

            # Expected business outcomes are not recorded as span exceptions
            if not isinstance(e, BookingServiceError) or isinstance(e, StorageError):
                span.record_exception(e)
            if isinstance(e, StorageError):
                record_storage_failure(e.operation)
            raise


def traced(span_name: str | None = None, service_name: str = "catering-svc") -> Callable[[F], F]:
    """Decorator to add OpenTelemetry tracing to a function.

    Creates a new span for the decorated function, tags failures with their
    booking error category and counts storage failures. Async functions are
    supported.

    Args:
        span_name: Name for the span (defaults to function name if not provided)
        service_name: Service name for span attributes

    Returns:
        Decorated function with tracing

    Example:
        @traced("create_event_request", service_name="catering-svc")
        async def create_event_request(data: dict) -> EventRequestWithDetails:
            # Function implementation
            pass
    """

    def decorator(func: F) -> F:
        name = span_name or func.__name__
        func_name = func.__name__ if span_name else None
        tracer = trace.get_tracer(service_name)

        @functools.wraps(func)
        async def async_wrapper(*args: Any, **kwargs: Any) -> Any:
            with _operation_span(tracer, name, service_name, func_name):
                return await func(*args, **kwargs)

        @functools.wraps(func)
        def sync_wrapper(*args: Any, **kwargs: Any) -> Any:
            with _operation_span(tracer, name, service_name, func_name):
                return func(*args, **kwargs)

        if asyncio.iscoroutinefunction(func):
            return async_wrapper  # type: ignore
        return sync_wrapper  # type: ignore

    return decorator
