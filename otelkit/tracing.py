"""Span lifecycle helpers.

`trace` and `trace_async` run an operation inside a span that is always
ended. Failures are recorded on the span as an ERROR status carrying the
exception message and then re-raised unchanged; nothing is swallowed.
"""

import asyncio
import functools
import inspect
from collections.abc import Awaitable, Callable
from typing import Any, ParamSpec, TypeVar

from opentelemetry import trace as otel_trace
from opentelemetry.trace import Span, SpanKind, Status, StatusCode
from opentelemetry.util.types import Attributes

from otelkit.logging import get_logger
from otelkit.telemetry import Telemetry, resolve_telemetry

logger = get_logger(__name__)

T = TypeVar("T")
P = ParamSpec("P")


def _handle(span: Span) -> Span | None:
    """Map a non-recording span to None."""
    return span if span.is_recording() else None


def start_span(
    name: str,
    kind: SpanKind = SpanKind.INTERNAL,
    *,
    attributes: Attributes = None,
    telemetry: Telemetry | None = None,
) -> Span | None:
    """Start a span with the service tracer.

    The span is not made current and must be ended by the caller.

    Args:
        name: Span name
        kind: Span kind (INTERNAL, SERVER, CLIENT, etc.)
        attributes: Initial span attributes
        telemetry: Identity to use (process-wide if omitted)

    Returns:
        The started span, or None when it is not being recorded
        (sampled out or tracing disabled)

    Raises:
        TelemetryNotInitializedError: If no telemetry identity is available
    """
    tracer = resolve_telemetry(telemetry).tracer
    return _handle(tracer.start_span(name, kind=kind, attributes=attributes))


def record_exception(span: Span | None, exception: BaseException, escaped: bool = True) -> None:
    """Record an exception on a span and mark it as failed.

    Args:
        span: Span to record on, or None
        exception: The exception that occurred
        escaped: Whether the exception escaped the span scope
    """
    if span is None:
        return
    span.record_exception(exception, escaped=escaped)
    span.set_status(Status(StatusCode.ERROR, str(exception)))


def _mark_failed(name: str, span: Span, exception: BaseException) -> None:
    record_exception(_handle(span), exception)
    logger.debug(
        "traced_operation_failed",
        span_name=name,
        error_type=type(exception).__name__,
    )


def trace(
    name: str,
    operation: Callable[[Span | None], T],
    kind: SpanKind = SpanKind.INTERNAL,
    *,
    telemetry: Telemetry | None = None,
) -> T:
    """Run an operation inside a current span.

    Args:
        name: Span name
        operation: Called with the span (None when not recorded)
        kind: Span kind
        telemetry: Identity to use (process-wide if omitted)

    Returns:
        Whatever the operation returns
    """
    tracer = resolve_telemetry(telemetry).tracer
    with tracer.start_as_current_span(
        name,
        kind=kind,
        record_exception=False,
        set_status_on_exception=False,
    ) as span:
        try:
            return operation(_handle(span))
        except Exception as e:
            _mark_failed(name, span, e)
            raise


async def trace_async(
    name: str,
    operation: Callable[[Span | None], Awaitable[T]],
    kind: SpanKind = SpanKind.INTERNAL,
    *,
    telemetry: Telemetry | None = None,
) -> T:
    """Await an operation inside a current span.

    Cancellation of the awaited operation goes through the same failure
    path as any other exception.

    Args:
        name: Span name
        operation: Called with the span (None when not recorded); its
            result is awaited
        kind: Span kind
        telemetry: Identity to use (process-wide if omitted)

    Returns:
        The awaited result of the operation
    """
    tracer = resolve_telemetry(telemetry).tracer
    with tracer.start_as_current_span(
        name,
        kind=kind,
        record_exception=False,
        set_status_on_exception=False,
    ) as span:
        try:
            return await operation(_handle(span))
        except (Exception, asyncio.CancelledError) as e:
            _mark_failed(name, span, e)
            raise


def traced(
    name: str | None = None,
    kind: SpanKind = SpanKind.INTERNAL,
    *,
    telemetry: Telemetry | None = None,
) -> Callable[[Callable[P, Any]], Callable[P, Any]]:
    """Decorate a function or coroutine function to run inside a span.

    The span name defaults to the function's qualified name. The telemetry
    identity is resolved on each call, so decorating before initialize()
    is fine.
    """

    def decorator(func: Callable[P, Any]) -> Callable[P, Any]:
        span_name = name or func.__qualname__

        if inspect.iscoroutinefunction(func):

            @functools.wraps(func)
            async def async_wrapper(*args: P.args, **kwargs: P.kwargs) -> Any:
                return await trace_async(
                    span_name,
                    lambda _span: func(*args, **kwargs),
                    kind,
                    telemetry=telemetry,
                )

            return async_wrapper

        @functools.wraps(func)
        def wrapper(*args: P.args, **kwargs: P.kwargs) -> Any:
            return trace(
                span_name,
                lambda _span: func(*args, **kwargs),
                kind,
                telemetry=telemetry,
            )

        return wrapper

    return decorator


def get_current_trace_id() -> str | None:
    """Get the current trace ID as a hex string.

    Returns:
        Trace ID or None if not in a trace
    """
    span_context = otel_trace.get_current_span().get_span_context()
    if span_context.is_valid:
        return format(span_context.trace_id, "032x")
    return None


def get_current_span_id() -> str | None:
    """Get the current span ID as a hex string.

    Returns:
        Span ID or None if not in a span
    """
    span_context = otel_trace.get_current_span().get_span_context()
    if span_context.is_valid:
        return format(span_context.span_id, "016x")
    return None
