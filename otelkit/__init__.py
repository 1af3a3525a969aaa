"""Convenience helpers over OpenTelemetry tracing and metrics.

Provides canonical tag keys, a fluent tag builder, None-safe span tagging,
span lifecycle helpers and metric factories, all bound to a service
identity created with `initialize()`.
"""

from otelkit import span_tags, tag_keys
from otelkit.exceptions import OtelkitError, TelemetryNotInitializedError
from otelkit.logging import get_logger, setup_logging
from otelkit.metrics import (
    create_counter,
    create_histogram,
    create_observable_gauge,
    create_up_down_counter,
    record_with_tags,
)
from otelkit.span_tags import NO_VALUE, add_tag, add_tags
from otelkit.tag_builder import TagBuilder
from otelkit.telemetry import (
    Telemetry,
    get_meter,
    get_telemetry,
    get_tracer,
    initialize,
    initialize_from_settings,
    shutdown,
)
from otelkit.tracing import (
    get_current_span_id,
    get_current_trace_id,
    record_exception,
    start_span,
    trace,
    trace_async,
    traced,
)

__all__ = [
    # Identity
    "Telemetry",
    "initialize",
    "initialize_from_settings",
    "get_telemetry",
    "get_tracer",
    "get_meter",
    "shutdown",
    # Errors
    "OtelkitError",
    "TelemetryNotInitializedError",
    # Tags
    "tag_keys",
    "span_tags",
    "TagBuilder",
    "NO_VALUE",
    "add_tag",
    "add_tags",
    # Tracing
    "start_span",
    "trace",
    "trace_async",
    "traced",
    "record_exception",
    "get_current_trace_id",
    "get_current_span_id",
    # Metrics
    "create_counter",
    "create_up_down_counter",
    "create_histogram",
    "create_observable_gauge",
    "record_with_tags",
    # Logging
    "setup_logging",
    "get_logger",
]
