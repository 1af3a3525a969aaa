"""Tests for structured logging."""

import json
from io import StringIO

import structlog

from otelkit.logging import add_trace_context, get_logger, setup_logging
from otelkit.telemetry import Telemetry
from otelkit.tracing import trace


class TestSetupLogging:
    """Tests for setup_logging function."""

    def test_setup_json_format(self) -> None:
        """Should configure JSON format for production."""
        setup_logging(level="INFO", format="json")
        logger = get_logger("test")
        logger.info("test_message")

    def test_setup_console_format(self) -> None:
        """Should configure console format for development."""
        setup_logging(level="DEBUG", format="console", include_trace_id=False)
        logger = get_logger("test")
        logger.debug("test_message")


class TestAddTraceContext:
    """Tests for the trace context processor."""

    def test_no_ids_outside_span(self) -> None:
        """Events outside a span are left untouched."""
        event_dict = {"event": "outside"}
        result = add_trace_context(None, "info", event_dict)  # type: ignore[arg-type]
        assert result == {"event": "outside"}

    def test_adds_ids_inside_span(self, telemetry: Telemetry) -> None:
        """Events inside a span carry its ids."""

        def operation(_span: object) -> dict[str, str]:
            return add_trace_context(None, "info", {"event": "inside"})  # type: ignore[arg-type]

        result = trace("logging", operation)
        assert len(result["trace_id"]) == 32
        assert len(result["span_id"]) == 16

    def test_keeps_bound_trace_id(self, telemetry: Telemetry) -> None:
        """A trace_id already bound by the caller is not replaced."""

        def operation(_span: object) -> dict[str, str]:
            return add_trace_context(
                None, "info", {"event": "inside", "trace_id": "from-header"}  # type: ignore[arg-type]
            )

        assert trace("logging", operation)["trace_id"] == "from-header"


class TestJSONLogging:
    """Tests for JSON log output format."""

    def test_json_output_includes_trace_context(self, telemetry: Telemetry) -> None:
        """Should produce valid JSON with trace ids inside a span."""
        output = StringIO()
        structlog.configure(
            processors=[
                structlog.contextvars.merge_contextvars,
                structlog.processors.add_log_level,
                structlog.processors.TimeStamper(fmt="iso"),
                add_trace_context,
                structlog.processors.JSONRenderer(),
            ],
            wrapper_class=structlog.make_filtering_bound_logger(0),
            context_class=dict,
            logger_factory=structlog.PrintLoggerFactory(output),
            cache_logger_on_first_use=False,
        )

        logger = structlog.get_logger("test")
        trace("logged", lambda _span: logger.info("test_event", key="value"))

        parsed = json.loads(output.getvalue().strip())
        assert parsed["event"] == "test_event"
        assert parsed["key"] == "value"
        assert "timestamp" in parsed
        assert "level" in parsed
        assert len(parsed["trace_id"]) == 32
