"""Shared test fixtures for the otelkit test suite."""

from collections.abc import Callable, Generator
from pathlib import Path
from typing import Any

import pytest
from opentelemetry.sdk.metrics import MeterProvider
from opentelemetry.sdk.metrics.export import InMemoryMetricReader
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import SimpleSpanProcessor
from opentelemetry.sdk.trace.export.in_memory_span_exporter import InMemorySpanExporter

from otelkit import telemetry as telemetry_module
from otelkit.config import get_settings
from otelkit.telemetry import Telemetry


@pytest.fixture
def span_exporter() -> InMemorySpanExporter:
    """Exporter that keeps finished spans in memory."""
    return InMemorySpanExporter()


@pytest.fixture
def tracer_provider(span_exporter: InMemorySpanExporter) -> TracerProvider:
    """SDK tracer provider exporting synchronously to span_exporter."""
    provider = TracerProvider()
    provider.add_span_processor(SimpleSpanProcessor(span_exporter))
    return provider


@pytest.fixture
def metric_reader() -> InMemoryMetricReader:
    """Reader that collects metrics on demand."""
    return InMemoryMetricReader()


@pytest.fixture
def meter_provider(metric_reader: InMemoryMetricReader) -> MeterProvider:
    """SDK meter provider read by metric_reader."""
    return MeterProvider(metric_readers=[metric_reader])


@pytest.fixture
def telemetry(
    tracer_provider: TracerProvider, meter_provider: MeterProvider
) -> Generator[Telemetry, None, None]:
    """Process-wide telemetry bound to the in-memory providers."""
    installed = telemetry_module.initialize(
        "test-service",
        "1.0.0",
        tracer_provider=tracer_provider,
        meter_provider=meter_provider,
    )
    yield installed
    telemetry_module.shutdown()


@pytest.fixture
def metric_points(
    metric_reader: InMemoryMetricReader,
) -> Callable[[str], list[Any]]:
    """Collect and return the data points recorded for a metric name."""

    def _collect(name: str) -> list[Any]:
        data = metric_reader.get_metrics_data()
        if data is None:
            return []
        points: list[Any] = []
        for resource_metrics in data.resource_metrics:
            for scope_metrics in resource_metrics.scope_metrics:
                for metric in scope_metrics.metrics:
                    if metric.name == name:
                        points.extend(metric.data.data_points)
        return points

    return _collect


@pytest.fixture(autouse=True)
def reset_telemetry() -> Generator[None, None, None]:
    """Ensure no process-wide telemetry leaks between tests."""
    telemetry_module.shutdown()
    yield
    telemetry_module.shutdown()


@pytest.fixture(autouse=True)
def clear_settings_cache() -> Generator[None, None, None]:
    """Clear the settings cache around each test."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture(autouse=True)
def config_dir(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Empty config directory selected through OTELKIT_CONFIG_DIR.

    Autouse so that Settings() never reads the repository config files.
    """
    directory = tmp_path / "config"
    directory.mkdir()
    monkeypatch.setenv("OTELKIT_CONFIG_DIR", str(directory))
    monkeypatch.setenv("OTELKIT_ENV", "nonexistent")
    return directory
