"""Observability configuration models."""

from typing import Literal

from pydantic import BaseModel, Field

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
LogFormat = Literal["json", "console"]


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: LogLevel = Field(default="INFO", description="Log level")
    format: LogFormat = Field(default="json", description="Output format")
    include_trace_id: bool = Field(
        default=True,
        description="Include trace and span IDs in logs",
    )


class TracingConfig(BaseModel):
    """Distributed tracing configuration."""

    enabled: bool = Field(default=True, description="Enable tracing")
    otlp_endpoint: str | None = Field(
        default=None,
        description="OTLP gRPC span exporter endpoint",
    )
    console_export: bool = Field(
        default=False,
        description="Also print finished spans to stdout",
    )
    sample_rate: float = Field(
        default=1.0,
        ge=0.0,
        le=1.0,
        description="Trace sample rate for root spans",
    )


class MetricsConfig(BaseModel):
    """Metrics configuration."""

    enabled: bool = Field(default=True, description="Enable metrics")
    otlp_endpoint: str | None = Field(
        default=None,
        description="OTLP gRPC metric exporter endpoint",
    )
    console_export: bool = Field(
        default=False,
        description="Also print collected metrics to stdout",
    )
    export_interval_ms: int = Field(
        default=60000,
        ge=1,
        description="Interval between periodic metric exports",
    )
    prometheus_port: int | None = Field(
        default=None,
        ge=1,
        le=65535,
        description="Serve a Prometheus scrape endpoint on this port",
    )


class ObservabilityConfig(BaseModel):
    """Observability configuration."""

    logging: LoggingConfig = Field(
        default_factory=LoggingConfig,
        description="Logging settings",
    )
    tracing: TracingConfig = Field(
        default_factory=TracingConfig,
        description="Tracing settings",
    )
    metrics: MetricsConfig = Field(
        default_factory=MetricsConfig,
        description="Metrics settings",
    )
