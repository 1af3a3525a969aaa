"""Configuration models for otelkit."""

from otelkit.config.models.observability import (
    LoggingConfig,
    MetricsConfig,
    ObservabilityConfig,
    TracingConfig,
)

__all__ = [
    "LoggingConfig",
    "MetricsConfig",
    "ObservabilityConfig",
    "TracingConfig",
]
