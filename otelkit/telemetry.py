"""Service telemetry identity: one tracer and one meter per service.

A `Telemetry` object binds a service name/version to OpenTelemetry tracer
and meter handles. It can be constructed and passed around explicitly, or
installed as the process-wide default with `initialize()`; every helper in
this package accepts an optional ``telemetry=`` argument and falls back to
the default.

Usage:
    from otelkit import initialize, start_span

    initialize("orders-service", "1.4.0")
    span = start_span("load_order")
"""

from typing import Any
from wsgiref.simple_server import WSGIServer

from opentelemetry import metrics, trace
from opentelemetry.exporter.otlp.proto.grpc.metric_exporter import OTLPMetricExporter
from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import OTLPSpanExporter
from opentelemetry.exporter.prometheus import PrometheusMetricReader
from opentelemetry.metrics import Meter, MeterProvider, NoOpMeterProvider
from opentelemetry.sdk.metrics import MeterProvider as SdkMeterProvider
from opentelemetry.sdk.metrics.export import (
    ConsoleMetricExporter,
    MetricReader,
    PeriodicExportingMetricReader,
)
from opentelemetry.sdk.resources import (
    SERVICE_INSTANCE_ID,
    SERVICE_NAME,
    SERVICE_VERSION,
    Resource,
)
from opentelemetry.sdk.trace import TracerProvider as SdkTracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor, ConsoleSpanExporter
from opentelemetry.sdk.trace.sampling import ParentBased, TraceIdRatioBased
from opentelemetry.trace import NoOpTracerProvider, Tracer, TracerProvider
from prometheus_client import start_http_server

from otelkit.config import get_settings
from otelkit.config.models.observability import MetricsConfig, TracingConfig
from otelkit.config.settings import Settings
from otelkit.exceptions import TelemetryNotInitializedError
from otelkit.logging import get_logger, setup_logging

logger = get_logger(__name__)


def _build_tracer_provider(tracing: TracingConfig, resource: Resource) -> TracerProvider:
    if not tracing.enabled:
        return NoOpTracerProvider()

    provider = SdkTracerProvider(
        resource=resource,
        sampler=ParentBased(TraceIdRatioBased(tracing.sample_rate)),
    )
    if tracing.otlp_endpoint:
        provider.add_span_processor(
            BatchSpanProcessor(OTLPSpanExporter(endpoint=tracing.otlp_endpoint, insecure=True))
        )
    if tracing.console_export:
        provider.add_span_processor(BatchSpanProcessor(ConsoleSpanExporter()))
    return provider


def _build_metric_readers(metrics_config: MetricsConfig) -> list[MetricReader]:
    readers: list[MetricReader] = []
    if metrics_config.otlp_endpoint:
        readers.append(
            PeriodicExportingMetricReader(
                OTLPMetricExporter(endpoint=metrics_config.otlp_endpoint, insecure=True),
                export_interval_millis=metrics_config.export_interval_ms,
            )
        )
    if metrics_config.console_export:
        readers.append(
            PeriodicExportingMetricReader(
                ConsoleMetricExporter(),
                export_interval_millis=metrics_config.export_interval_ms,
            )
        )
    if metrics_config.prometheus_port is not None:
        readers.append(PrometheusMetricReader())
    return readers


def _stop_server(server: WSGIServer | None) -> None:
    """Stop a Prometheus scrape server and free its port."""
    if server is None:
        return
    server.shutdown()
    server.server_close()


class Telemetry:
    """Tracer and meter handles scoped to one service identity.

    Providers passed in (or the OpenTelemetry globals) are borrowed and
    never shut down here. Providers built by `from_settings` are owned and
    shut down by `close()`.
    """

    def __init__(
        self,
        service_name: str,
        service_version: str | None = None,
        *,
        tracer_provider: TracerProvider | None = None,
        meter_provider: MeterProvider | None = None,
    ) -> None:
        if not service_name:
            raise ValueError("service_name must be a non-empty string")

        self.service_name = service_name
        self.service_version = service_version
        self.tracer_provider = tracer_provider or trace.get_tracer_provider()
        self.meter_provider = meter_provider or metrics.get_meter_provider()

        self._tracer: Tracer | None = self.tracer_provider.get_tracer(
            service_name, service_version
        )
        self._meter: Meter | None = self.meter_provider.get_meter(
            service_name, service_version
        )
        self._owned_providers: list[Any] = []
        self._server: WSGIServer | None = None

    @classmethod
    def from_settings(cls, settings: Settings) -> "Telemetry":
        """Build SDK providers from configuration and bind them to a new identity.

        If any step fails, whatever was already built is shut down before
        the error propagates.

        Args:
            settings: Service identity and exporter configuration

        Returns:
            Telemetry that owns (and will shut down) its providers and
            Prometheus scrape server
        """
        attributes: dict[str, str] = {SERVICE_NAME: settings.service_name}
        if settings.service_version:
            attributes[SERVICE_VERSION] = settings.service_version
        if settings.service_instance_id:
            attributes[SERVICE_INSTANCE_ID] = settings.service_instance_id
        resource = Resource.create(attributes)

        owned: list[Any] = []
        readers: list[MetricReader] = []
        server: WSGIServer | None = None
        try:
            tracer_provider = _build_tracer_provider(settings.observability.tracing, resource)
            if isinstance(tracer_provider, SdkTracerProvider):
                owned.append(tracer_provider)

            metrics_config = settings.observability.metrics
            meter_provider: MeterProvider
            if metrics_config.enabled:
                if metrics_config.prometheus_port is not None:
                    server, _thread = start_http_server(metrics_config.prometheus_port)
                    logger.info(
                        "prometheus_server_started",
                        port=metrics_config.prometheus_port,
                    )
                readers = _build_metric_readers(metrics_config)
                sdk_meter_provider = SdkMeterProvider(resource=resource, metric_readers=readers)
                owned.append(sdk_meter_provider)
                # Now shut down through the provider
                readers = []
                meter_provider = sdk_meter_provider
            else:
                meter_provider = NoOpMeterProvider()

            telemetry = cls(
                settings.service_name,
                settings.service_version,
                tracer_provider=tracer_provider,
                meter_provider=meter_provider,
            )
        except Exception:
            _stop_server(server)
            for reader in readers:
                reader.shutdown()
            for provider in owned:
                provider.shutdown()
            raise

        telemetry._owned_providers = owned
        telemetry._server = server
        return telemetry

    @property
    def tracer(self) -> Tracer:
        """Tracer for this service; raises once closed."""
        if self._tracer is None:
            raise TelemetryNotInitializedError()
        return self._tracer

    @property
    def meter(self) -> Meter:
        """Meter for this service; raises once closed."""
        if self._meter is None:
            raise TelemetryNotInitializedError()
        return self._meter

    @property
    def closed(self) -> bool:
        return self._tracer is None

    def close(self) -> None:
        """Release the handles, owned providers and scrape server. Idempotent."""
        if self.closed:
            return

        self._tracer = None
        self._meter = None
        for provider in self._owned_providers:
            provider.shutdown()
        self._owned_providers = []
        _stop_server(self._server)
        self._server = None

        logger.info(
            "telemetry_closed",
            service_name=self.service_name,
            service_version=self.service_version,
        )

    def __enter__(self) -> "Telemetry":
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()

    def __repr__(self) -> str:
        return (
            f"Telemetry(service_name={self.service_name!r}, "
            f"service_version={self.service_version!r}, closed={self.closed})"
        )


# Process-wide default identity
_telemetry: Telemetry | None = None


def _install(telemetry: Telemetry) -> Telemetry:
    global _telemetry
    _telemetry = telemetry

    logger.info(
        "telemetry_initialized",
        service_name=telemetry.service_name,
        service_version=telemetry.service_version,
    )
    return telemetry


def initialize(
    service_name: str,
    service_version: str | None = None,
    *,
    tracer_provider: TracerProvider | None = None,
    meter_provider: MeterProvider | None = None,
) -> Telemetry:
    """Install the process-wide telemetry identity.

    Any previously installed identity is closed first, so repeated calls
    replace rather than accumulate. Call once at startup, before
    concurrent use begins.

    Args:
        service_name: Name used for the tracer and meter
        service_version: Optional version reported alongside the name
        tracer_provider: Provider to mint the tracer from (global if omitted)
        meter_provider: Provider to mint the meter from (global if omitted)

    Returns:
        The installed Telemetry
    """
    shutdown()
    return _install(
        Telemetry(
            service_name,
            service_version,
            tracer_provider=tracer_provider,
            meter_provider=meter_provider,
        )
    )


def initialize_from_settings(settings: Settings | None = None) -> Telemetry:
    """Configure logging and install a process-wide identity from configuration.

    The previous identity is closed before the new providers are built,
    so its Prometheus port is free to be bound again.

    Args:
        settings: Settings to use; loaded with get_settings() if omitted

    Returns:
        The installed Telemetry
    """
    if settings is None:
        settings = get_settings()
    setup_logging(**settings.observability.logging.model_dump())
    shutdown()
    return _install(Telemetry.from_settings(settings))


def get_telemetry() -> Telemetry:
    """Get the process-wide telemetry identity.

    Raises:
        TelemetryNotInitializedError: If initialize() has not been called
    """
    if _telemetry is None:
        raise TelemetryNotInitializedError()
    return _telemetry


def resolve_telemetry(telemetry: Telemetry | None = None) -> Telemetry:
    """Return the given telemetry, or the process-wide one."""
    if telemetry is not None:
        return telemetry
    return get_telemetry()


def get_tracer() -> Tracer:
    """Get the tracer of the process-wide identity."""
    return get_telemetry().tracer


def get_meter() -> Meter:
    """Get the meter of the process-wide identity."""
    return get_telemetry().meter


def shutdown() -> None:
    """Close and clear the process-wide identity. Safe to call repeatedly."""
    global _telemetry
    if _telemetry is None:
        return

    _telemetry.close()
    _telemetry = None
    logger.info("telemetry_shutdown")
