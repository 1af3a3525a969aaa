"""Metric instrument factories and tagged recording.

Instruments are minted from the service meter. Whether an instrument
records ints or floats is the caller's choice and should stay fixed for
its lifetime; mixing the two is not checked here.

Usage:
    orders = create_counter("orders", unit="1", description="Orders placed")
    record_with_tags(orders, 1, TagBuilder.create().add_tenant_id(tenant_id))
"""

from collections.abc import Callable, Iterable
from typing import Any

from opentelemetry.metrics import (
    CallbackOptions,
    Counter,
    Histogram,
    ObservableGauge,
    Observation,
    UpDownCounter,
)
from opentelemetry.util.types import AttributeValue

from otelkit.span_tags import Tags, iter_tags
from otelkit.tag_builder import attributes_from_pairs
from otelkit.telemetry import Telemetry, resolve_telemetry

Number = int | float


def create_counter(
    name: str,
    unit: str = "",
    description: str = "",
    *,
    telemetry: Telemetry | None = None,
) -> Counter:
    """Create a monotonic counter bound to the service meter.

    Raises:
        TelemetryNotInitializedError: If no telemetry identity is available
    """
    return resolve_telemetry(telemetry).meter.create_counter(
        name, unit=unit, description=description
    )


def create_up_down_counter(
    name: str,
    unit: str = "",
    description: str = "",
    *,
    telemetry: Telemetry | None = None,
) -> UpDownCounter:
    """Create a counter that accepts negative increments."""
    return resolve_telemetry(telemetry).meter.create_up_down_counter(
        name, unit=unit, description=description
    )


def create_histogram(
    name: str,
    unit: str = "",
    description: str = "",
    *,
    telemetry: Telemetry | None = None,
) -> Histogram:
    """Create a histogram bound to the service meter.

    Raises:
        TelemetryNotInitializedError: If no telemetry identity is available
    """
    return resolve_telemetry(telemetry).meter.create_histogram(
        name, unit=unit, description=description
    )


def create_observable_gauge(
    name: str,
    observe: Callable[[], Number],
    unit: str = "",
    description: str = "",
    *,
    telemetry: Telemetry | None = None,
) -> ObservableGauge:
    """Create a gauge sampled by calling ``observe`` on every collection.

    Args:
        name: Instrument name
        observe: Zero-argument callable returning the current value
        unit: Unit of measure
        description: Human readable description
        telemetry: Identity to use (process-wide if omitted)

    Raises:
        TelemetryNotInitializedError: If no telemetry identity is available
    """

    def callback(_options: CallbackOptions) -> Iterable[Observation]:
        yield Observation(observe())

    return resolve_telemetry(telemetry).meter.create_observable_gauge(
        name, callbacks=[callback], unit=unit, description=description
    )


def to_attributes(tags: Tags | None) -> dict[str, AttributeValue]:
    """Convert any accepted tag shape to an attribute mapping.

    Same collapsing as TagBuilder.to_attributes(): the last value for a
    key wins and a None value removes the key.
    """
    return attributes_from_pairs(iter_tags(tags))


def record_with_tags(
    instrument: Counter | UpDownCounter | Histogram,
    value: Number,
    tags: Tags | None = None,
) -> None:
    """Record one measurement together with its tags.

    Args:
        instrument: Counter, up-down counter or histogram
        value: Measurement value
        tags: TagBuilder, mapping, iterable of (key, value) pairs, or None

    Raises:
        TypeError: If the instrument is not a synchronous recording instrument
    """
    attributes: dict[str, Any] = to_attributes(tags)
    if isinstance(instrument, (Counter, UpDownCounter)):
        instrument.add(value, attributes)
    elif isinstance(instrument, Histogram):
        instrument.record(value, attributes)
    else:
        raise TypeError(f"Cannot record on instrument of type {type(instrument).__name__}")
