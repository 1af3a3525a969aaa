"""Exception hierarchy for otelkit.

Errors raised by traced operations are never wrapped; they reach the
caller unchanged. The only error this package introduces is an ordering
bug: touching telemetry before it has been initialized.
"""


class OtelkitError(Exception):
    """Base exception for all otelkit errors."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class TelemetryNotInitializedError(OtelkitError):
    """Raised when the tracer or meter is used before initialize()."""

    def __init__(
        self,
        message: str = "Telemetry not initialized. Call initialize() first.",
    ) -> None:
        super().__init__(message)
