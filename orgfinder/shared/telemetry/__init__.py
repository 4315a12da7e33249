"""Shared telemetry: logging setup, OpenTelemetry config, and tracing helpers."""

from orgfinder.shared.telemetry.logging import setup_logging
from orgfinder.shared.telemetry.telemetry import (
    TelemetryConfig,
    get_telemetry,
    set_telemetry,
)
from orgfinder.shared.telemetry.tracing import (
    add_span_attributes,
    traced,
)

__all__ = [
    "setup_logging",
    "TelemetryConfig",
    "get_telemetry",
    "set_telemetry",
    "traced",
    "add_span_attributes",
]
