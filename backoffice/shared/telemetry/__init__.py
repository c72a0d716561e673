"""Shared telemetry: logging setup, OpenTelemetry config, and tracing helpers."""

from backoffice.shared.telemetry.logging import get_logger, setup_logging
from backoffice.shared.telemetry.telemetry import (
    TelemetryConfig,
    get_telemetry,
    set_telemetry,
)
from backoffice.shared.telemetry.tracing import add_span_event, traced

__all__ = [
    "setup_logging",
    "get_logger",
    "TelemetryConfig",
    "get_telemetry",
    "set_telemetry",
    "traced",
    "add_span_event",
]
