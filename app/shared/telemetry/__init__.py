"""Logging setup, OpenTelemetry wiring and span helpers."""

from app.shared.telemetry.logging import get_logger, setup_logging
from app.shared.telemetry.telemetry import Telemetry, get_telemetry, set_telemetry
from app.shared.telemetry.tracing import add_span_attributes, get_trace_id, traced

__all__ = [
    "Telemetry",
    "add_span_attributes",
    "get_logger",
    "get_telemetry",
    "get_trace_id",
    "set_telemetry",
    "setup_logging",
    "traced",
]
