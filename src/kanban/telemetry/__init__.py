"""Telemetry module for OpenTelemetry instrumentation."""
from kanban.telemetry.instrumentation import (
    TelemetryManager,
    get_tracer,
    set_span_attributes,
)

__all__ = [
    "TelemetryManager",
    "get_tracer",
    "set_span_attributes",
]
