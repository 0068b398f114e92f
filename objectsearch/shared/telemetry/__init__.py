"""Shared telemetry: logging setup, OpenTelemetry config, and tracing helpers."""

from objectsearch.shared.telemetry.logging import setup_logging
from objectsearch.shared.telemetry.tracing import (
    add_span_attributes,
    get_trace_id,
    traced,
)

__all__ = [
    "setup_logging",
    "traced",
    "add_span_attributes",
    "get_trace_id",
]
