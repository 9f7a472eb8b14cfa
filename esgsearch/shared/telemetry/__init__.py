"""Shared telemetry: logging setup, OpenTelemetry tracing and span helpers."""

from esgsearch.shared.telemetry.logging import setup_logging
from esgsearch.shared.telemetry.telemetry import SearchTelemetry, build_span_exporter
from esgsearch.shared.telemetry.tracing import add_span_attributes, traced

__all__ = [
    "setup_logging",
    "SearchTelemetry",
    "build_span_exporter",
    "traced",
    "add_span_attributes",
]
