"""OpenTelemetry tracing and metrics for book-catalog-tool.

Disabled by default. Enable with --telemetry or OTEL_ENABLED=true.
"""

from book_catalog_tool.telemetry.config import ExporterType, TelemetryConfig
from book_catalog_tool.telemetry.decorators import trace_span, traced
from book_catalog_tool.telemetry.service import TelemetryService

__all__ = [
    "ExporterType",
    "TelemetryConfig",
    "TelemetryService",
    "trace_span",
    "traced",
]
