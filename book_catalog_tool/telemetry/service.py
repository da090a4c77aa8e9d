"""TelemetryService singleton for OpenTelemetry.

Owns the tracer and meter providers, the catalog operation counter, and
their shutdown. When telemetry is disabled every call is a no-op.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from book_catalog_tool.telemetry.config import ExporterType, TelemetryConfig

if TYPE_CHECKING:
    from opentelemetry.metrics import Counter
    from opentelemetry.sdk.metrics.export import MetricExporter
    from opentelemetry.sdk.trace.export import SpanExporter
    from opentelemetry.trace import Tracer

logger = logging.getLogger(__name__)


def _span_exporter(config: TelemetryConfig) -> SpanExporter:
    if config.exporter_type == ExporterType.OTLP:
        from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import OTLPSpanExporter

        return OTLPSpanExporter(endpoint=config.otlp_endpoint, insecure=config.otlp_insecure)

    from opentelemetry.sdk.trace.export import ConsoleSpanExporter

    return ConsoleSpanExporter()


def _metric_exporter(config: TelemetryConfig) -> MetricExporter:
    if config.exporter_type == ExporterType.OTLP:
        from opentelemetry.exporter.otlp.proto.grpc.metric_exporter import OTLPMetricExporter

        return OTLPMetricExporter(endpoint=config.otlp_endpoint, insecure=config.otlp_insecure)

    from opentelemetry.sdk.metrics.export import ConsoleMetricExporter

    return ConsoleMetricExporter()


class TelemetryService:
    """Singleton access point for tracing and catalog metrics.

    Example:
        >>> TelemetryService.get_instance().initialize(TelemetryConfig.from_env())
        >>> with TelemetryService.get_instance().tracer.start_as_current_span("save"):
        ...     pass
        >>> TelemetryService.get_instance().shutdown()
    """

    _instance: TelemetryService | None = None

    def __init__(self) -> None:
        self._config = TelemetryConfig(enabled=False)
        self._initialized = False
        self._operations: Counter | None = None

    @classmethod
    def get_instance(cls) -> TelemetryService:
        """Get the singleton instance."""
        if cls._instance is None:
            cls._instance = cls()
        return cls._instance

    @classmethod
    def reset(cls) -> None:
        """Shut down and drop the singleton (used by tests)."""
        if cls._instance is not None:
            cls._instance.shutdown()
        cls._instance = None

    @property
    def is_enabled(self) -> bool:
        """True if telemetry was initialized with enabled=True."""
        return self._initialized and self._config.enabled

    def initialize(self, config: TelemetryConfig) -> None:
        """Set up providers for ``config``. Later calls are ignored.

        Args:
            config: Telemetry configuration.
        """
        if self._initialized:
            logger.debug("Telemetry already initialized, skipping")
            return

        self._initialized = True
        if not config.enabled:
            logger.debug("Telemetry disabled")
            return

        try:
            self._setup_providers(config)
        except ImportError as e:
            logger.warning("OpenTelemetry exporter not installed, telemetry disabled: %s", e)
            return

        self._config = config
        logger.info(
            "Telemetry initialized: service=%s, exporter=%s",
            config.service_name,
            config.exporter_type.value,
        )

    def _setup_providers(self, config: TelemetryConfig) -> None:
        from opentelemetry import metrics, trace
        from opentelemetry.sdk.metrics import MeterProvider
        from opentelemetry.sdk.metrics.export import PeriodicExportingMetricReader
        from opentelemetry.sdk.resources import Resource
        from opentelemetry.sdk.trace import TracerProvider
        from opentelemetry.sdk.trace.export import BatchSpanProcessor

        resource = Resource.create(
            {
                "service.name": config.service_name,
                "service.version": config.service_version,
            }
        )

        span_exporter = _span_exporter(config)
        metric_exporter = _metric_exporter(config)

        tracer_provider = TracerProvider(resource=resource)
        tracer_provider.add_span_processor(BatchSpanProcessor(span_exporter))
        trace.set_tracer_provider(tracer_provider)
        self._tracer_provider = tracer_provider

        # Short interval: the CLI process usually lives for well under a minute
        reader = PeriodicExportingMetricReader(metric_exporter, export_interval_millis=5000)
        meter_provider = MeterProvider(resource=resource, metric_readers=[reader])
        metrics.set_meter_provider(meter_provider)
        self._meter_provider = meter_provider

        meter = metrics.get_meter(config.service_name, config.service_version)
        self._operations = meter.create_counter(
            "catalog.operations",
            unit="1",
            description="Catalog mutations by operation and outcome",
        )

    @property
    def tracer(self) -> Tracer:
        """Tracer for the configured service (no-op tracer when disabled)."""
        from opentelemetry import trace

        return trace.get_tracer(self._config.service_name, self._config.service_version)

    def record_operation(self, operation: str, outcome: str) -> None:
        """Count one catalog operation.

        Args:
            operation: Operation name (add, update, load, ...).
            outcome: ok, or the failure kind.
        """
        if self._operations is None:
            return
        self._operations.add(1, {"catalog.operation": operation, "catalog.outcome": outcome})

    def shutdown(self) -> None:
        """Flush and shut down providers so a short-lived CLI exports its data."""
        for name in ("_tracer_provider", "_meter_provider"):
            provider = getattr(self, name, None)
            if provider is None:
                continue
            try:
                provider.force_flush()
                provider.shutdown()
            except Exception as e:
                logger.warning("Error shutting down %s: %s", name.strip("_"), e)
            setattr(self, name, None)
        self._operations = None
