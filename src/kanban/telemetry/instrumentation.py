"""OpenTelemetry instrumentation setup."""

import logging
from typing import Any

from opentelemetry import metrics, trace
from opentelemetry.exporter.otlp.proto.http.metric_exporter import OTLPMetricExporter
from opentelemetry.exporter.otlp.proto.http.trace_exporter import OTLPSpanExporter
from opentelemetry.sdk.metrics import MeterProvider
from opentelemetry.sdk.metrics.export import (
    ConsoleMetricExporter,
    PeriodicExportingMetricReader,
)
from opentelemetry.sdk.resources import Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor, ConsoleSpanExporter
from opentelemetry.semconv.resource import ResourceAttributes

from kanban.config import Settings

logger = logging.getLogger(__name__)

TRACER_NAME = "kanban"


class TelemetryManager:
    """Manages OpenTelemetry instrumentation."""

    def __init__(self, settings: Settings):
        self.settings = settings
        self.tracer_provider: TracerProvider | None = None
        self.meter_provider: MeterProvider | None = None

    def setup(self) -> None:
        """Initialize OpenTelemetry providers."""
        if not self.settings.otel_enabled:
            logger.info("OpenTelemetry is disabled")
            return

        logger.info("Initializing OpenTelemetry instrumentation")

        resource = self._create_resource()
        self._setup_tracing(resource)
        self._setup_metrics(resource)

        logger.info("OpenTelemetry instrumentation initialized successfully")

    def _create_resource(self) -> Resource:
        """Create resource with service attributes."""
        attributes = {
            ResourceAttributes.SERVICE_NAME: self.settings.otel_service_name,
            ResourceAttributes.DEPLOYMENT_ENVIRONMENT: self.settings.environment,
        }
        attributes.update(self.settings.get_resource_attributes())

        return Resource.create(attributes)

    def _otlp_endpoint(self, signal: str) -> str:
        endpoint = self.settings.otel_exporter_otlp_endpoint
        suffix = f"/v1/{signal}"
        return endpoint if endpoint.endswith(suffix) else f"{endpoint}{suffix}"

    def _setup_tracing(self, resource: Resource) -> None:
        """Setup trace provider and exporters."""
        self.tracer_provider = TracerProvider(resource=resource)

        if self.settings.otel_traces_exporter == "otlp":
            otlp_exporter = OTLPSpanExporter(
                endpoint=self._otlp_endpoint("traces"),
                headers=self.settings.get_otlp_headers(),
            )
            self.tracer_provider.add_span_processor(BatchSpanProcessor(otlp_exporter))
            logger.info(
                f"OTLP trace exporter configured: {self.settings.otel_exporter_otlp_endpoint}"
            )

        elif self.settings.otel_traces_exporter == "console":
            self.tracer_provider.add_span_processor(BatchSpanProcessor(ConsoleSpanExporter()))
            logger.info("Console trace exporter configured")

        trace.set_tracer_provider(self.tracer_provider)

    def _setup_metrics(self, resource: Resource) -> None:
        """Setup meter provider and exporters."""
        if self.settings.otel_metrics_exporter == "otlp":
            otlp_exporter = OTLPMetricExporter(
                endpoint=self._otlp_endpoint("metrics"),
                headers=self.settings.get_otlp_headers(),
            )
            reader = PeriodicExportingMetricReader(otlp_exporter, export_interval_millis=60000)
            self.meter_provider = MeterProvider(resource=resource, metric_readers=[reader])
            logger.info(
                f"OTLP metric exporter configured: {self.settings.otel_exporter_otlp_endpoint}"
            )

        elif self.settings.otel_metrics_exporter == "console":
            reader = PeriodicExportingMetricReader(
                ConsoleMetricExporter(), export_interval_millis=60000
            )
            self.meter_provider = MeterProvider(resource=resource, metric_readers=[reader])
            logger.info("Console metric exporter configured")

        else:
            self.meter_provider = MeterProvider(resource=resource)

        metrics.set_meter_provider(self.meter_provider)

    def shutdown(self) -> None:
        """Shutdown telemetry providers."""
        if self.tracer_provider:
            self.tracer_provider.shutdown()
        if self.meter_provider:
            self.meter_provider.shutdown()
        logger.info("OpenTelemetry shutdown complete")


def get_tracer() -> trace.Tracer:
    """Return the application tracer (a no-op tracer until a provider is set)."""
    return trace.get_tracer(TRACER_NAME)


def set_span_attributes(span: Any, **attributes: Any) -> None:
    """Set multiple attributes on a span, skipping ``None`` values."""
    for key, value in attributes.items():
        if value is None:
            continue
        if isinstance(value, (bool, int, float)):
            span.set_attribute(key, value)
        else:
            span.set_attribute(key, str(value))
