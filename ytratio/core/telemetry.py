"""
Telemetry configuration (Metrics & Tracing).
HTTP metrics come from the Prometheus instrumentator, ranking metrics are
defined here and updated by the ranking service.
"""
from fastapi import FastAPI
from opentelemetry import trace
from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import OTLPSpanExporter
from opentelemetry.instrumentation.fastapi import FastAPIInstrumentor
from opentelemetry.sdk.resources import Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor
from prometheus_client import Counter, Gauge
from prometheus_fastapi_instrumentator import Instrumentator

from ytratio.config import get_settings

# =============================================================================
# Ranking Metrics
# =============================================================================

OBSERVATIONS_INGESTED = Counter(
    "ytratio_observations_ingested_total",
    "Video observations merged into the record store",
)
OBSERVATIONS_REJECTED = Counter(
    "ytratio_observations_rejected_total",
    "Video observations rejected as ineligible",
)
RECORDS_PRUNED = Counter(
    "ytratio_records_pruned_total",
    "Records evicted by the per-ranking retention cap",
)
STORE_SIZE = Gauge(
    "ytratio_store_records",
    "Records currently held in the record store",
)

tracer = trace.get_tracer("ytratio")


def setup_telemetry(app: FastAPI) -> None:
    """
    Setup Observability (Metrics & Tracing).

    1. Prometheus Metrics via /metrics
    2. OpenTelemetry Tracing via OTLP
    """
    settings = get_settings()

    if settings.ENABLE_PROMETHEUS:
        instrumentator = Instrumentator(
            should_group_status_codes=False,
            should_ignore_untemplated=True,
            excluded_handlers=["/metrics", "/health", "/health/ready"],
        )
        instrumentator.instrument(app).expose(app, include_in_schema=False)

    if settings.ENABLE_OTEL:
        resource = Resource.create(attributes={
            "service.name": settings.APP_NAME,
            "service.version": settings.APP_VERSION,
            "deployment.environment": "production" if not settings.DEBUG else "development",
        })

        provider = TracerProvider(resource=resource)

        # Default endpoint is localhost:4317
        provider.add_span_processor(BatchSpanProcessor(OTLPSpanExporter()))
        trace.set_tracer_provider(provider)

        FastAPIInstrumentor.instrument_app(app, tracer_provider=provider)
