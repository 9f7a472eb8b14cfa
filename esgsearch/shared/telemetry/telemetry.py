"""OpenTelemetry tracing for the search service.

SearchTelemetry is built from Settings in create_app: a tracer provider tagged
with service name, version and deployment environment, at most one span
exporter, and instrumentation for incoming requests, record store queries
and Redis calls. The health endpoint is never traced.
"""

import logging

from fastapi import FastAPI
from opentelemetry import trace
from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import OTLPSpanExporter
from opentelemetry.instrumentation.fastapi import FastAPIInstrumentor
from opentelemetry.instrumentation.redis import RedisInstrumentor
from opentelemetry.instrumentation.sqlalchemy import SQLAlchemyInstrumentor
from opentelemetry.sdk.resources import SERVICE_NAME, SERVICE_VERSION, Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import (
    BatchSpanProcessor,
    ConsoleSpanExporter,
    SpanExporter,
)
from opentelemetry.sdk.trace.sampling import ParentBased, TraceIdRatioBased
from sqlalchemy.ext.asyncio import AsyncEngine

from esgsearch.core.config import Settings

logger = logging.getLogger(__name__)

UNTRACED_URLS = "/api/v1/health"


def build_span_exporter(settings: Settings) -> SpanExporter | None:
    """Return the exporter named by TELEMETRY_EXPORTER, or None for "none".

    Settings has already checked that "otlp" comes with an endpoint.
    """
    if settings.telemetry_exporter == "otlp":
        endpoint = settings.telemetry_otlp_endpoint or ""
        return OTLPSpanExporter(
            endpoint=endpoint, insecure=endpoint.startswith("http://")
        )
    if settings.telemetry_exporter == "console":
        return ConsoleSpanExporter()
    return None


class SearchTelemetry:
    """Tracer provider for this process plus the instrumentation it switched on.

    Create with from_settings(); instrument_app() when the app is built
    (before it serves a request), instrument_clients() during startup, and
    shutdown() on exit to flush buffered spans.
    """

    def __init__(self, provider: TracerProvider, exporter_name: str) -> None:
        self.provider = provider
        self.exporter_name = exporter_name
        self._sqlalchemy = False
        self._redis = False

    @classmethod
    def from_settings(cls, settings: Settings) -> "SearchTelemetry | None":
        """Build telemetry from settings; None when TELEMETRY_ENABLED is false."""
        if not settings.telemetry_enabled:
            return None
        resource = Resource.create(
            {
                SERVICE_NAME: settings.app_name,
                SERVICE_VERSION: settings.app_version,
                "deployment.environment": settings.telemetry_environment,
            }
        )
        provider = TracerProvider(
            resource=resource,
            sampler=ParentBased(TraceIdRatioBased(settings.telemetry_sample_rate)),
        )
        exporter = build_span_exporter(settings)
        if exporter is not None:
            provider.add_span_processor(BatchSpanProcessor(exporter))
        return cls(provider, settings.telemetry_exporter)

    def instrument_app(self, app: FastAPI) -> None:
        """Install the provider globally and give each request a server span."""
        trace.set_tracer_provider(self.provider)
        FastAPIInstrumentor.instrument_app(
            app, tracer_provider=self.provider, excluded_urls=UNTRACED_URLS
        )

    def instrument_clients(
        self, engine: AsyncEngine | None, *, redis_enabled: bool
    ) -> None:
        """Trace record store queries and, when enabled, Redis calls.

        Args:
            engine: Record store engine; None when DATABASE_URL is unset.
            redis_enabled: Instrument redis.asyncio calls (recent searches).
        """
        if engine is not None:
            SQLAlchemyInstrumentor().instrument(
                engine=engine.sync_engine, tracer_provider=self.provider
            )
            self._sqlalchemy = True
        if redis_enabled:
            RedisInstrumentor().instrument(tracer_provider=self.provider)
            self._redis = True
        logger.info(
            "Tracing enabled: exporter=%s record_store=%s redis=%s",
            self.exporter_name,
            self._sqlalchemy,
            self._redis,
        )

    def shutdown(self) -> None:
        """Remove client instrumentation and flush remaining spans.

        Request spans stay wired into the app, which outlives its lifespan.
        """
        if self._sqlalchemy:
            SQLAlchemyInstrumentor().uninstrument()
            self._sqlalchemy = False
        if self._redis:
            RedisInstrumentor().uninstrument()
            self._redis = False
        self.provider.shutdown()
