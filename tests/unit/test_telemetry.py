"""Tracing setup from settings and the spans search adapters open."""

from unittest.mock import AsyncMock

import pytest
from opentelemetry import trace
from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import OTLPSpanExporter
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import ConsoleSpanExporter, SimpleSpanProcessor
from opentelemetry.sdk.trace.export.in_memory_span_exporter import InMemorySpanExporter
from opentelemetry.trace import StatusCode

from esgsearch.core.config import Settings
from esgsearch.infrastructure.persistence.repositories import ReportSearchRepository
from esgsearch.shared.telemetry import SearchTelemetry, build_span_exporter, traced
from tests.conftest import TENANT


@pytest.fixture(scope="module")
def spans() -> InMemorySpanExporter:
    """In-memory exporter attached to the process-wide tracer provider."""
    exporter = InMemorySpanExporter()
    provider = trace.get_tracer_provider()
    if not isinstance(provider, TracerProvider):
        provider = TracerProvider()
        trace.set_tracer_provider(provider)
    provider.add_span_processor(SimpleSpanProcessor(exporter))
    return exporter


def test_disabled_telemetry_builds_nothing() -> None:
    assert SearchTelemetry.from_settings(Settings(_env_file=None)) is None


def test_enabled_telemetry_describes_the_service() -> None:
    settings = Settings(
        _env_file=None,
        telemetry_enabled=True,
        telemetry_exporter="none",
        telemetry_environment="staging",
    )
    telemetry = SearchTelemetry.from_settings(settings)

    assert telemetry is not None
    attributes = telemetry.provider.resource.attributes
    assert attributes["service.name"] == settings.app_name
    assert attributes["service.version"] == settings.app_version
    assert attributes["deployment.environment"] == "staging"
    telemetry.provider.shutdown()


def test_exporter_follows_settings() -> None:
    assert build_span_exporter(Settings(_env_file=None, telemetry_exporter="none")) is None
    assert isinstance(
        build_span_exporter(Settings(_env_file=None, telemetry_exporter="console")),
        ConsoleSpanExporter,
    )
    otlp = Settings(
        _env_file=None,
        telemetry_exporter="otlp",
        telemetry_otlp_endpoint="http://localhost:4317",
    )
    assert isinstance(build_span_exporter(otlp), OTLPSpanExporter)


async def test_adapter_span_records_kind_tenant_and_limit_but_not_term(
    spans: InMemorySpanExporter,
) -> None:
    spans.clear()
    store = AsyncMock()
    store.query_text = AsyncMock(return_value=[])

    await ReportSearchRepository(store).find("confidential water", TENANT, 7)

    (span,) = [s for s in spans.get_finished_spans() if s.name == "search.adapter.find"]
    assert span.attributes["search.kind"] == "report"
    assert span.attributes["search.tenant_id"] == TENANT
    assert span.attributes["search.limit"] == 7
    assert "confidential water" not in span.attributes.values()


async def test_adapter_span_marks_store_errors(spans: InMemorySpanExporter) -> None:
    spans.clear()
    store = AsyncMock()
    store.query_text = AsyncMock(side_effect=ConnectionError("down"))

    with pytest.raises(ConnectionError):
        await ReportSearchRepository(store).find("water", TENANT, 10)

    (span,) = [s for s in spans.get_finished_spans() if s.name == "search.adapter.find"]
    assert span.status.status_code is StatusCode.ERROR
    assert span.events[0].name == "exception"


def test_traced_rejects_plain_functions() -> None:
    with pytest.raises(TypeError):
        traced("search.sync")(lambda: None)
