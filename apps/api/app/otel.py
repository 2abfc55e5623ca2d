from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any

from opentelemetry import trace
from opentelemetry.exporter.otlp.proto.http.trace_exporter import OTLPSpanExporter
from opentelemetry.sdk.resources import Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import (
    BatchSpanProcessor,
    ConsoleSpanExporter,
    SimpleSpanProcessor,
)
from opentelemetry.sdk.trace.export.in_memory_span_exporter import InMemorySpanExporter
from opentelemetry.trace import Span

from app.core.config import Settings
from app.core.rbac import is_api_path, is_public_path


SERVICE_NAME = "studio-api"

_provider: TracerProvider | None = None
_exporters_attached = False


def _provider_for(service_name: str, version: str) -> TracerProvider:
    global _provider

    if _provider is None:
        _provider = TracerProvider(resource=Resource.create({"service.name": service_name, "service.version": version}))
        trace.set_tracer_provider(_provider)
    return _provider


def setup_otel(settings: Settings) -> TracerProvider | None:
    """Install the tracer provider and the exporters named in settings, once per process."""
    global _exporters_attached

    if not settings.otel_enabled:
        return None

    provider = _provider_for(SERVICE_NAME, settings.app_version)
    if _exporters_attached:
        return provider

    if settings.otel_exporter_endpoint:
        provider.add_span_processor(BatchSpanProcessor(OTLPSpanExporter(endpoint=settings.otel_exporter_endpoint)))
    if settings.otel_console_exporter:
        provider.add_span_processor(SimpleSpanProcessor(ConsoleSpanExporter()))

    _exporters_attached = True
    return provider


def setup_inmemory_otel() -> InMemorySpanExporter:
    exporter = InMemorySpanExporter()
    _provider_for(SERVICE_NAME, "test").add_span_processor(SimpleSpanProcessor(exporter))
    return exporter


def get_tracer(name: str) -> trace.Tracer:
    return trace.get_tracer(name)


_store_tracer = get_tracer("app.store")


@contextmanager
def store_span(operation: str, collection: str) -> Iterator[Span]:
    """Span named ``store.<operation>`` around one document store call."""
    with _store_tracer.start_as_current_span(f"store.{operation}") as span:
        span.set_attribute("store.collection", collection)
        yield span


def _route_area(path: str) -> str:
    if is_public_path(path):
        return "public"
    return "api" if is_api_path(path) else "page"


def get_fastapi_server_request_hook():
    def server_request_hook(span: Span | None, scope: dict[str, Any]) -> None:
        if span is None or not span.is_recording():
            return
        span.set_attribute("studio.route_area", _route_area(scope.get("path", "")))
        headers = dict(scope.get("headers", []))
        correlation_raw = headers.get(b"x-correlation-id")
        if correlation_raw:
            span.set_attribute("correlation_id", correlation_raw.decode("utf-8"))

    return server_request_hook
