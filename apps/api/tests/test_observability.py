from __future__ import annotations

import json
import logging
from collections.abc import Generator
from typing import Any

import pytest
from fastapi.testclient import TestClient
from opentelemetry.sdk.trace.export.in_memory_span_exporter import InMemorySpanExporter

from app.core.auth import create_session_token
from app.core.config import get_settings
from app.core.database import get_store
from app.logging import JsonLogFormatter
from app.main import app
from app.otel import get_fastapi_server_request_hook, get_tracer, setup_inmemory_otel
from app.platform.store import InMemoryDocumentStore, StoreError


class BrokenStore(InMemoryDocumentStore):
    async def get_many(self, collection: str, query: Any = None) -> list[dict[str, Any]]:
        raise StoreError("backend unavailable")


class ExplodingStore(InMemoryDocumentStore):
    async def get_many(self, collection: str, query: Any = None) -> list[dict[str, Any]]:
        raise RuntimeError("boom")


@pytest.fixture(autouse=True)
def configure_env(monkeypatch: pytest.MonkeyPatch) -> Generator[None, None, None]:
    monkeypatch.setenv("METRICS_ENABLED", "true")
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture()
def store() -> InMemoryDocumentStore:
    return InMemoryDocumentStore()


@pytest.fixture()
def client(store: InMemoryDocumentStore) -> Generator[TestClient, None, None]:
    app.dependency_overrides[get_store] = lambda: store
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture()
def span_exporter() -> InMemorySpanExporter:
    exporter = setup_inmemory_otel()
    exporter.clear()
    return exporter


def _as(user_id: str, role: str = "employee") -> dict[str, str]:
    return {"Cookie": f"auth-token={create_session_token(user_id, None, role)}"}


def test_correlation_id_is_echoed_or_generated(client: TestClient) -> None:
    given = client.get("/health", headers={"X-Correlation-Id": "corr-123"})
    generated = client.get("/health")

    assert given.headers["x-correlation-id"] == "corr-123"
    assert generated.headers["x-correlation-id"]


def test_request_log_carries_route_template_user_and_correlation(client: TestClient, caplog: pytest.LogCaptureFixture) -> None:
    caplog.set_level(logging.INFO)

    response = client.get("/api/tasks/missing-task", headers={**_as("emp-1"), "X-Correlation-Id": "abc-123"})
    assert response.status_code == 404

    records = [record for record in caplog.records if record.name == "app.request" and record.getMessage() == "http.request"]
    assert any(
        getattr(record, "correlation_id", None) == "abc-123"
        and getattr(record, "method", None) == "GET"
        and getattr(record, "path", None) == "/api/tasks/{id}"
        and getattr(record, "status_code", None) == 404
        and getattr(record, "user_id", None) == "emp-1"
        and isinstance(getattr(record, "duration_ms", None), float)
        for record in records
    )


def test_domain_events_are_logged(client: TestClient, caplog: pytest.LogCaptureFixture) -> None:
    caplog.set_level(logging.INFO)

    response = client.post(
        "/api/tasks",
        json={"title": "Logged", "deadline": "2030-01-01T00:00:00Z"},
        headers={**_as("emp-1"), "X-Correlation-Id": "task-corr"},
    )
    assert response.status_code == 201

    created = [record for record in caplog.records if record.getMessage() == "task.created"]
    assert created
    assert getattr(created[-1], "user_id", None) == "emp-1"
    assert getattr(created[-1], "correlation_id", None) == "task-corr"


def test_store_fault_becomes_generic_500() -> None:
    app.dependency_overrides[get_store] = lambda: BrokenStore()
    try:
        with TestClient(app, raise_server_exceptions=False) as client:
            response = client.get("/api/tasks", headers=_as("emp-1"))
    finally:
        app.dependency_overrides.clear()

    assert response.status_code == 500
    assert response.json() == {"code": 500, "message": "Internal server error"}


def test_unexpected_error_becomes_generic_500() -> None:
    app.dependency_overrides[get_store] = lambda: ExplodingStore()
    try:
        with TestClient(app, raise_server_exceptions=False) as client:
            response = client.get("/api/clients", headers=_as("emp-1"))
    finally:
        app.dependency_overrides.clear()

    assert response.status_code == 500
    assert response.json() == {"code": 500, "message": "Internal server error"}


def test_metrics_endpoint_is_executive_only(client: TestClient) -> None:
    client.get("/health")
    client.get("/api/tasks", headers=_as("emp-1"))

    assert client.get("/metrics", headers=_as("emp-1")).status_code == 403

    metrics = client.get("/metrics", headers=_as("exec-1", "executive"))
    assert metrics.status_code == 200
    body = metrics.text
    assert "http_requests_total" in body
    assert "session_gate_rejections_total" in body
    assert 'path="/health"' in body
    assert 'operation="query",collection="tasks"' in body or 'collection="tasks",operation="query"' in body


def test_metrics_disabled_returns_404(client: TestClient, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("METRICS_ENABLED", "false")
    get_settings.cache_clear()

    assert client.get("/metrics", headers=_as("exec-1", "executive")).status_code == 404


def test_store_calls_produce_spans(client: TestClient, span_exporter: InMemorySpanExporter) -> None:
    client.get("/api/tasks", headers=_as("emp-1"))

    spans = [span for span in span_exporter.get_finished_spans() if span.name == "store.query"]
    assert spans
    assert spans[-1].attributes.get("store.collection") == "tasks"


@pytest.mark.parametrize(
    ("path", "area"),
    [("/api/tasks", "api"), ("/dashboard/employee", "page"), ("/api/auth/login", "public"), ("/", "public")],
)
def test_request_spans_are_tagged_with_route_area(span_exporter: InMemorySpanExporter, path: str, area: str) -> None:
    hook = get_fastapi_server_request_hook()

    with get_tracer("tests").start_as_current_span("request") as span:
        hook(span, {"path": path, "headers": [(b"x-correlation-id", b"cid-42")]})

    finished = [span for span in span_exporter.get_finished_spans() if span.name == "request"]
    assert finished[-1].attributes.get("studio.route_area") == area
    assert finished[-1].attributes.get("correlation_id") == "cid-42"


def test_json_formatter_keeps_known_fields_only() -> None:
    record = logging.makeLogRecord(
        {
            "name": "app.tasks",
            "levelname": "INFO",
            "msg": "task.created",
            "correlation_id": "cid-7",
            "document_id": "task-1",
            "user_id": "emp-1",
            "password": "hunter2",
            "error": "x" * 900,
        }
    )

    payload = json.loads(JsonLogFormatter().format(record))

    assert payload["msg"] == "task.created"
    assert payload["correlation_id"] == "cid-7"
    assert payload["fields"]["document_id"] == "task-1"
    assert payload["fields"]["user_id"] == "emp-1"
    assert "password" not in payload["fields"]
    assert len(payload["fields"]["error"]) == 500
