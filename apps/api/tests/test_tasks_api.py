from __future__ import annotations

import asyncio
from collections.abc import Generator
from datetime import datetime, timedelta, timezone

import pytest
from fastapi.testclient import TestClient

from app.core.auth import create_session_token
from app.core.config import get_settings
from app.core.database import get_store
from app.main import app
from app.platform.store import InMemoryDocumentStore


@pytest.fixture(autouse=True)
def fresh_settings() -> Generator[None, None, None]:
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


def _as(user_id: str, role: str = "employee") -> dict[str, str]:
    return {"Cookie": f"auth-token={create_session_token(user_id, None, role)}"}


def _deadline(days: int) -> str:
    return (datetime.now(timezone.utc) + timedelta(days=days)).isoformat()


def test_create_without_deadline_is_400_and_writes_nothing(client: TestClient, store: InMemoryDocumentStore) -> None:
    response = client.post("/api/tasks", json={"title": "Edit reel"}, headers=_as("emp-1"))

    assert response.status_code == 400
    body = response.json()
    assert set(body) == {"code", "message"}
    assert "deadline" in body["message"]
    assert asyncio.run(store.get_many("tasks")) == []


def test_create_without_title_is_400(client: TestClient) -> None:
    response = client.post("/api/tasks", json={"deadline": _deadline(2)}, headers=_as("emp-1"))
    assert response.status_code == 400


def test_create_applies_defaults(client: TestClient) -> None:
    response = client.post("/api/tasks", json={"title": "Edit reel", "deadline": _deadline(2)}, headers=_as("emp-1"))

    assert response.status_code == 201
    task = response.json()["data"]
    assert task["status"] == "pending"
    assert task["priority"] == "medium"
    assert task["assigned_to"] == ["emp-1"]
    assert task["created_by"] == "emp-1"
    assert task["created_at"] == task["updated_at"]


def test_create_notifies_other_assignees(client: TestClient) -> None:
    response = client.post(
        "/api/tasks",
        json={"title": "Storyboard", "deadline": _deadline(3), "assigned_to": ["exec-1", "emp-2", "emp-3"]},
        headers=_as("exec-1", "executive"),
    )
    assert response.status_code == 201

    emp2_feed = client.get("/api/notifications", headers=_as("emp-2")).json()["data"]
    creator_feed = client.get("/api/notifications", headers=_as("exec-1", "executive")).json()["data"]
    assert [item["type"] for item in emp2_feed] == ["task"]
    assert emp2_feed[0]["userId"] == "emp-2"
    assert creator_feed == []


def test_list_defaults_to_own_tasks_by_deadline(client: TestClient) -> None:
    client.post("/api/tasks", json={"title": "Later", "deadline": _deadline(5)}, headers=_as("emp-1"))
    client.post("/api/tasks", json={"title": "Sooner", "deadline": _deadline(1)}, headers=_as("emp-1"))
    client.post("/api/tasks", json={"title": "Someone else", "deadline": _deadline(1)}, headers=_as("emp-2"))

    response = client.get("/api/tasks", headers=_as("emp-1"))

    assert response.status_code == 200
    assert [task["title"] for task in response.json()["data"]] == ["Sooner", "Later"]


def test_list_by_status_and_upcoming_window(client: TestClient) -> None:
    near = client.post("/api/tasks", json={"title": "Near", "deadline": _deadline(2)}, headers=_as("emp-1")).json()["data"]
    client.post("/api/tasks", json={"title": "Far", "deadline": _deadline(20)}, headers=_as("emp-1"))
    done = client.post(
        "/api/tasks",
        json={"title": "Done", "deadline": _deadline(1), "status": "completed"},
        headers=_as("emp-1"),
    ).json()["data"]

    upcoming = client.get("/api/tasks", params={"upcomingDays": 7}, headers=_as("emp-1")).json()["data"]
    completed = client.get("/api/tasks", params={"status": "completed"}, headers=_as("emp-1")).json()["data"]

    assert [task["id"] for task in upcoming] == [near["id"]]
    assert [task["id"] for task in completed] == [done["id"]]


def test_only_assignees_or_executives_can_update(client: TestClient) -> None:
    task = client.post("/api/tasks", json={"title": "Mix audio", "deadline": _deadline(2)}, headers=_as("emp-1")).json()["data"]

    outsider = client.patch(f"/api/tasks/{task['id']}", json={"status": "completed"}, headers=_as("emp-2"))
    assignee = client.patch(f"/api/tasks/{task['id']}", json={"status": "in_progress"}, headers=_as("emp-1"))
    executive = client.patch(f"/api/tasks/{task['id']}", json={"priority": "urgent"}, headers=_as("exec-1", "executive"))

    assert outsider.status_code == 403
    assert outsider.json()["code"] == 403
    assert assignee.status_code == 200
    assert assignee.json()["data"]["status"] == "in_progress"
    assert executive.json()["data"]["priority"] == "urgent"


def test_update_ignores_protected_fields(client: TestClient) -> None:
    task = client.post("/api/tasks", json={"title": "Mix audio", "deadline": _deadline(2)}, headers=_as("emp-1")).json()["data"]

    response = client.patch(
        f"/api/tasks/{task['id']}",
        json={"id": "hijack", "created_by": "emp-9", "created_at": "2000-01-01T00:00:00Z", "title": "Mix audio v2"},
        headers=_as("emp-1"),
    )

    updated = response.json()["data"]
    assert updated["id"] == task["id"]
    assert updated["created_by"] == "emp-1"
    assert updated["created_at"] == task["created_at"]
    assert updated["title"] == "Mix audio v2"


@pytest.mark.parametrize("field", ["deadline", "title", "status", "assigned_to"])
def test_update_with_null_field_is_400_and_task_stays_readable(
    client: TestClient, store: InMemoryDocumentStore, field: str
) -> None:
    task = client.post("/api/tasks", json={"title": "Color grade", "deadline": _deadline(3)}, headers=_as("emp-1")).json()["data"]

    response = client.patch(f"/api/tasks/{task['id']}", json={field: None}, headers=_as("emp-1"))
    reread = client.get(f"/api/tasks/{task['id']}", headers=_as("emp-1"))

    assert response.status_code == 400
    assert field in response.json()["message"]
    assert asyncio.run(store.get_by_id("tasks", task["id"]))[field] is not None
    assert reread.status_code == 200
    assert reread.json()["data"][field] == task[field]


def test_delete_is_executive_only(client: TestClient) -> None:
    task = client.post("/api/tasks", json={"title": "Archive", "deadline": _deadline(2)}, headers=_as("emp-1")).json()["data"]

    denied = client.delete(f"/api/tasks/{task['id']}", headers=_as("emp-1"))
    allowed = client.delete(f"/api/tasks/{task['id']}", headers=_as("exec-1", "executive"))
    missing = client.get(f"/api/tasks/{task['id']}", headers=_as("exec-1", "executive"))

    assert denied.status_code == 403
    assert denied.json() == {"code": 403, "message": "Only executives can delete tasks"}
    assert allowed.status_code == 200
    assert missing.status_code == 404
    assert missing.json() == {"code": 404, "message": "Task not found"}
