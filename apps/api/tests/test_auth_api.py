from __future__ import annotations

import asyncio
from collections.abc import Generator
from typing import Any

import pytest
from fastapi.testclient import TestClient

from app.auth.identity import IdentityProvider, IdentityVerificationError, VerifiedIdentity, get_identity_provider
from app.core.auth import decode_session_token
from app.core.config import get_settings
from app.core.database import get_store
from app.main import app
from app.platform.store import InMemoryDocumentStore, StoreError


class FakeIdentityProvider(IdentityProvider):
    def __init__(self) -> None:
        self.identities: dict[str, VerifiedIdentity] = {}

    async def verify(self, id_token: str) -> VerifiedIdentity:
        identity = self.identities.get(id_token)
        if identity is None:
            raise IdentityVerificationError("unknown token")
        return identity


class LoginHistoryDownStore(InMemoryDocumentStore):
    async def create(self, collection: str, data: dict[str, Any]) -> str:
        if collection.endswith("/login_history"):
            raise StoreError("write refused")
        return await super().create(collection, data)


@pytest.fixture(autouse=True)
def fresh_settings() -> Generator[None, None, None]:
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture()
def provider() -> FakeIdentityProvider:
    fake = FakeIdentityProvider()
    fake.identities["good-token"] = VerifiedIdentity(uid="uid-1", email="ana@studio.test", name="Ana")
    return fake


@pytest.fixture()
def store() -> InMemoryDocumentStore:
    return InMemoryDocumentStore()


@pytest.fixture()
def client(store: InMemoryDocumentStore, provider: FakeIdentityProvider) -> Generator[TestClient, None, None]:
    app.dependency_overrides[get_store] = lambda: store
    app.dependency_overrides[get_identity_provider] = lambda: provider
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


def test_login_requires_id_token(client: TestClient) -> None:
    response = client.post("/api/auth/login", json={})
    assert response.status_code == 400
    assert response.json() == {"code": 400, "message": "ID token is required"}


def test_login_with_rejected_token_is_401(client: TestClient) -> None:
    response = client.post("/api/auth/login", json={"idToken": "forged"})
    assert response.status_code == 401
    assert response.json()["code"] == 401


def test_first_login_creates_employee_and_sets_cookie(client: TestClient, store: InMemoryDocumentStore) -> None:
    response = client.post(
        "/api/auth/login",
        json={"idToken": "good-token"},
        headers={"User-Agent": "pytest-agent", "X-Forwarded-For": "10.0.0.7, 10.0.0.1"},
    )

    assert response.status_code == 200
    body = response.json()
    assert body["success"] is True
    assert body["redirectUrl"] == "/dashboard/employee"
    assert body["user"] == {
        "id": "uid-1",
        "email": "ana@studio.test",
        "name": "Ana",
        "role": "employee",
        "designation": "Team Member",
    }

    set_cookie = response.headers["set-cookie"]
    assert set_cookie.startswith("auth-token=")
    assert "HttpOnly" in set_cookie
    assert "samesite=lax" in set_cookie.lower()
    assert "Path=/" in set_cookie
    assert "Max-Age=604800" in set_cookie

    claims = decode_session_token(response.cookies["auth-token"])
    assert claims is not None
    assert (claims.user_id, claims.role) == ("uid-1", "employee")

    history = asyncio.run(store.get_many("users/uid-1/login_history"))
    assert len(history) == 1
    assert history[0]["device"] == "pytest-agent"
    assert history[0]["ip"] == "10.0.0.7"
    assert history[0]["status"] == "success"


def test_existing_executive_is_redirected_to_executive_dashboard(
    client: TestClient,
    store: InMemoryDocumentStore,
) -> None:
    asyncio.run(store.set("users", "uid-1", {"email": "ana@studio.test", "name": "Ana", "role": "executive"}))

    response = client.post("/api/auth/login", json={"idToken": "good-token"})

    assert response.status_code == 200
    assert response.json()["redirectUrl"] == "/dashboard/executive"
    # session cookie opens the executive area
    overview = client.get("/api/executive/overview")
    assert overview.status_code == 200


def test_login_history_failure_does_not_block_login(provider: FakeIdentityProvider) -> None:
    failing_store = LoginHistoryDownStore()
    app.dependency_overrides[get_store] = lambda: failing_store
    app.dependency_overrides[get_identity_provider] = lambda: provider
    try:
        with TestClient(app) as client:
            response = client.post("/api/auth/login", json={"idToken": "good-token"})
    finally:
        app.dependency_overrides.clear()

    assert response.status_code == 200
    assert asyncio.run(failing_store.get_by_id("users", "uid-1")) is not None


def test_logout_clears_cookie(client: TestClient) -> None:
    client.post("/api/auth/login", json={"idToken": "good-token"})
    assert client.get("/api/me").status_code == 200

    response = client.post("/api/auth/logout")

    assert response.status_code == 200
    assert response.json() == {"success": True, "message": "Logged out successfully"}
    assert "auth-token=" in response.headers["set-cookie"]
    assert client.get("/api/me").status_code == 401


def test_clearing_profile_name_is_rejected_and_login_keeps_working(
    client: TestClient, store: InMemoryDocumentStore
) -> None:
    client.post("/api/auth/login", json={"idToken": "good-token"})

    rejected = client.patch("/api/me", json={"name": None})
    renamed = client.patch("/api/me", json={"designation": "Editor"})
    again = client.post("/api/auth/login", json={"idToken": "good-token"})

    assert rejected.status_code == 400
    assert rejected.json()["code"] == 400
    assert "name" in rejected.json()["message"]
    assert asyncio.run(store.get_by_id("users", "uid-1"))["name"] == "Ana"
    assert renamed.json()["data"]["designation"] == "Editor"
    assert again.status_code == 200
    assert again.json()["user"]["name"] == "Ana"
