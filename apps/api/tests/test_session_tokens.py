from __future__ import annotations

from collections.abc import Generator
from datetime import datetime, timedelta, timezone

import pytest
from jose import jwt

from app.core.auth import create_session_token, decode_session_token
from app.core.config import get_settings
from app.core.rbac import AccessOutcome, evaluate_access, home_for_role, is_api_path, is_public_path


@pytest.fixture(autouse=True)
def fresh_settings() -> Generator[None, None, None]:
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


def test_token_round_trip_carries_identity_and_seven_day_expiry() -> None:
    issued = datetime.now(timezone.utc).replace(microsecond=0)
    token = create_session_token("uid-1", "ana@studio.test", "executive", now=issued)

    claims = decode_session_token(token)

    assert claims is not None
    assert claims.user_id == "uid-1"
    assert claims.email == "ana@studio.test"
    assert claims.role == "executive"
    assert claims.expires_at - claims.issued_at == timedelta(days=7)


def test_token_payload_uses_hs256_and_expected_claim_names() -> None:
    settings = get_settings()
    token = create_session_token("uid-1", None, "employee")

    assert jwt.get_unverified_header(token)["alg"] == "HS256"
    payload = jwt.decode(token, settings.jwt_secret_key, algorithms=["HS256"])
    assert set(payload) == {"userId", "email", "role", "iat", "exp"}


def test_expired_token_is_rejected() -> None:
    token = create_session_token("uid-1", None, "employee", now=datetime.now(timezone.utc) - timedelta(days=8))
    assert decode_session_token(token) is None


def test_token_signed_with_another_secret_is_rejected() -> None:
    forged = jwt.encode(
        {"userId": "uid-1", "role": "executive", "exp": int((datetime.now(timezone.utc) + timedelta(days=1)).timestamp())},
        "some-other-secret-that-is-long-enough",
        algorithm="HS256",
    )
    assert decode_session_token(forged) is None


def test_token_without_role_is_rejected() -> None:
    settings = get_settings()
    token = jwt.encode(
        {"userId": "uid-1", "exp": int((datetime.now(timezone.utc) + timedelta(days=1)).timestamp())},
        settings.jwt_secret_key,
        algorithm="HS256",
    )
    assert decode_session_token(token) is None


def test_garbage_token_is_rejected() -> None:
    assert decode_session_token("not-a-jwt") is None


def test_production_refuses_default_secret(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("APP_ENV", "production")
    monkeypatch.delenv("JWT_SECRET_KEY", raising=False)
    with pytest.raises(ValueError):
        get_settings()


@pytest.mark.parametrize(
    ("path", "expected"),
    [
        ("/", True),
        ("/login", True),
        ("/api/auth/login", True),
        ("/health", True),
        ("/dashboard/employee", False),
        ("/api/tasks", False),
        ("/loginx", False),
    ],
)
def test_public_paths(path: str, expected: bool) -> None:
    assert is_public_path(path) is expected


def test_role_table_decisions() -> None:
    assert evaluate_access("/api/executive/overview", "executive").outcome is AccessOutcome.ALLOW
    assert evaluate_access("/api/tasks", "employee").outcome is AccessOutcome.ALLOW

    denied = evaluate_access("/dashboard/executive/leads", "employee")
    assert denied.outcome is AccessOutcome.FORBIDDEN
    assert denied.required_role == "executive"
    assert denied.redirect_to == "/dashboard/employee"

    unknown = evaluate_access("/dashboard/employee", "contractor")
    assert unknown.redirect_to == "/login"


def test_helpers() -> None:
    assert is_api_path("/api/tasks")
    assert not is_api_path("/apiary")
    assert home_for_role("executive") == "/dashboard/executive"
    assert home_for_role(None) == "/login"
