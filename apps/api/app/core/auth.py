from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Any

from fastapi import Depends, HTTPException, status
from jose import JWTError, jwt

from app.core.clock import utcnow
from app.core.config import get_settings
from app.core.context import RequestContext, get_request_context


@dataclass(frozen=True)
class SessionClaims:
    user_id: str
    email: str | None
    role: str
    issued_at: datetime
    expires_at: datetime


@dataclass
class AuthUser:
    sub: str
    email: str | None
    role: str

    @property
    def is_executive(self) -> bool:
        return self.role == "executive"


def create_session_token(user_id: str, email: str | None, role: str, *, now: datetime | None = None) -> str:
    settings = get_settings()
    issued_at = now or utcnow()
    payload: dict[str, Any] = {
        "userId": user_id,
        "email": email,
        "role": role,
        "iat": int(issued_at.timestamp()),
        "exp": int((issued_at + timedelta(days=settings.session_ttl_days)).timestamp()),
    }
    return jwt.encode(payload, settings.jwt_secret_key, algorithm=settings.jwt_algorithm)


def decode_session_token(token: str) -> SessionClaims | None:
    """Return the claims of a valid session token, ``None`` for bad signature, expiry or shape."""
    settings = get_settings()
    try:
        payload = jwt.decode(
            token,
            settings.jwt_secret_key,
            algorithms=[settings.jwt_algorithm],
            options={"require_exp": True},
        )
    except JWTError:
        return None

    user_id = payload.get("userId")
    role = payload.get("role")
    if not isinstance(user_id, str) or not user_id or not isinstance(role, str) or not role:
        return None
    email = payload.get("email")
    return SessionClaims(
        user_id=user_id,
        email=email if isinstance(email, str) else None,
        role=role,
        issued_at=datetime.fromtimestamp(int(payload.get("iat", 0)), tz=timezone.utc),
        expires_at=datetime.fromtimestamp(int(payload["exp"]), tz=timezone.utc),
    )


async def get_current_user(context: RequestContext = Depends(get_request_context)) -> AuthUser:
    if not context.is_authenticated or context.role is None:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Authentication required")
    return AuthUser(sub=context.user_id or "", email=context.email, role=context.role)
