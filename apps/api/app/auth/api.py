from __future__ import annotations

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse

from app.auth.identity import IdentityProvider, get_identity_provider
from app.auth.schemas import LoginRequest
from app.auth.service import session_service
from app.core.config import get_settings
from app.core.database import get_store
from app.platform.store.base import DocumentStore


router = APIRouter(prefix="/api/auth", tags=["auth"])


def _client_ip(request: Request) -> str:
    forwarded = request.headers.get("x-forwarded-for")
    if forwarded:
        return forwarded.split(",")[0].strip()
    return request.headers.get("x-real-ip") or "Unknown"


@router.post("/login")
async def login(
    payload: LoginRequest,
    request: Request,
    store: DocumentStore = Depends(get_store),
    provider: IdentityProvider = Depends(get_identity_provider),
) -> JSONResponse:
    session = await session_service.login(
        store,
        provider,
        payload.id_token,
        device=request.headers.get("user-agent") or "Unknown",
        ip=_client_ip(request),
    )

    settings = get_settings()
    response = JSONResponse(content=session.response.model_dump(mode="json", by_alias=True))
    response.set_cookie(
        key=settings.session_cookie_name,
        value=session.token,
        max_age=settings.session_ttl_days * 24 * 60 * 60,
        path="/",
        httponly=True,
        secure=settings.is_production,
        samesite="lax",
    )
    return response


@router.post("/logout")
async def logout() -> JSONResponse:
    settings = get_settings()
    response = JSONResponse(content={"success": True, "message": "Logged out successfully"})
    response.delete_cookie(key=settings.session_cookie_name, path="/")
    return response
