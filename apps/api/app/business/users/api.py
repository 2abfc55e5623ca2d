from __future__ import annotations

from fastapi import APIRouter, Depends

from app.business.users.schemas import LoginHistoryRead, UserProfileUpdate, UserRead
from app.business.users.service import user_service
from app.core.auth import AuthUser, get_current_user
from app.core.database import get_store
from app.core.responses import Envelope
from app.platform.store.base import DocumentStore


router = APIRouter(prefix="/api/me", tags=["users"])


@router.get("", response_model=Envelope[UserRead])
async def get_profile(
    store: DocumentStore = Depends(get_store),
    user: AuthUser = Depends(get_current_user),
) -> Envelope[UserRead]:
    return Envelope(data=await user_service.require_user(store, user.sub))


@router.patch("", response_model=Envelope[UserRead])
async def update_profile(
    payload: UserProfileUpdate,
    store: DocumentStore = Depends(get_store),
    user: AuthUser = Depends(get_current_user),
) -> Envelope[UserRead]:
    updated = await user_service.update_profile(store, user.sub, payload)
    return Envelope(data=updated, message="Profile updated successfully")


@router.get("/logins", response_model=Envelope[list[LoginHistoryRead]])
async def list_logins(
    store: DocumentStore = Depends(get_store),
    user: AuthUser = Depends(get_current_user),
) -> Envelope[list[LoginHistoryRead]]:
    return Envelope(data=await user_service.list_logins(store, user.sub))
