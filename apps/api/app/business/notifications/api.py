from __future__ import annotations

from fastapi import APIRouter, Depends, Query

from app.business.notifications.schemas import MarkAllReadResult, NotificationRead
from app.business.notifications.service import notification_service
from app.core.auth import AuthUser, get_current_user
from app.core.database import get_store
from app.core.responses import Envelope
from app.platform.store.base import DocumentStore


router = APIRouter(prefix="/api/notifications", tags=["notifications"])


@router.get("", response_model=Envelope[list[NotificationRead]])
async def list_notifications(
    unread_only: bool = Query(default=False, alias="unreadOnly"),
    store: DocumentStore = Depends(get_store),
    user: AuthUser = Depends(get_current_user),
) -> Envelope[list[NotificationRead]]:
    notifications = await notification_service.list_for_user(store, user.sub, unread_only=unread_only)
    return Envelope(data=notifications)


@router.post("/read-all", response_model=Envelope[MarkAllReadResult])
async def mark_all_read(
    store: DocumentStore = Depends(get_store),
    user: AuthUser = Depends(get_current_user),
) -> Envelope[MarkAllReadResult]:
    updated = await notification_service.mark_all_read(store, user.sub)
    return Envelope(data=MarkAllReadResult(updated=updated), message="All notifications marked as read")


@router.post("/{notification_id}/read", response_model=Envelope[NotificationRead])
async def mark_read(
    notification_id: str,
    store: DocumentStore = Depends(get_store),
    user: AuthUser = Depends(get_current_user),
) -> Envelope[NotificationRead]:
    return Envelope(data=await notification_service.mark_read(store, user.sub, notification_id))
