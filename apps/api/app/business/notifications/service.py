from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass
from typing import Any

from fastapi import HTTPException, status

from app.business.notifications.repository import NotificationRepository
from app.business.notifications.schemas import NotificationRead
from app.platform.store.base import MAX_BATCH_WRITES, DocumentStore
from app.platform.store.query import Query


logger = logging.getLogger("app.notifications")

FEED_LIMIT = 50


@dataclass(slots=True)
class NotificationService:
    notification_repository: NotificationRepository = NotificationRepository()

    async def create_notification(
        self,
        store: DocumentStore,
        user_id: str,
        *,
        type: str,
        title: str,
        message: str,
        action_url: str | None = None,
        metadata: dict[str, Any] | None = None,
    ) -> str:
        payload: dict[str, Any] = {
            "userId": user_id,
            "type": type,
            "title": title,
            "message": message,
            "read": False,
        }
        if action_url is not None:
            payload["actionUrl"] = action_url
        if metadata:
            payload["metadata"] = metadata
        return await self.notification_repository.create(store, payload)

    async def notify_users(
        self,
        store: DocumentStore,
        user_ids: Iterable[str],
        *,
        type: str,
        title: str,
        message: str,
        action_url: str | None = None,
        metadata: dict[str, Any] | None = None,
    ) -> list[str]:
        created: list[str] = []
        for user_id in dict.fromkeys(user_ids):
            created.append(
                await self.create_notification(
                    store,
                    user_id,
                    type=type,
                    title=title,
                    message=message,
                    action_url=action_url,
                    metadata=metadata,
                )
            )
        return created

    def _unread_query(self, user_id: str) -> Query:
        return self.notification_repository.query().where("userId", "==", user_id).where("read", "==", False)

    async def list_for_user(
        self,
        store: DocumentStore,
        user_id: str,
        *,
        unread_only: bool = False,
        limit: int = FEED_LIMIT,
    ) -> list[NotificationRead]:
        query = self._unread_query(user_id) if unread_only else self.notification_repository.query().where("userId", "==", user_id)
        query = query.order("created_at", descending=True).take(min(limit, FEED_LIMIT))
        records = await self.notification_repository.find(store, query)
        return [NotificationRead.model_validate(record) for record in records]

    async def count_unread(self, store: DocumentStore, user_id: str) -> int:
        return len(await self.notification_repository.find(store, self._unread_query(user_id)))

    async def mark_read(self, store: DocumentStore, user_id: str, notification_id: str) -> NotificationRead:
        record = await self.notification_repository.get(store, notification_id)
        if record is None or record.get("userId") != user_id:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Notification not found")
        await self.notification_repository.update(store, notification_id, {"read": True})
        record = await self.notification_repository.get(store, notification_id)
        return NotificationRead.model_validate(record)

    async def mark_all_read(self, store: DocumentStore, user_id: str) -> int:
        """Flip every unread notification of ``user_id`` in one atomic batch."""
        unread = await self.notification_repository.find(store, self._unread_query(user_id))
        if not unread:
            return 0
        if len(unread) > MAX_BATCH_WRITES:
            raise HTTPException(
                status_code=status.HTTP_409_CONFLICT,
                detail=f"Too many unread notifications to mark at once (limit {MAX_BATCH_WRITES})",
            )

        batch = store.batch()
        for record in unread:
            self.notification_repository.stage_update(batch, record["id"], {"read": True})
        await batch.commit()

        logger.info("notifications.marked_read", extra={"user_id": user_id, "count": len(unread)})
        return len(unread)


notification_service = NotificationService()
