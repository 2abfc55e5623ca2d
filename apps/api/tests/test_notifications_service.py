from __future__ import annotations

import asyncio

import pytest
from fastapi import HTTPException

from app.business.notifications.service import notification_service
from app.platform.store import InMemoryDocumentStore, StoreError
from app.platform.store.base import BatchOperation


@pytest.fixture()
def store() -> InMemoryDocumentStore:
    return InMemoryDocumentStore()


def _seed(store: InMemoryDocumentStore, user_id: str, count: int) -> list[str]:
    async def create_all() -> list[str]:
        return [
            await notification_service.create_notification(
                store, user_id, type="system", title=f"Note {index}", message="hello"
            )
            for index in range(count)
        ]

    return asyncio.run(create_all())


def test_feed_is_capped_and_filtered_by_owner(store: InMemoryDocumentStore) -> None:
    _seed(store, "u1", 55)
    _seed(store, "u2", 2)

    feed = asyncio.run(notification_service.list_for_user(store, "u1"))

    assert len(feed) == 50
    assert {item.user_id for item in feed} == {"u1"}
    assert asyncio.run(notification_service.count_unread(store, "u2")) == 2


def test_mark_read_rejects_other_users_notification(store: InMemoryDocumentStore) -> None:
    [foreign] = _seed(store, "u2", 1)

    with pytest.raises(HTTPException) as exc_info:
        asyncio.run(notification_service.mark_read(store, "u1", foreign))

    assert exc_info.value.status_code == 404


def test_mark_all_read_flips_every_unread_notification(store: InMemoryDocumentStore) -> None:
    _seed(store, "u1", 60)
    _seed(store, "u2", 3)

    updated = asyncio.run(notification_service.mark_all_read(store, "u1"))

    assert updated == 60
    assert asyncio.run(notification_service.count_unread(store, "u1")) == 0
    assert asyncio.run(notification_service.count_unread(store, "u2")) == 3
    assert asyncio.run(notification_service.list_for_user(store, "u1", unread_only=True)) == []


def test_mark_all_read_is_atomic(store: InMemoryDocumentStore, monkeypatch: pytest.MonkeyPatch) -> None:
    _seed(store, "u1", 4)
    original_apply = store._apply_operation
    seen: list[str] = []

    def failing_apply(collections, operation: BatchOperation, now):  # type: ignore[no-untyped-def]
        seen.append(operation.document_id)
        if len(seen) == 3:
            raise StoreError("connection reset")
        original_apply(collections, operation, now)

    monkeypatch.setattr(store, "_apply_operation", failing_apply)

    with pytest.raises(StoreError):
        asyncio.run(notification_service.mark_all_read(store, "u1"))

    assert asyncio.run(notification_service.count_unread(store, "u1")) == 4


def test_mark_all_read_refuses_more_than_one_batch(store: InMemoryDocumentStore) -> None:
    _seed(store, "u1", 501)

    with pytest.raises(HTTPException) as exc_info:
        asyncio.run(notification_service.mark_all_read(store, "u1"))

    assert exc_info.value.status_code == 409
    assert asyncio.run(notification_service.count_unread(store, "u1")) == 501


def test_notify_users_deduplicates_recipients(store: InMemoryDocumentStore) -> None:
    created = asyncio.run(
        notification_service.notify_users(store, ["u1", "u2", "u1"], type="task", title="t", message="m")
    )
    assert len(created) == 2
