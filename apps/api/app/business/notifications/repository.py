from __future__ import annotations

from app.platform.store.collections import COLLECTION_NOTIFICATIONS
from app.platform.store.repository import BaseRepository


class NotificationRepository(BaseRepository):
    collection = COLLECTION_NOTIFICATIONS
    fields = frozenset({"userId", "read", "type"})
