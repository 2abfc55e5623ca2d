from __future__ import annotations

from app.platform.store.collections import COLLECTION_USERS, login_history_path
from app.platform.store.repository import BaseRepository, ChildRepository


class UserRepository(BaseRepository):
    collection = COLLECTION_USERS
    fields = frozenset({"email", "role", "name"})


class LoginHistoryRepository(ChildRepository):
    fields = frozenset({"timestamp", "status"})

    def child_path(self, parent_id: str) -> str:
        return login_history_path(parent_id)
