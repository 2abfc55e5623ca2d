from __future__ import annotations

from app.platform.store.collections import COLLECTION_TASKS
from app.platform.store.repository import BaseRepository


class TaskRepository(BaseRepository):
    collection = COLLECTION_TASKS
    fields = frozenset({"status", "priority", "deadline", "assigned_to", "created_by", "project"})
