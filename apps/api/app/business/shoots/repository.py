from __future__ import annotations

from app.platform.store.collections import COLLECTION_SHOOTS, shoot_assignments_path
from app.platform.store.repository import BaseRepository, ChildRepository


class ShootRepository(BaseRepository):
    collection = COLLECTION_SHOOTS
    fields = frozenset({"clientId", "date", "status", "created_by"})


class ShootAssignmentRepository(ChildRepository):
    fields = frozenset({"userId", "assigned_at"})

    def child_path(self, parent_id: str) -> str:
        return shoot_assignments_path(parent_id)
