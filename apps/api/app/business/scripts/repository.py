from __future__ import annotations

from app.platform.store.collections import COLLECTION_SCRIPTS, script_versions_path
from app.platform.store.repository import BaseRepository, ChildRepository


class ScriptRepository(BaseRepository):
    collection = COLLECTION_SCRIPTS
    fields = frozenset({"created_by", "tone"})


class ScriptVersionRepository(ChildRepository):
    fields = frozenset({"version_number"})

    def child_path(self, parent_id: str) -> str:
        return script_versions_path(parent_id)
