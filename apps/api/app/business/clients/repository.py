from __future__ import annotations

from app.platform.store.collections import COLLECTION_CLIENTS
from app.platform.store.repository import BaseRepository


class ClientRepository(BaseRepository):
    collection = COLLECTION_CLIENTS
    fields = frozenset({"name", "email", "company"})
