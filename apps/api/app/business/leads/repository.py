from __future__ import annotations

from app.platform.store.collections import COLLECTION_LEADS
from app.platform.store.repository import BaseRepository


class LeadRepository(BaseRepository):
    collection = COLLECTION_LEADS
    fields = frozenset({"status", "handled_by", "contact_email"})
