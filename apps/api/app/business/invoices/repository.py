from __future__ import annotations

from app.platform.store.collections import COLLECTION_INVOICES
from app.platform.store.repository import BaseRepository


class InvoiceRepository(BaseRepository):
    collection = COLLECTION_INVOICES
    fields = frozenset({"clientId", "status", "due_date", "issued_at", "paid_at", "invoice_number"})
