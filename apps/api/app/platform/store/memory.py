from __future__ import annotations

import copy
import uuid
from collections.abc import Callable
from datetime import datetime
from typing import Any

from app.core.clock import utcnow
from app.platform.store.base import (
    SERVER_TIMESTAMP,
    BatchOperation,
    Document,
    DocumentStore,
    strip_reserved,
)
from app.platform.store.errors import DocumentNotFoundError
from app.platform.store.query import Filter, Op, Query


_Collections = dict[str, dict[str, dict[str, Any]]]


def _matches(document: dict[str, Any], item: Filter) -> bool:
    if item.field not in document:
        return False
    value = document[item.field]
    try:
        if item.op is Op.EQ:
            return value == item.value
        if item.op is Op.LT:
            return value is not None and value < item.value
        if item.op is Op.LTE:
            return value is not None and value <= item.value
        if item.op is Op.GT:
            return value is not None and value > item.value
        if item.op is Op.GTE:
            return value is not None and value >= item.value
        if item.op is Op.ARRAY_CONTAINS:
            return isinstance(value, list) and item.value in value
        if item.op is Op.IN:
            return value in item.value
    except TypeError:
        return False
    return False


class InMemoryDocumentStore(DocumentStore):
    """Process-local store with Firestore-like query semantics.

    Used for local development and tests. Documents are copied on every read
    and write so callers never share state with the store.
    """

    def __init__(self, clock: Callable[[], datetime] = utcnow) -> None:
        self._clock = clock
        self._collections: _Collections = {}

    @staticmethod
    def _new_id() -> str:
        return uuid.uuid4().hex[:20]

    def _resolve(self, data: dict[str, Any], now: datetime) -> dict[str, Any]:
        return {key: (now if value is SERVER_TIMESTAMP else copy.deepcopy(value)) for key, value in data.items()}

    async def create(self, collection: str, data: dict[str, Any]) -> str:
        now = self._clock()
        document_id = self._new_id()
        record = self._resolve(strip_reserved(data), now)
        record["created_at"] = now
        record["updated_at"] = now
        self._collections.setdefault(collection, {})[document_id] = record
        return document_id

    async def set(self, collection: str, document_id: str, data: dict[str, Any]) -> None:
        self._apply_operation(self._collections, BatchOperation("set", collection, document_id, strip_reserved(data)), self._clock())

    async def get_by_id(self, collection: str, document_id: str) -> Document | None:
        record = self._collections.get(collection, {}).get(document_id)
        if record is None:
            return None
        return {"id": document_id, **copy.deepcopy(record)}

    async def get_many(self, collection: str, query: Query | None = None) -> list[Document]:
        query = query or Query()
        rows = [
            {"id": document_id, **copy.deepcopy(record)}
            for document_id, record in self._collections.get(collection, {}).items()
            if all(_matches(record, item) for item in query.filters)
        ]
        if query.order_by is not None:
            field_name = query.order_by.field
            rows = [row for row in rows if row.get(field_name) is not None]
            rows.sort(key=lambda row: row[field_name], reverse=query.order_by.descending)
        if query.limit is not None:
            rows = rows[: query.limit]
        return rows

    async def update(self, collection: str, document_id: str, partial: dict[str, Any]) -> None:
        self._apply_operation(self._collections, BatchOperation("update", collection, document_id, strip_reserved(partial)), self._clock())

    async def delete(self, collection: str, document_id: str) -> None:
        self._collections.get(collection, {}).pop(document_id, None)

    async def commit_batch(self, operations: list[BatchOperation]) -> None:
        now = self._clock()
        touched = {operation.collection for operation in operations}
        staged: _Collections = {name: copy.deepcopy(self._collections.get(name, {})) for name in touched}
        for operation in operations:
            self._apply_operation(staged, operation, now)
        self._collections.update(staged)

    def _apply_operation(self, collections: _Collections, operation: BatchOperation, now: datetime) -> None:
        documents = collections.setdefault(operation.collection, {})
        if operation.kind == "delete":
            documents.pop(operation.document_id, None)
            return

        existing = documents.get(operation.document_id)
        if operation.kind == "update":
            if existing is None:
                raise DocumentNotFoundError(operation.collection, operation.document_id)
            existing.update(self._resolve(operation.data, now))
            existing["updated_at"] = now
            return

        record = self._resolve(operation.data, now)
        record["created_at"] = existing["created_at"] if existing is not None else now
        record["updated_at"] = now
        documents[operation.document_id] = record
