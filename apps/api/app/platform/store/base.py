from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any

from app.platform.store.errors import StoreError
from app.platform.store.query import Query


class _ServerTimestamp:
    def __repr__(self) -> str:
        return "SERVER_TIMESTAMP"


SERVER_TIMESTAMP: Any = _ServerTimestamp()
"""Field value replaced by the store's own clock on write."""

MAX_BATCH_WRITES = 500

RESERVED_FIELDS = frozenset({"id", "created_at", "updated_at"})

Document = dict[str, Any]


def strip_reserved(data: dict[str, Any]) -> dict[str, Any]:
    return {key: value for key, value in data.items() if key not in RESERVED_FIELDS}


@dataclass(slots=True)
class BatchOperation:
    kind: str
    collection: str
    document_id: str
    data: dict[str, Any] = field(default_factory=dict)


class WriteBatch:
    """Collects writes and applies them all-or-nothing on ``commit``."""

    def __init__(self, store: DocumentStore) -> None:
        self._store = store
        self.operations: list[BatchOperation] = []

    def __len__(self) -> int:
        return len(self.operations)

    def update(self, collection: str, document_id: str, partial: dict[str, Any]) -> WriteBatch:
        self.operations.append(BatchOperation("update", collection, document_id, strip_reserved(partial)))
        return self

    def delete(self, collection: str, document_id: str) -> WriteBatch:
        self.operations.append(BatchOperation("delete", collection, document_id))
        return self

    async def commit(self) -> None:
        if not self.operations:
            return
        if len(self.operations) > MAX_BATCH_WRITES:
            raise StoreError(f"batch of {len(self.operations)} writes exceeds the {MAX_BATCH_WRITES} write limit")
        await self._store.commit_batch(self.operations)


class DocumentStore(ABC):
    """Async adapter over a document database.

    ``create``/``set``/``update`` always stamp ``created_at``/``updated_at``
    with server time; caller-supplied values for those fields are dropped.
    Backend faults surface as :class:`StoreError` and are never retried here.
    """

    @abstractmethod
    async def create(self, collection: str, data: dict[str, Any]) -> str: ...

    @abstractmethod
    async def set(self, collection: str, document_id: str, data: dict[str, Any]) -> None: ...

    @abstractmethod
    async def get_by_id(self, collection: str, document_id: str) -> Document | None: ...

    @abstractmethod
    async def get_many(self, collection: str, query: Query | None = None) -> list[Document]: ...

    @abstractmethod
    async def update(self, collection: str, document_id: str, partial: dict[str, Any]) -> None: ...

    @abstractmethod
    async def delete(self, collection: str, document_id: str) -> None: ...

    @abstractmethod
    async def commit_batch(self, operations: list[BatchOperation]) -> None: ...

    def batch(self) -> WriteBatch:
        return WriteBatch(self)
