from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any

from app.metrics import observe_store_operation
from app.otel import store_span
from app.platform.store.base import Document, DocumentStore, WriteBatch
from app.platform.store.query import Query


_TIMESTAMP_FIELDS = frozenset({"created_at", "updated_at"})


class BaseRepository:
    """Typed entry point to one collection.

    ``fields`` lists what callers may filter or order on; queries naming
    anything else are rejected before reaching the store.
    """

    collection = ""
    fields: frozenset[str] = frozenset()

    def path(self, parent_id: str | None = None) -> str:
        return self.collection

    def query(self) -> Query:
        return Query()

    @contextmanager
    def _operation(self, operation: str, path: str) -> Iterator[None]:
        observe_store_operation(operation, path)
        with store_span(operation, path):
            yield

    async def create(self, store: DocumentStore, data: dict[str, Any], *, parent_id: str | None = None) -> str:
        path = self.path(parent_id)
        with self._operation("create", path):
            return await store.create(path, data)

    async def set(self, store: DocumentStore, document_id: str, data: dict[str, Any]) -> None:
        path = self.path()
        with self._operation("set", path):
            await store.set(path, document_id, data)

    async def get(self, store: DocumentStore, document_id: str, *, parent_id: str | None = None) -> Document | None:
        path = self.path(parent_id)
        with self._operation("get", path):
            return await store.get_by_id(path, document_id)

    async def find(
        self,
        store: DocumentStore,
        query: Query | None = None,
        *,
        parent_id: str | None = None,
    ) -> list[Document]:
        query = query or self.query()
        query.check_fields(self.fields | _TIMESTAMP_FIELDS)
        path = self.path(parent_id)
        with self._operation("query", path):
            return await store.get_many(path, query)

    async def update(self, store: DocumentStore, document_id: str, partial: dict[str, Any]) -> None:
        path = self.path()
        with self._operation("update", path):
            await store.update(path, document_id, partial)

    async def delete(self, store: DocumentStore, document_id: str) -> None:
        path = self.path()
        with self._operation("delete", path):
            await store.delete(path, document_id)

    def stage_update(self, batch: WriteBatch, document_id: str, partial: dict[str, Any]) -> None:
        batch.update(self.path(), document_id, partial)


class ChildRepository(BaseRepository):
    """Repository for a sub-collection under a parent document."""

    def path(self, parent_id: str | None = None) -> str:
        if not parent_id:
            raise ValueError(f"{type(self).__name__} requires a parent id")
        return self.child_path(parent_id)

    def child_path(self, parent_id: str) -> str:
        raise NotImplementedError
