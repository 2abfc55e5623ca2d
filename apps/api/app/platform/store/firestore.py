from __future__ import annotations

from typing import Any

from google.api_core import exceptions as google_exceptions
from google.cloud import firestore
from google.cloud.firestore_v1.base_query import FieldFilter

from app.platform.store.base import (
    MAX_BATCH_WRITES,
    SERVER_TIMESTAMP,
    BatchOperation,
    Document,
    DocumentStore,
    strip_reserved,
)
from app.platform.store.errors import DocumentNotFoundError, StoreError
from app.platform.store.query import Query


def _to_wire(data: dict[str, Any]) -> dict[str, Any]:
    return {key: (firestore.SERVER_TIMESTAMP if value is SERVER_TIMESTAMP else value) for key, value in data.items()}


class FirestoreDocumentStore(DocumentStore):
    def __init__(self, client: firestore.AsyncClient) -> None:
        self._client = client

    @classmethod
    def from_project(cls, project_id: str | None) -> FirestoreDocumentStore:
        # Credentials come from GOOGLE_APPLICATION_CREDENTIALS / ADC.
        return cls(firestore.AsyncClient(project=project_id))

    def _collection(self, collection: str) -> firestore.AsyncCollectionReference:
        return self._client.collection(collection)

    async def create(self, collection: str, data: dict[str, Any]) -> str:
        payload = _to_wire(strip_reserved(data))
        payload["created_at"] = firestore.SERVER_TIMESTAMP
        payload["updated_at"] = firestore.SERVER_TIMESTAMP
        try:
            _, reference = await self._collection(collection).add(payload)
        except google_exceptions.GoogleAPICallError as exc:
            raise StoreError(f"create failed in '{collection}'") from exc
        return reference.id

    async def set(self, collection: str, document_id: str, data: dict[str, Any]) -> None:
        reference = self._collection(collection).document(document_id)
        payload = _to_wire(strip_reserved(data))
        payload["updated_at"] = firestore.SERVER_TIMESTAMP
        try:
            snapshot = await reference.get()
            if snapshot.exists:
                payload["created_at"] = (snapshot.to_dict() or {}).get("created_at", firestore.SERVER_TIMESTAMP)
            else:
                payload["created_at"] = firestore.SERVER_TIMESTAMP
            await reference.set(payload)
        except google_exceptions.GoogleAPICallError as exc:
            raise StoreError(f"set failed for '{collection}/{document_id}'") from exc

    async def get_by_id(self, collection: str, document_id: str) -> Document | None:
        try:
            snapshot = await self._collection(collection).document(document_id).get()
        except google_exceptions.GoogleAPICallError as exc:
            raise StoreError(f"read failed for '{collection}/{document_id}'") from exc
        if not snapshot.exists:
            return None
        return {"id": snapshot.id, **(snapshot.to_dict() or {})}

    async def get_many(self, collection: str, query: Query | None = None) -> list[Document]:
        query = query or Query()
        statement: Any = self._collection(collection)
        for item in query.filters:
            value = list(item.value) if isinstance(item.value, (set, frozenset, tuple)) else item.value
            statement = statement.where(filter=FieldFilter(item.field, item.op.value, value))
        if query.order_by is not None:
            direction = firestore.Query.DESCENDING if query.order_by.descending else firestore.Query.ASCENDING
            statement = statement.order_by(query.order_by.field, direction=direction)
        if query.limit is not None:
            statement = statement.limit(query.limit)

        try:
            return [{"id": snapshot.id, **(snapshot.to_dict() or {})} async for snapshot in statement.stream()]
        except google_exceptions.GoogleAPICallError as exc:
            raise StoreError(f"query failed in '{collection}'") from exc

    async def update(self, collection: str, document_id: str, partial: dict[str, Any]) -> None:
        payload = _to_wire(strip_reserved(partial))
        payload["updated_at"] = firestore.SERVER_TIMESTAMP
        try:
            await self._collection(collection).document(document_id).update(payload)
        except google_exceptions.NotFound as exc:
            raise DocumentNotFoundError(collection, document_id) from exc
        except google_exceptions.GoogleAPICallError as exc:
            raise StoreError(f"update failed for '{collection}/{document_id}'") from exc

    async def delete(self, collection: str, document_id: str) -> None:
        try:
            await self._collection(collection).document(document_id).delete()
        except google_exceptions.GoogleAPICallError as exc:
            raise StoreError(f"delete failed for '{collection}/{document_id}'") from exc

    async def commit_batch(self, operations: list[BatchOperation]) -> None:
        if len(operations) > MAX_BATCH_WRITES:
            raise StoreError(f"batch of {len(operations)} writes exceeds the {MAX_BATCH_WRITES} write limit")

        batch = self._client.batch()
        for operation in operations:
            reference = self._collection(operation.collection).document(operation.document_id)
            if operation.kind == "delete":
                batch.delete(reference)
                continue
            payload = _to_wire(operation.data)
            payload["updated_at"] = firestore.SERVER_TIMESTAMP
            batch.update(reference, payload)

        try:
            await batch.commit()
        except google_exceptions.NotFound as exc:
            raise DocumentNotFoundError(operations[0].collection, "batch") from exc
        except google_exceptions.GoogleAPICallError as exc:
            raise StoreError("batch commit failed") from exc
