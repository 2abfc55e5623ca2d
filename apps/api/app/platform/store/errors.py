from __future__ import annotations


class StoreError(Exception):
    """Opaque I/O failure raised by a document store backend."""


class DocumentNotFoundError(StoreError):
    def __init__(self, collection: str, document_id: str) -> None:
        self.collection = collection
        self.document_id = document_id
        super().__init__(f"Document '{document_id}' not found in '{collection}'")


class QueryError(ValueError):
    """Raised when a query combines filters the store cannot serve."""
