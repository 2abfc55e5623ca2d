from app.platform.store.base import SERVER_TIMESTAMP, Document, DocumentStore, WriteBatch
from app.platform.store.errors import DocumentNotFoundError, QueryError, StoreError
from app.platform.store.memory import InMemoryDocumentStore
from app.platform.store.query import Filter, Op, OrderBy, Query
from app.platform.store.repository import BaseRepository, ChildRepository

__all__ = [
    "SERVER_TIMESTAMP",
    "Document",
    "DocumentStore",
    "WriteBatch",
    "DocumentNotFoundError",
    "QueryError",
    "StoreError",
    "InMemoryDocumentStore",
    "Filter",
    "Op",
    "OrderBy",
    "Query",
    "BaseRepository",
    "ChildRepository",
]
