from __future__ import annotations

import logging

from app.core.config import get_settings
from app.platform.store.base import DocumentStore
from app.platform.store.firestore import FirestoreDocumentStore
from app.platform.store.memory import InMemoryDocumentStore


logger = logging.getLogger("app.store")

_store: DocumentStore | None = None


def build_store() -> DocumentStore:
    settings = get_settings()
    backend = settings.store_backend.lower()
    if backend == "firestore":
        logger.info("store.backend", extra={"status": "firestore"})
        return FirestoreDocumentStore.from_project(settings.firebase_project_id)
    if backend == "memory":
        logger.info("store.backend", extra={"status": "memory"})
        return InMemoryDocumentStore()
    raise ValueError(f"unsupported store backend '{settings.store_backend}'")


def get_store() -> DocumentStore:
    global _store
    if _store is None:
        _store = build_store()
    return _store
