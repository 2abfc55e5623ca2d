from __future__ import annotations

import logging
from dataclasses import dataclass

from fastapi import HTTPException, status

from app.business.clients.repository import ClientRepository
from app.business.clients.schemas import ClientCreate, ClientRead
from app.platform.store.base import DocumentStore


logger = logging.getLogger("app.clients")


@dataclass(slots=True)
class ClientService:
    client_repository: ClientRepository = ClientRepository()

    async def create_client(self, store: DocumentStore, payload: ClientCreate) -> ClientRead:
        client_id = await self.client_repository.create(store, payload.model_dump())
        logger.info("client.created", extra={"document_id": client_id})
        return await self.get_client(store, client_id)

    async def get_client(self, store: DocumentStore, client_id: str) -> ClientRead:
        record = await self.client_repository.get(store, client_id)
        if record is None:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Client not found")
        return ClientRead.model_validate(record)

    async def list_clients(self, store: DocumentStore) -> list[ClientRead]:
        query = self.client_repository.query().order("name")
        return [ClientRead.model_validate(record) for record in await self.client_repository.find(store, query)]


client_service = ClientService()
