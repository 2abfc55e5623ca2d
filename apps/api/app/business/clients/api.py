from __future__ import annotations

from fastapi import APIRouter, Depends, status

from app.business.clients.schemas import ClientCreate, ClientRead
from app.business.clients.service import client_service
from app.core.auth import AuthUser, get_current_user
from app.core.database import get_store
from app.core.responses import Envelope
from app.platform.store.base import DocumentStore


router = APIRouter(prefix="/api/clients", tags=["clients"])


@router.get("", response_model=Envelope[list[ClientRead]])
async def list_clients(
    store: DocumentStore = Depends(get_store),
    user: AuthUser = Depends(get_current_user),
) -> Envelope[list[ClientRead]]:
    return Envelope(data=await client_service.list_clients(store))


@router.post("", response_model=Envelope[ClientRead], status_code=status.HTTP_201_CREATED)
async def create_client(
    payload: ClientCreate,
    store: DocumentStore = Depends(get_store),
    user: AuthUser = Depends(get_current_user),
) -> Envelope[ClientRead]:
    client = await client_service.create_client(store, payload)
    return Envelope(data=client, message="Client created successfully")


@router.get("/{client_id}", response_model=Envelope[ClientRead])
async def get_client(
    client_id: str,
    store: DocumentStore = Depends(get_store),
    user: AuthUser = Depends(get_current_user),
) -> Envelope[ClientRead]:
    return Envelope(data=await client_service.get_client(store, client_id))
