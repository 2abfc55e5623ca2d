from __future__ import annotations

from fastapi import APIRouter, Depends, Query, status

from app.business.leads.schemas import LeadCreate, LeadRead, LeadStatus, LeadStatusUpdate
from app.business.leads.service import lead_service
from app.core.auth import AuthUser, get_current_user
from app.core.database import get_store
from app.core.responses import Envelope
from app.platform.store.base import DocumentStore


router = APIRouter(prefix="/api/leads", tags=["leads"])


@router.get("", response_model=Envelope[list[LeadRead]])
async def list_leads(
    lead_status: LeadStatus | None = Query(default=None, alias="status"),
    store: DocumentStore = Depends(get_store),
    user: AuthUser = Depends(get_current_user),
) -> Envelope[list[LeadRead]]:
    if lead_status:
        leads = await lead_service.list_leads_by_status(store, lead_status)
    else:
        leads = await lead_service.list_all_leads(store)
    return Envelope(data=leads)


@router.post("", response_model=Envelope[LeadRead], status_code=status.HTTP_201_CREATED)
async def create_lead(
    payload: LeadCreate,
    store: DocumentStore = Depends(get_store),
    user: AuthUser = Depends(get_current_user),
) -> Envelope[LeadRead]:
    lead = await lead_service.create_lead(store, payload)
    return Envelope(data=lead, message="Lead created successfully")


@router.patch("/{lead_id}", response_model=Envelope[LeadRead])
async def update_lead_status(
    lead_id: str,
    payload: LeadStatusUpdate,
    store: DocumentStore = Depends(get_store),
    user: AuthUser = Depends(get_current_user),
) -> Envelope[LeadRead]:
    lead = await lead_service.update_lead_status(store, user, lead_id, payload)
    return Envelope(data=lead, message="Lead updated successfully")
