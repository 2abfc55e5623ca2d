from __future__ import annotations

from fastapi import APIRouter, Depends, Query, status

from app.business.invoices.schemas import InvoiceCreate, InvoicePayment, InvoiceRead
from app.business.invoices.service import invoice_service
from app.core.auth import AuthUser
from app.core.database import get_store
from app.core.rbac import require_role
from app.core.responses import Envelope
from app.platform.store.base import DocumentStore


router = APIRouter(prefix="/api/invoices", tags=["invoices"])

require_executive = require_role("executive")


@router.get("", response_model=Envelope[list[InvoiceRead]])
async def list_invoices(
    unpaid: bool = False,
    client_id: str | None = Query(default=None, alias="clientId"),
    store: DocumentStore = Depends(get_store),
    user: AuthUser = Depends(require_executive),
) -> Envelope[list[InvoiceRead]]:
    if client_id:
        invoices = await invoice_service.list_invoices_by_client(store, client_id)
    elif unpaid:
        invoices = await invoice_service.list_unpaid_invoices(store)
    else:
        invoices = await invoice_service.list_all_invoices(store)
    return Envelope(data=invoices)


@router.post("", response_model=Envelope[InvoiceRead], status_code=status.HTTP_201_CREATED)
async def create_invoice(
    payload: InvoiceCreate,
    store: DocumentStore = Depends(get_store),
    user: AuthUser = Depends(require_executive),
) -> Envelope[InvoiceRead]:
    invoice = await invoice_service.create_invoice(store, user, payload)
    return Envelope(data=invoice, message="Invoice created successfully")


@router.post("/{invoice_id}/pay", response_model=Envelope[InvoiceRead])
async def mark_invoice_paid(
    invoice_id: str,
    payload: InvoicePayment,
    store: DocumentStore = Depends(get_store),
    user: AuthUser = Depends(require_executive),
) -> Envelope[InvoiceRead]:
    invoice = await invoice_service.mark_paid(store, user, invoice_id, payload)
    return Envelope(data=invoice, message="Invoice marked as paid")
