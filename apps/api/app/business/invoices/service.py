from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Any

from fastapi import HTTPException, status

from app.business.invoices.repository import InvoiceRepository
from app.business.invoices.schemas import UNPAID_STATUSES, InvoiceCreate, InvoicePayment, InvoiceRead
from app.core.auth import AuthUser
from app.core.clock import format_month, month_bounds, utcnow
from app.platform.store.base import SERVER_TIMESTAMP, DocumentStore


logger = logging.getLogger("app.invoices")


@dataclass(slots=True)
class InvoiceService:
    invoice_repository: InvoiceRepository = InvoiceRepository()

    async def create_invoice(self, store: DocumentStore, user: AuthUser, payload: InvoiceCreate) -> InvoiceRead:
        items: list[dict[str, Any]] = []
        subtotal = Decimal("0")
        for item in payload.items:
            rate = self._q(item.rate)
            line_amount = self._q(item.quantity * rate)
            subtotal += line_amount
            items.append(
                {
                    "description": item.description,
                    "quantity": float(item.quantity),
                    "rate": float(rate),
                    "amount": float(line_amount),
                }
            )
        tax = self._q(payload.tax)
        issued_at = payload.issued_at or utcnow()

        data = {
            "invoice_number": payload.invoice_number or self._next_invoice_number(issued_at),
            "clientId": payload.client_id,
            "amount": float(self._q(subtotal)),
            "tax": float(tax),
            "total": float(self._q(subtotal + tax)),
            "status": payload.status,
            "items": items,
            "issued_at": issued_at,
            "due_date": payload.due_date,
            "notes": payload.notes,
        }
        invoice_id = await self.invoice_repository.create(store, data)
        logger.info("invoice.created", extra={"document_id": invoice_id, "user_id": user.sub, "status": payload.status})
        return await self.get_invoice(store, invoice_id)

    async def get_invoice(self, store: DocumentStore, invoice_id: str) -> InvoiceRead:
        record = await self.invoice_repository.get(store, invoice_id)
        if record is None:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Invoice not found")
        return InvoiceRead.model_validate(record)

    async def list_unpaid_invoices(self, store: DocumentStore) -> list[InvoiceRead]:
        query = self.invoice_repository.query().where("status", "in", list(UNPAID_STATUSES)).order("due_date")
        return [InvoiceRead.model_validate(record) for record in await self.invoice_repository.find(store, query)]

    async def list_invoices_by_client(self, store: DocumentStore, client_id: str) -> list[InvoiceRead]:
        query = self.invoice_repository.query().where("clientId", "==", client_id).order("issued_at", descending=True)
        return [InvoiceRead.model_validate(record) for record in await self.invoice_repository.find(store, query)]

    async def list_all_invoices(self, store: DocumentStore) -> list[InvoiceRead]:
        query = self.invoice_repository.query().order("issued_at", descending=True)
        return [InvoiceRead.model_validate(record) for record in await self.invoice_repository.find(store, query)]

    async def mark_paid(
        self,
        store: DocumentStore,
        user: AuthUser,
        invoice_id: str,
        payload: InvoicePayment,
    ) -> InvoiceRead:
        invoice = await self.get_invoice(store, invoice_id)
        if invoice.status in {"paid", "cancelled"}:
            raise HTTPException(
                status_code=status.HTTP_409_CONFLICT,
                detail=f"Invoice is already {invoice.status}",
            )
        await self.invoice_repository.update(
            store,
            invoice_id,
            {"status": "paid", "paid_at": SERVER_TIMESTAMP, "payment_method": payload.payment_method},
        )
        logger.info("invoice.paid", extra={"document_id": invoice_id, "user_id": user.sub})
        return await self.get_invoice(store, invoice_id)

    async def revenue_by_month(self, store: DocumentStore, month: str) -> float:
        """Sum of ``total`` over invoices paid within ``month`` (``YYYY-MM``)."""
        try:
            start, end = month_bounds(month)
        except ValueError as exc:
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc

        query = (
            self.invoice_repository.query()
            .where("status", "==", "paid")
            .where("paid_at", ">=", start)
            .where("paid_at", "<", end)
        )
        invoices = await self.invoice_repository.find(store, query)
        revenue = sum((Decimal(str(invoice.get("total") or 0)) for invoice in invoices), Decimal("0"))
        return float(self._q(revenue))

    @staticmethod
    def _next_invoice_number(issued_at: datetime) -> str:
        return f"INV-{format_month(issued_at).replace('-', '')}-{uuid.uuid4().hex[:6].upper()}"

    @staticmethod
    def _q(value: Decimal) -> Decimal:
        return Decimal(value).quantize(Decimal("0.01"))


invoice_service = InvoiceService()
