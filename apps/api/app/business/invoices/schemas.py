from __future__ import annotations

from decimal import Decimal
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

from app.core.responses import UtcDatetime


InvoiceStatus = Literal["draft", "sent", "paid", "overdue", "cancelled"]
UNPAID_STATUSES = ("sent", "overdue")


class InvoiceItemCreate(BaseModel):
    description: str = Field(min_length=1)
    quantity: Decimal = Field(gt=Decimal("0"))
    rate: Decimal = Field(ge=Decimal("0"))


class InvoiceCreate(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    client_id: str = Field(alias="clientId", min_length=1)
    invoice_number: str | None = None
    items: list[InvoiceItemCreate] = Field(min_length=1)
    tax: Decimal = Field(default=Decimal("0"), ge=Decimal("0"))
    status: Literal["draft", "sent"] = "sent"
    issued_at: UtcDatetime | None = None
    due_date: UtcDatetime
    notes: str | None = None


class InvoicePayment(BaseModel):
    payment_method: str = Field(min_length=1)


class InvoiceItemRead(BaseModel):
    description: str
    quantity: float
    rate: float
    amount: float


class InvoiceRead(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str
    invoice_number: str
    client_id: str = Field(alias="clientId")
    amount: float
    tax: float = 0.0
    total: float
    status: InvoiceStatus | str
    items: list[InvoiceItemRead]
    issued_at: UtcDatetime
    due_date: UtcDatetime
    paid_at: UtcDatetime | None = None
    payment_method: str | None = None
    notes: str | None = None
    created_at: UtcDatetime
    updated_at: UtcDatetime
