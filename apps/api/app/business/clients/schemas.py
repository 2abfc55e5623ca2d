from __future__ import annotations

from pydantic import BaseModel, EmailStr, Field

from app.core.responses import UtcDatetime


class ClientCreate(BaseModel):
    name: str = Field(min_length=1)
    email: EmailStr
    phone: str | None = None
    company: str | None = None
    address: str | None = None
    notes: str | None = None


class ClientRead(BaseModel):
    id: str
    name: str
    email: str
    phone: str | None = None
    company: str | None = None
    address: str | None = None
    notes: str | None = None
    created_at: UtcDatetime
    updated_at: UtcDatetime
