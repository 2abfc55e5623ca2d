from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, EmailStr, Field

from app.core.responses import UtcDatetime


LeadStatus = Literal["new", "contacted", "qualified", "proposal_sent", "negotiation", "won", "lost"]


class LeadCreate(BaseModel):
    client_name: str = Field(min_length=1)
    contact_email: EmailStr
    company: str | None = None
    contact_phone: str | None = None
    source: str | None = None
    demands: str | None = None
    budget: float | None = Field(default=None, ge=0)
    notes: str | None = None


class LeadStatusUpdate(BaseModel):
    status: LeadStatus
    reason: str | None = None


class LeadRead(BaseModel):
    id: str
    client_name: str
    contact_email: str
    company: str | None = None
    contact_phone: str | None = None
    status: LeadStatus | str
    source: str | None = None
    demands: str | None = None
    budget: float | None = None
    reason: str | None = None
    handled_by: str | None = None
    notes: str | None = None
    created_at: UtcDatetime
    updated_at: UtcDatetime
