from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

from app.core.responses import UtcDatetime


ShootStatus = Literal["scheduled", "in_progress", "completed", "cancelled", "postponed"]


class ShootCreate(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    title: str = Field(min_length=1)
    date: UtcDatetime
    client_id: str = Field(alias="clientId", min_length=1)
    location: str | None = None
    details: str | None = None
    status: ShootStatus = "scheduled"
    equipment: list[str] = Field(default_factory=list)
    notes: str | None = None


class ShootRead(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str
    title: str
    date: UtcDatetime
    client_id: str = Field(alias="clientId")
    location: str | None = None
    details: str | None = None
    status: ShootStatus | str
    equipment: list[str] = Field(default_factory=list)
    notes: str | None = None
    created_by: str | None = None
    created_at: UtcDatetime
    updated_at: UtcDatetime


class ShootAssignmentCreate(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    user_id: str = Field(alias="userId", min_length=1)
    role: str = Field(default="crew", min_length=1)


class ShootAssignmentRead(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str
    shoot_id: str = Field(alias="shootId")
    user_id: str = Field(alias="userId")
    role: str
    assigned_at: UtcDatetime | None = None
