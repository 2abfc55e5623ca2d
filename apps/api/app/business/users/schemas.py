from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

from app.core.responses import UtcDatetime


UserRole = Literal["employee", "executive"]
LoginStatus = Literal["success", "failed"]


class UserRead(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str
    name: str = "User"
    email: str | None = None
    role: UserRole | str
    designation: str | None = None
    avatar_url: str | None = None
    created_at: UtcDatetime | None = None
    updated_at: UtcDatetime | None = None


class UserProfileUpdate(BaseModel):
    name: str | None = Field(default=None, min_length=1)
    designation: str | None = None
    avatar_url: str | None = None

    @field_validator("name")
    @classmethod
    def reject_null_name(cls, value: str | None) -> str | None:
        if value is None:
            raise ValueError("name cannot be cleared")
        return value


class LoginHistoryRead(BaseModel):
    id: str
    device: str
    ip: str
    timestamp: UtcDatetime | None = None
    status: LoginStatus | str
