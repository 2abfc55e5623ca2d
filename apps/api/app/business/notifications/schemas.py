from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field

from app.core.responses import UtcDatetime


NotificationType = Literal["task", "shoot", "lead", "invoice", "system", "approval", "urgent"]


class NotificationRead(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str
    user_id: str = Field(alias="userId")
    type: NotificationType | str
    title: str
    message: str
    read: bool = False
    action_url: str | None = Field(default=None, alias="actionUrl")
    metadata: dict[str, Any] | None = None
    created_at: UtcDatetime | None = None
    updated_at: UtcDatetime | None = None


class MarkAllReadResult(BaseModel):
    updated: int
