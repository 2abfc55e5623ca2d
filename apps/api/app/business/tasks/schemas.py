from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

from app.core.responses import UtcDatetime


TaskStatus = Literal["pending", "in_progress", "completed", "cancelled"]
TaskPriority = Literal["low", "medium", "high", "urgent"]

OPEN_TASK_STATUSES = ("pending", "in_progress")


class TaskCreate(BaseModel):
    title: str = Field(min_length=1)
    description: str = ""
    status: TaskStatus = "pending"
    priority: TaskPriority = "medium"
    deadline: UtcDatetime
    assigned_to: list[str] | None = None
    project: str | None = None
    tags: list[str] = Field(default_factory=list)


class TaskUpdate(BaseModel):
    title: str | None = Field(default=None, min_length=1)
    description: str | None = None
    status: TaskStatus | None = None
    priority: TaskPriority | None = None
    deadline: UtcDatetime | None = None
    assigned_to: list[str] | None = Field(default=None, min_length=1)
    project: str | None = None
    tags: list[str] | None = None

    @field_validator("title", "description", "status", "priority", "deadline", "assigned_to", "tags")
    @classmethod
    def reject_null(cls, value: object) -> object:
        # Omitted fields stay unchanged; null is never a stored value.
        if value is None:
            raise ValueError("may be omitted but not null")
        return value


class TaskRead(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str
    title: str
    description: str = ""
    status: TaskStatus | str
    priority: TaskPriority | str
    deadline: UtcDatetime
    assigned_to: list[str]
    created_by: str | None = None
    project: str | None = None
    tags: list[str] = Field(default_factory=list)
    created_at: UtcDatetime
    updated_at: UtcDatetime
