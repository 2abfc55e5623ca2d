from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

from app.core.responses import UtcDatetime


ScriptTone = Literal["professional", "casual", "humorous", "inspirational", "educational"]


class ScriptGenerateRequest(BaseModel):
    prompt: str = Field(min_length=1)
    tone: ScriptTone = "professional"
    target_audience: str | None = None
    duration: int | None = Field(default=None, ge=1)


class ScriptVariation(BaseModel):
    version: int
    content: str
    tone: ScriptTone


class GeneratedScripts(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    script_id: str = Field(alias="scriptId")
    variations: list[ScriptVariation]


class ScriptRead(BaseModel):
    id: str
    title: str
    content: str
    tone: ScriptTone | str
    target_audience: str | None = None
    duration: int | None = None
    created_by: str | None = None
    tags: list[str] = Field(default_factory=list)
    created_at: UtcDatetime
    updated_at: UtcDatetime


class ScriptVersionRead(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str
    script_id: str = Field(alias="scriptId")
    version_number: int
    content: str
    changes_summary: str | None = None
    created_by: str | None = None
    created_at: UtcDatetime | None = None
