from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class LoginRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id_token: str | None = Field(default=None, alias="idToken")


class SessionUser(BaseModel):
    id: str
    email: str | None = None
    name: str
    role: str
    designation: str | None = None


class LoginResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    success: bool = True
    user: SessionUser
    redirect_url: str = Field(alias="redirectUrl")
