from __future__ import annotations

from fastapi import APIRouter, Depends

from app.business.scripts.schemas import GeneratedScripts, ScriptGenerateRequest, ScriptRead, ScriptVersionRead
from app.business.scripts.service import script_service
from app.core.auth import AuthUser, get_current_user
from app.core.database import get_store
from app.core.responses import Envelope
from app.platform.store.base import DocumentStore


router = APIRouter(tags=["scripts"])


@router.post("/api/content-studio/generate", response_model=Envelope[GeneratedScripts])
async def generate_scripts(
    payload: ScriptGenerateRequest,
    store: DocumentStore = Depends(get_store),
    user: AuthUser = Depends(get_current_user),
) -> Envelope[GeneratedScripts]:
    generated = await script_service.generate(store, user, payload)
    return Envelope(data=generated, message="Scripts generated successfully")


@router.get("/api/scripts/{script_id}", response_model=Envelope[ScriptRead])
async def get_script(
    script_id: str,
    store: DocumentStore = Depends(get_store),
    user: AuthUser = Depends(get_current_user),
) -> Envelope[ScriptRead]:
    return Envelope(data=await script_service.get_script(store, script_id))


@router.get("/api/scripts/{script_id}/versions", response_model=Envelope[list[ScriptVersionRead]])
async def list_script_versions(
    script_id: str,
    store: DocumentStore = Depends(get_store),
    user: AuthUser = Depends(get_current_user),
) -> Envelope[list[ScriptVersionRead]]:
    return Envelope(data=await script_service.list_versions(store, script_id))
