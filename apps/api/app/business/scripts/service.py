from __future__ import annotations

import logging
from dataclasses import dataclass

from fastapi import HTTPException, status

from app.business.scripts.repository import ScriptRepository, ScriptVersionRepository
from app.business.scripts.schemas import (
    GeneratedScripts,
    ScriptGenerateRequest,
    ScriptRead,
    ScriptVariation,
    ScriptVersionRead,
)
from app.business.scripts.templates import render_variations
from app.core.auth import AuthUser
from app.platform.store.base import DocumentStore


logger = logging.getLogger("app.scripts")


@dataclass(slots=True)
class ScriptService:
    script_repository: ScriptRepository = ScriptRepository()
    version_repository: ScriptVersionRepository = ScriptVersionRepository()

    async def generate(self, store: DocumentStore, user: AuthUser, payload: ScriptGenerateRequest) -> GeneratedScripts:
        prompt = payload.prompt.strip()
        if not prompt:
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Prompt is required")

        variations = render_variations(prompt, payload.tone)
        script_id = await self.script_repository.create(
            store,
            {
                "title": f"Script for: {prompt}",
                "content": variations[0],
                "tone": payload.tone,
                "target_audience": payload.target_audience,
                "duration": payload.duration,
                "created_by": user.sub,
                "tags": [payload.tone, "ai-generated"],
            },
        )
        for index, content in enumerate(variations, start=1):
            await self.version_repository.create(
                store,
                {
                    "scriptId": script_id,
                    "version_number": index,
                    "content": content,
                    "changes_summary": f"Variation {index} with {payload.tone} tone",
                    "created_by": user.sub,
                },
                parent_id=script_id,
            )
        logger.info("script.generated", extra={"document_id": script_id, "user_id": user.sub, "count": len(variations)})

        return GeneratedScripts(
            script_id=script_id,
            variations=[
                ScriptVariation(version=index, content=content, tone=payload.tone)
                for index, content in enumerate(variations, start=1)
            ],
        )

    async def get_script(self, store: DocumentStore, script_id: str) -> ScriptRead:
        record = await self.script_repository.get(store, script_id)
        if record is None:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Script not found")
        return ScriptRead.model_validate(record)

    async def list_versions(self, store: DocumentStore, script_id: str) -> list[ScriptVersionRead]:
        await self.get_script(store, script_id)
        query = self.version_repository.query().order("version_number")
        records = await self.version_repository.find(store, query, parent_id=script_id)
        return [ScriptVersionRead.model_validate(record) for record in records]


script_service = ScriptService()
