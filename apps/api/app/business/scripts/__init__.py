from app.business.scripts.api import router
from app.business.scripts.schemas import GeneratedScripts, ScriptGenerateRequest, ScriptRead, ScriptVersionRead
from app.business.scripts.service import ScriptService, script_service

__all__ = [
    "router",
    "GeneratedScripts",
    "ScriptGenerateRequest",
    "ScriptRead",
    "ScriptVersionRead",
    "ScriptService",
    "script_service",
]
