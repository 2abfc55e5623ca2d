from __future__ import annotations

from fastapi import APIRouter, Depends

from app.business.overview.schemas import EmployeeOverview, ExecutiveOverview
from app.business.overview.service import overview_service
from app.core.auth import AuthUser
from app.core.database import get_store
from app.core.rbac import require_role
from app.core.responses import Envelope
from app.platform.store.base import DocumentStore


router = APIRouter(tags=["overview"])


@router.get("/api/executive/overview", response_model=Envelope[ExecutiveOverview])
async def executive_overview(
    store: DocumentStore = Depends(get_store),
    user: AuthUser = Depends(require_role("executive")),
) -> Envelope[ExecutiveOverview]:
    return Envelope(data=await overview_service.executive_overview(store, user))


@router.get("/api/employee/overview", response_model=Envelope[EmployeeOverview])
async def employee_overview(
    store: DocumentStore = Depends(get_store),
    user: AuthUser = Depends(require_role("employee")),
) -> Envelope[EmployeeOverview]:
    return Envelope(data=await overview_service.employee_overview(store, user))
