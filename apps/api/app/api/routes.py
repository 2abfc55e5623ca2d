from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.responses import Response

from app.auth.api import router as auth_router
from app.business.analytics.api import router as analytics_router
from app.business.clients.api import router as clients_router
from app.business.invoices.api import router as invoices_router
from app.business.leads.api import router as leads_router
from app.business.notifications.api import router as notifications_router
from app.business.overview.api import router as overview_router
from app.business.scripts.api import router as scripts_router
from app.business.shoots.api import router as shoots_router
from app.business.tasks.api import router as tasks_router
from app.business.users.api import router as users_router
from app.core.auth import AuthUser, get_current_user
from app.core.config import get_settings
from app.metrics import generate_metrics_payload, metrics_content_type

router = APIRouter()
router.include_router(auth_router)
router.include_router(users_router)
router.include_router(tasks_router)
router.include_router(shoots_router)
router.include_router(leads_router)
router.include_router(invoices_router)
router.include_router(clients_router)
router.include_router(notifications_router)
router.include_router(scripts_router)
router.include_router(analytics_router)
router.include_router(overview_router)


@router.get("/health", tags=["system"])
def health() -> dict[str, str]:
    settings = get_settings()
    return {
        "status": "ok",
        "service": settings.app_name,
        "environment": settings.app_env,
    }


@router.get("/metrics", tags=["system"])
def metrics(user: AuthUser = Depends(get_current_user)) -> Response:
    settings = get_settings()
    if not settings.metrics_enabled:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="not found")
    if not user.is_executive:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Access forbidden: executive role required")
    return Response(content=generate_metrics_payload(), media_type=metrics_content_type())
