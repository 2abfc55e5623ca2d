from app.business.overview.api import router
from app.business.overview.service import OverviewService, overview_service

__all__ = ["router", "OverviewService", "overview_service"]
