from app.business.analytics.api import router
from app.business.analytics.service import (
    AnalyticsService,
    analytics_service,
    compute_productivity_score,
    compute_team_workload,
    compute_weekly_completion,
)

__all__ = [
    "router",
    "AnalyticsService",
    "analytics_service",
    "compute_productivity_score",
    "compute_team_workload",
    "compute_weekly_completion",
]
