from __future__ import annotations

from typing import Any, Literal

from fastapi import APIRouter, Depends, Query

from app.business.analytics.schemas import LeadConversion, ProductivityScore
from app.business.analytics.service import DEFAULT_GROWTH_MONTHS, MAX_GROWTH_MONTHS, analytics_service
from app.business.leads.service import lead_service
from app.core.auth import AuthUser, get_current_user
from app.core.database import get_store
from app.core.responses import Envelope
from app.platform.store.base import DocumentStore


router = APIRouter(prefix="/api/analytics", tags=["analytics"])

InsightType = Literal[
    "weekly-tasks",
    "team-workload",
    "revenue-growth",
    "productivity-score",
    "lead-conversion",
    "monthly-revenue",
]


@router.get("/insights", response_model=Envelope[Any])
async def get_insights(
    insight_type: InsightType | None = Query(default=None, alias="type"),
    months: int = Query(default=DEFAULT_GROWTH_MONTHS, ge=1, le=MAX_GROWTH_MONTHS),
    user_id: str | None = Query(default=None, alias="userId"),
    month: str | None = None,
    store: DocumentStore = Depends(get_store),
    user: AuthUser = Depends(get_current_user),
) -> Envelope[Any]:
    if insight_type == "weekly-tasks":
        data: Any = await analytics_service.weekly_task_completion(store)
    elif insight_type == "team-workload":
        data = await analytics_service.team_workload_entries(store)
    elif insight_type == "revenue-growth":
        data = await analytics_service.revenue_growth(store, months)
    elif insight_type == "productivity-score":
        target = user_id or user.sub
        data = ProductivityScore(user_id=target, score=await analytics_service.productivity_score(store, target))
    elif insight_type == "lead-conversion":
        data = LeadConversion(conversion_rate=await lead_service.conversion_rate(store))
    elif insight_type == "monthly-revenue":
        data = await analytics_service.monthly_revenue(store, month)
    else:
        data = await analytics_service.summary(store)

    if isinstance(data, list):
        return Envelope(data=[item.model_dump(mode="json", by_alias=True) for item in data])
    return Envelope(data=data.model_dump(mode="json", by_alias=True))
