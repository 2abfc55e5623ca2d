"""Read-side aggregations over tasks, invoices and leads.

The ``compute_*`` helpers are pure; :class:`AnalyticsService` feeds them from
the entity services with a clock that tests can pin.
"""
from __future__ import annotations

from collections import Counter
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from datetime import datetime, timedelta
from decimal import ROUND_HALF_UP, Decimal

from fastapi import HTTPException, status

from app.business.analytics.schemas import (
    InsightsSummary,
    MonthlyRevenue,
    WeeklyCompletion,
    WorkloadEntry,
)
from app.business.invoices.service import invoice_service
from app.business.leads.service import lead_service
from app.business.tasks.schemas import TaskRead
from app.business.tasks.service import task_service
from app.core.clock import trailing_months, utcnow
from app.platform.store.base import DocumentStore


WEEK = timedelta(days=7)
PRODUCTIVITY_WINDOW = timedelta(days=30)
DEFAULT_GROWTH_MONTHS = 6
MAX_GROWTH_MONTHS = 24


def compute_weekly_completion(tasks: Iterable[TaskRead]) -> WeeklyCompletion:
    tasks = list(tasks)
    completed = sum(1 for task in tasks if task.status == "completed")
    return WeeklyCompletion(completed=completed, total=len(tasks))


def compute_team_workload(tasks: Iterable[TaskRead]) -> dict[str, int]:
    """Open task count per assignee; a shared task counts once for each assignee."""
    workload: Counter[str] = Counter()
    for task in tasks:
        workload.update(task.assigned_to)
    return dict(workload)


def compute_productivity_score(tasks: Iterable[TaskRead]) -> int:
    """Half completion rate, half on-time rate, scaled to 0..100 and rounded half up.

    A task is on time when it is completed and its last update is not later
    than its deadline.
    """
    tasks = list(tasks)
    if not tasks:
        return 0
    completed = [task for task in tasks if task.status == "completed"]
    on_time = sum(1 for task in completed if task.updated_at <= task.deadline)
    score = (Decimal(50 * len(completed)) + Decimal(50 * on_time)) / Decimal(len(tasks))
    return int(score.quantize(Decimal("1"), rounding=ROUND_HALF_UP))


@dataclass(slots=True)
class AnalyticsService:
    clock: Callable[[], datetime] = utcnow

    async def weekly_task_completion(self, store: DocumentStore) -> WeeklyCompletion:
        tasks = await task_service.list_tasks_created_since(store, self.clock() - WEEK)
        return compute_weekly_completion(tasks)

    async def team_workload(self, store: DocumentStore) -> dict[str, int]:
        return compute_team_workload(await task_service.list_open_tasks(store))

    async def team_workload_entries(self, store: DocumentStore) -> list[WorkloadEntry]:
        workload = await self.team_workload(store)
        return [WorkloadEntry(user_id=user_id, task_count=count) for user_id, count in workload.items()]

    async def revenue_growth(self, store: DocumentStore, months: int = DEFAULT_GROWTH_MONTHS) -> list[MonthlyRevenue]:
        if not 1 <= months <= MAX_GROWTH_MONTHS:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail=f"months must be between 1 and {MAX_GROWTH_MONTHS}",
            )
        return [
            MonthlyRevenue(month=month, revenue=await invoice_service.revenue_by_month(store, month))
            for month in trailing_months(months, self.clock())
        ]

    async def productivity_score(self, store: DocumentStore, user_id: str) -> int:
        tasks = await task_service.list_tasks_created_since(
            store,
            self.clock() - PRODUCTIVITY_WINDOW,
            assignee=user_id,
        )
        return compute_productivity_score(tasks)

    async def monthly_revenue(self, store: DocumentStore, month: str | None = None) -> MonthlyRevenue:
        month = month or trailing_months(1, self.clock())[0]
        return MonthlyRevenue(month=month, revenue=await invoice_service.revenue_by_month(store, month))

    async def summary(self, store: DocumentStore) -> InsightsSummary:
        return InsightsSummary(
            weekly_tasks=await self.weekly_task_completion(store),
            revenue_growth=await self.revenue_growth(store),
            lead_conversion=await lead_service.conversion_rate(store),
        )


analytics_service = AnalyticsService()
