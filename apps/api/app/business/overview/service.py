from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal

from app.business.analytics.service import analytics_service
from app.business.invoices.service import invoice_service
from app.business.leads.service import lead_service
from app.business.notifications.service import notification_service
from app.business.overview.schemas import EmployeeOverview, ExecutiveOverview
from app.business.shoots.service import shoot_service
from app.business.tasks.schemas import OPEN_TASK_STATUSES
from app.business.tasks.service import task_service
from app.core.auth import AuthUser
from app.platform.store.base import DocumentStore


UPCOMING_SHOOTS_LIMIT = 5
EMPLOYEE_FEED_LIMIT = 10


@dataclass(slots=True)
class OverviewService:
    async def executive_overview(self, store: DocumentStore, user: AuthUser) -> ExecutiveOverview:
        unpaid = await invoice_service.list_unpaid_invoices(store)
        outstanding = sum((Decimal(str(invoice.total)) for invoice in unpaid), Decimal("0"))
        upcoming = await shoot_service.list_upcoming_shoots(store)
        return ExecutiveOverview(
            weekly_tasks=await analytics_service.weekly_task_completion(store),
            open_tasks=len(await task_service.list_open_tasks(store)),
            new_leads=len(await lead_service.list_new_leads(store)),
            lead_conversion=await lead_service.conversion_rate(store),
            unpaid_invoices=len(unpaid),
            outstanding_amount=float(outstanding.quantize(Decimal("0.01"))),
            upcoming_shoots=upcoming[:UPCOMING_SHOOTS_LIMIT],
            unread_notifications=await notification_service.count_unread(store, user.sub),
        )

    async def employee_overview(self, store: DocumentStore, user: AuthUser) -> EmployeeOverview:
        tasks = await task_service.list_tasks_for_user(store, user.sub)
        return EmployeeOverview(
            tasks=tasks,
            open_tasks=sum(1 for task in tasks if task.status in OPEN_TASK_STATUSES),
            productivity_score=await analytics_service.productivity_score(store, user.sub),
            notifications=await notification_service.list_for_user(store, user.sub, limit=EMPLOYEE_FEED_LIMIT),
            unread_notifications=await notification_service.count_unread(store, user.sub),
        )


overview_service = OverviewService()
