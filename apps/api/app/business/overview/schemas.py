from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from app.business.analytics.schemas import WeeklyCompletion
from app.business.notifications.schemas import NotificationRead
from app.business.shoots.schemas import ShootRead
from app.business.tasks.schemas import TaskRead


class ExecutiveOverview(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    weekly_tasks: WeeklyCompletion = Field(alias="weeklyTasks")
    open_tasks: int = Field(alias="openTasks")
    new_leads: int = Field(alias="newLeads")
    lead_conversion: float = Field(alias="leadConversion")
    unpaid_invoices: int = Field(alias="unpaidInvoices")
    outstanding_amount: float = Field(alias="outstandingAmount")
    upcoming_shoots: list[ShootRead] = Field(alias="upcomingShoots")
    unread_notifications: int = Field(alias="unreadNotifications")


class EmployeeOverview(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    tasks: list[TaskRead]
    open_tasks: int = Field(alias="openTasks")
    productivity_score: int = Field(alias="productivityScore")
    notifications: list[NotificationRead]
    unread_notifications: int = Field(alias="unreadNotifications")
