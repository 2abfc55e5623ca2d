from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class WeeklyCompletion(BaseModel):
    completed: int
    total: int


class WorkloadEntry(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    user_id: str = Field(alias="userId")
    task_count: int = Field(alias="taskCount")


class MonthlyRevenue(BaseModel):
    month: str
    revenue: float


class ProductivityScore(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    user_id: str = Field(alias="userId")
    score: int


class LeadConversion(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    conversion_rate: float = Field(alias="conversionRate")


class InsightsSummary(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    weekly_tasks: WeeklyCompletion = Field(alias="weeklyTasks")
    revenue_growth: list[MonthlyRevenue] = Field(alias="revenueGrowth")
    lead_conversion: float = Field(alias="leadConversion")
