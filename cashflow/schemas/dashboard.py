"""Schemas for the dashboard overview payload."""
from __future__ import annotations

from datetime import datetime
from typing import Literal

from .common import ResultModel


class DashboardMetrics(ResultModel):
    """Headline figures shown in the summary cards."""

    total_revenue: float
    total_expenses: float
    net_cashflow: float
    active_accounts: int
    last_updated: datetime


class ChartPoint(ResultModel):
    """Month bucket for the area chart; ``date`` is the first of the month."""

    date: str
    revenue: float
    expenses: float
    net_cashflow: float


class TableRow(ResultModel):
    """Recent transaction row; expense amounts are negative."""

    id: str
    type: Literal["Revenue", "Expense"]
    amount: float
    date: str
    category: str
    description: str
    status: Literal["Completed", "Recurring", "One-time"]
    source: str


class DashboardPeriod(ResultModel):
    start_date: datetime
    end_date: datetime
    label: str


class DashboardResult(ResultModel):
    metrics: DashboardMetrics
    chart_data: list[ChartPoint]
    table_data: list[TableRow]
    period: DashboardPeriod
