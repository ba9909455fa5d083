"""Pydantic schemas for analytics and dashboard payloads."""

from .analytics import (
    Anomaly,
    AnomalyReport,
    AnomalyStatistics,
    CashflowTrendResult,
    DataGapAnomaly,
    ExpenseSummaryResult,
    GroupBucket,
    MonthlyTrend,
    PlanListResult,
    PlanSummary,
    ProfitabilityResult,
    RecurringExpenses,
    RevenueSummaryResult,
    StatsSummary,
    TransactionAnomaly,
)
from .common import DateRange, ResultModel
from .dashboard import ChartPoint, DashboardMetrics, DashboardPeriod, DashboardResult, TableRow

__all__ = [
    "Anomaly",
    "AnomalyReport",
    "AnomalyStatistics",
    "CashflowTrendResult",
    "ChartPoint",
    "DashboardMetrics",
    "DashboardPeriod",
    "DashboardResult",
    "DataGapAnomaly",
    "DateRange",
    "ExpenseSummaryResult",
    "GroupBucket",
    "MonthlyTrend",
    "PlanListResult",
    "PlanSummary",
    "ProfitabilityResult",
    "RecurringExpenses",
    "ResultModel",
    "RevenueSummaryResult",
    "StatsSummary",
    "TableRow",
    "TransactionAnomaly",
]
