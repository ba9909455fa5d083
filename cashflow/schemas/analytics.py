"""Result payloads returned by the analytics tools."""
from __future__ import annotations

from datetime import datetime
from typing import Annotated, Literal, Optional, Union

from pydantic import Field, computed_field

from .common import DateRange, ResultModel


class PeriodResult(ResultModel):
    """Fields shared by every tool result."""

    period: str
    date_range: DateRange


class GroupBucket(ResultModel):
    """One grouped slice of revenue or expenses."""

    key: str
    total_amount: float
    transaction_count: int
    percentage: float = 0.0


class PlanSummary(ResultModel):
    plan_id: str
    total_revenue: float
    transaction_count: int
    average_transaction_amount: float


class PlanListResult(PeriodResult):
    total_plans: int
    plans: list[PlanSummary]


class RevenueSummaryResult(PeriodResult):
    group_by: Literal["plan", "month", "category"]
    total_revenue: float
    total_transactions: int
    average_transaction_amount: float
    grouped_data: list[GroupBucket]


class RecurringExpenses(ResultModel):
    total: float
    count: int
    percentage: float


class ExpenseSummaryResult(PeriodResult):
    group_by: Literal["category", "month", "vendor"]
    total_expenses: float
    total_transactions: int
    average_transaction_amount: float
    recurring_expenses: RecurringExpenses
    grouped_data: list[GroupBucket]


class ProfitabilityResult(PeriodResult):
    """Plan profitability with company expenses allocated by revenue share.

    ``revenue_share`` and ``profit_margin`` are percentages.
    """

    plan_id: str
    revenue: float
    allocated_expenses: float
    profit: float
    profit_margin: float
    revenue_share: float
    transaction_count: int
    average_transaction_amount: float


class MonthlyTrend(ResultModel):
    month: str
    revenue: float
    expenses: float
    net_cashflow: float


class CashflowTrendResult(PeriodResult):
    total_revenue: float
    total_expenses: float
    total_net_cashflow: float
    monthly_trends: list[MonthlyTrend]
    average_monthly_revenue: float
    average_monthly_expenses: float


class TransactionAnomaly(ResultModel):
    """A single transaction whose amount lies far from its kind's mean."""

    type: Literal["revenue", "expense"]
    transaction_id: str
    amount: float
    date: datetime
    plan_id: Optional[str] = None
    category: Optional[str] = None
    deviation: float
    description: str

    @computed_field  # type: ignore[prop-decorator]
    @property
    def severity(self) -> str:
        if self.deviation > 3:
            return "critical"
        if self.deviation > 2:
            return "high"
        return "medium"

    @property
    def sort_date(self) -> datetime:
        return self.date


class DataGapAnomaly(ResultModel):
    """A stretch of more than a week with no transactions of one kind."""

    type: Literal["data_gap"] = "data_gap"
    category: Literal["revenue", "expenses"]
    start_date: datetime
    end_date: datetime
    days_missing: int
    description: str

    @computed_field  # type: ignore[prop-decorator]
    @property
    def severity(self) -> str:
        return "data_gap"

    @property
    def sort_date(self) -> datetime:
        return self.end_date


Anomaly = Annotated[Union[TransactionAnomaly, DataGapAnomaly], Field(discriminator="type")]


class StatsSummary(ResultModel):
    mean: float
    std_dev: float


class AnomalyStatistics(ResultModel):
    revenue: StatsSummary
    expenses: StatsSummary


class AnomalyReport(PeriodResult):
    sensitivity: Literal["low", "medium", "high"]
    anomalies_found: int
    statistics: AnomalyStatistics
    anomalies: list[Anomaly]
