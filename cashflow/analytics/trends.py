"""Monthly revenue, expense and net cashflow series."""
from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Iterable

from cashflow.schemas.analytics import CashflowTrendResult, MonthlyTrend
from cashflow.schemas.common import DateRange

from .stats import ZERO, as_float, safe_ratio
from .store import TransactionKind, TransactionRecord, TransactionStore


@dataclass
class MonthBucket:
    revenue: Decimal = ZERO
    expenses: Decimal = ZERO

    @property
    def net_cashflow(self) -> Decimal:
        return self.revenue - self.expenses


def bucket_cashflow(
    revenue: Iterable[TransactionRecord],
    expenses: Iterable[TransactionRecord],
) -> list[tuple[str, MonthBucket]]:
    """Fold both kinds into ``YYYY-MM`` buckets sorted by month.

    Months without any transaction get no bucket.
    """

    buckets: dict[str, MonthBucket] = {}
    for record in revenue:
        buckets.setdefault(record.month, MonthBucket()).revenue += record.amount
    for record in expenses:
        buckets.setdefault(record.month, MonthBucket()).expenses += record.amount
    return sorted(buckets.items())


def cashflow_trend(
    store: TransactionStore,
    date_range: DateRange,
    *,
    period: str = "custom",
) -> CashflowTrendResult:
    months = bucket_cashflow(
        store.find_many(TransactionKind.REVENUE, date_range),
        store.find_many(TransactionKind.EXPENSE, date_range),
    )

    total_revenue = sum((bucket.revenue for _, bucket in months), ZERO)
    total_expenses = sum((bucket.expenses for _, bucket in months), ZERO)
    month_count = Decimal(len(months))

    return CashflowTrendResult(
        period=period,
        date_range=date_range,
        total_revenue=as_float(total_revenue),
        total_expenses=as_float(total_expenses),
        total_net_cashflow=as_float(total_revenue - total_expenses),
        monthly_trends=[
            MonthlyTrend(
                month=month,
                revenue=as_float(bucket.revenue),
                expenses=as_float(bucket.expenses),
                net_cashflow=as_float(bucket.net_cashflow),
            )
            for month, bucket in months
        ],
        average_monthly_revenue=as_float(safe_ratio(total_revenue, month_count)),
        average_monthly_expenses=as_float(safe_ratio(total_expenses, month_count)),
    )
