"""Assembly of the dashboard overview from the transaction store."""
from __future__ import annotations

from datetime import datetime
from typing import Callable, Optional

from sqlalchemy.orm import Session

from cashflow.analytics.dates import describe_period, resolve_date_range
from cashflow.analytics.stats import as_float
from cashflow.analytics.store import TransactionKind, TransactionRecord, TransactionStore
from cashflow.analytics.trends import bucket_cashflow
from cashflow.core.config import AnalyticsSettings, get_settings
from cashflow.core.log import get_logger, timeit
from cashflow.schemas.dashboard import (
    ChartPoint,
    DashboardMetrics,
    DashboardPeriod,
    DashboardResult,
    TableRow,
)

LOGGER = get_logger(__name__)


def _revenue_row(record: TransactionRecord) -> TableRow:
    return TableRow(
        id=f"rev-{record.id}",
        type="Revenue",
        amount=as_float(record.amount),
        date=record.date.date().isoformat(),
        category=record.category or record.plan_id or "",
        description=record.description or f"Revenue from {record.plan_id}",
        status="Completed",
        source=record.customer_id or record.plan_id or "",
    )


def _expense_row(record: TransactionRecord) -> TableRow:
    return TableRow(
        id=f"exp-{record.id}",
        type="Expense",
        amount=-as_float(record.amount),
        date=record.date.date().isoformat(),
        category=record.category or "",
        description=record.description or f"Expense - {record.category}",
        status="Recurring" if record.is_recurring else "One-time",
        source=record.vendor or "Internal",
    )


class DashboardService:
    """Builds the metrics, chart series and recent-transactions table."""

    def __init__(
        self,
        settings: Optional[AnalyticsSettings] = None,
        clock: Callable[[], datetime] = datetime.now,
    ) -> None:
        self.settings = settings or get_settings().analytics
        self.clock = clock

    def get_dashboard(
        self,
        session: Session,
        period: Optional[str] = None,
        start_date: Optional[str] = None,
        end_date: Optional[str] = None,
    ) -> DashboardResult:
        period = period or self.settings.dashboard_period
        now = self.clock()
        date_range = resolve_date_range(period, start_date, end_date, now=now)
        store = TransactionStore(session)

        with timeit("Dashboard overview", logger=LOGGER, unit="queries") as timer:
            revenue_total = store.aggregate(TransactionKind.REVENUE, date_range)
            expense_total = store.aggregate(TransactionKind.EXPENSE, date_range)
            active_accounts = store.distinct_customers(date_range)

            months = bucket_cashflow(
                store.find_many(TransactionKind.REVENUE, date_range),
                store.find_many(TransactionKind.EXPENSE, date_range),
            )

            limit = self.settings.recent_transactions_limit
            rows = [_revenue_row(r) for r in store.recent(TransactionKind.REVENUE, date_range, limit)]
            rows += [_expense_row(r) for r in store.recent(TransactionKind.EXPENSE, date_range, limit)]
            rows.sort(key=lambda row: row.date, reverse=True)
            timer.set_total(store.query_count)

        return DashboardResult(
            metrics=DashboardMetrics(
                total_revenue=as_float(revenue_total.sum),
                total_expenses=as_float(expense_total.sum),
                net_cashflow=as_float(revenue_total.sum - expense_total.sum),
                active_accounts=active_accounts,
                last_updated=now,
            ),
            chart_data=[
                ChartPoint(
                    date=f"{month}-01",
                    revenue=as_float(bucket.revenue),
                    expenses=as_float(bucket.expenses),
                    net_cashflow=as_float(bucket.net_cashflow),
                )
                for month, bucket in months
            ],
            table_data=rows[: limit * 2],
            period=DashboardPeriod(
                start_date=date_range.start_date,
                end_date=date_range.end_date,
                label=describe_period(period, start_date, end_date),
            ),
        )
