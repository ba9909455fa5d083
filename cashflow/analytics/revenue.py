"""Pricing plan listing and revenue summaries."""
from __future__ import annotations

from decimal import Decimal
from typing import Literal

from cashflow.core.log import get_logger
from cashflow.schemas.analytics import PlanListResult, PlanSummary, RevenueSummaryResult
from cashflow.schemas.common import DateRange

from .buckets import fold_by_month, to_buckets
from .stats import as_float, safe_ratio
from .store import TransactionKind, TransactionStore

LOGGER = get_logger(__name__)

RevenueGrouping = Literal["plan", "month", "category"]
REVENUE_GROUPINGS = ("plan", "month", "category")


def list_plans(
    store: TransactionStore,
    date_range: DateRange,
    *,
    period: str = "custom",
) -> PlanListResult:
    """Per-plan revenue totals; plans without revenue in range are absent."""

    rows = store.group_by(TransactionKind.REVENUE, date_range, "plan_id")
    plans = [
        PlanSummary(
            plan_id=row.value,
            total_revenue=as_float(row.sum),
            transaction_count=row.count,
            average_transaction_amount=as_float(safe_ratio(row.sum, Decimal(row.count))),
        )
        for row in rows
    ]
    LOGGER.debug("Found %d plans between %s and %s", len(plans), date_range.start_date, date_range.end_date)
    return PlanListResult(
        period=period,
        date_range=date_range,
        total_plans=len(plans),
        plans=plans,
    )


def revenue_summary(
    store: TransactionStore,
    date_range: DateRange,
    group_by: RevenueGrouping = "plan",
    *,
    period: str = "custom",
) -> RevenueSummaryResult:
    """Overall revenue totals plus a breakdown by plan, month or category."""

    if group_by not in REVENUE_GROUPINGS:
        raise ValueError(f"Unsupported revenue grouping: {group_by!r}")

    overall = store.aggregate(TransactionKind.REVENUE, date_range)
    if group_by == "month":
        rows = fold_by_month(store.find_many(TransactionKind.REVENUE, date_range))
    else:
        field = "plan_id" if group_by == "plan" else "category"
        rows = store.group_by(TransactionKind.REVENUE, date_range, field)

    return RevenueSummaryResult(
        period=period,
        date_range=date_range,
        group_by=group_by,
        total_revenue=as_float(overall.sum),
        total_transactions=overall.count,
        average_transaction_amount=as_float(overall.avg),
        grouped_data=to_buckets(rows, overall.sum),
    )
