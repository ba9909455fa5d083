"""Expense summaries including the recurring subset."""
from __future__ import annotations

from decimal import Decimal
from typing import Literal

from cashflow.schemas.analytics import ExpenseSummaryResult, RecurringExpenses
from cashflow.schemas.common import DateRange

from .buckets import fold_by_month, to_buckets
from .stats import as_float, safe_ratio
from .store import TransactionKind, TransactionStore

ExpenseGrouping = Literal["category", "month", "vendor"]
EXPENSE_GROUPINGS = ("category", "month", "vendor")


def expense_summary(
    store: TransactionStore,
    date_range: DateRange,
    group_by: ExpenseGrouping = "category",
    *,
    period: str = "custom",
) -> ExpenseSummaryResult:
    """Overall expense totals, recurring totals and a grouped breakdown.

    Vendor grouping leaves out expenses without a vendor.
    """

    if group_by not in EXPENSE_GROUPINGS:
        raise ValueError(f"Unsupported expense grouping: {group_by!r}")

    overall = store.aggregate(TransactionKind.EXPENSE, date_range)
    recurring = store.aggregate(TransactionKind.EXPENSE, date_range, is_recurring=True)

    if group_by == "month":
        rows = fold_by_month(store.find_many(TransactionKind.EXPENSE, date_range))
    else:
        rows = store.group_by(TransactionKind.EXPENSE, date_range, group_by)

    return ExpenseSummaryResult(
        period=period,
        date_range=date_range,
        group_by=group_by,
        total_expenses=as_float(overall.sum),
        total_transactions=overall.count,
        average_transaction_amount=as_float(overall.avg),
        recurring_expenses=RecurringExpenses(
            total=as_float(recurring.sum),
            count=recurring.count,
            percentage=as_float(safe_ratio(recurring.sum, overall.sum) * Decimal("100")),
        ),
        grouped_data=to_buckets(rows, overall.sum),
    )
