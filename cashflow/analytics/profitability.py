"""Per-plan profitability using proportional expense allocation.

Expenses carry no plan attribution, so each plan is charged the share of
total company expenses equal to its share of total company revenue in the
same range.
"""
from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal

from cashflow.schemas.analytics import ProfitabilityResult
from cashflow.schemas.common import DateRange

from .stats import ZERO, as_float
from .store import TransactionKind, TransactionStore

_HUNDRED = Decimal("100")


@dataclass(frozen=True)
class Allocation:
    revenue_share: Decimal
    allocated_expenses: Decimal
    profit: Decimal
    profit_margin: Decimal


def allocate(plan_revenue: Decimal, total_revenue: Decimal, total_expenses: Decimal) -> Allocation:
    """Apply the allocation formula; zero denominators yield 0 ratios.

    ``revenue_share`` is a fraction, ``profit_margin`` a percentage.
    """

    revenue_share = plan_revenue / total_revenue if total_revenue > 0 else ZERO
    allocated = total_expenses * revenue_share
    profit = plan_revenue - allocated
    margin = profit / plan_revenue * _HUNDRED if plan_revenue > 0 else ZERO
    return Allocation(
        revenue_share=revenue_share,
        allocated_expenses=allocated,
        profit=profit,
        profit_margin=margin,
    )


def profitability(
    store: TransactionStore,
    plan_id: str,
    date_range: DateRange,
    *,
    period: str = "custom",
) -> ProfitabilityResult:
    plan = store.aggregate(TransactionKind.REVENUE, date_range, plan_id=plan_id)
    total_revenue = store.aggregate(TransactionKind.REVENUE, date_range)
    total_expenses = store.aggregate(TransactionKind.EXPENSE, date_range)

    allocation = allocate(plan.sum, total_revenue.sum, total_expenses.sum)

    return ProfitabilityResult(
        plan_id=plan_id,
        period=period,
        date_range=date_range,
        revenue=as_float(plan.sum),
        allocated_expenses=as_float(allocation.allocated_expenses),
        profit=as_float(allocation.profit),
        profit_margin=as_float(allocation.profit_margin),
        revenue_share=as_float(allocation.revenue_share * _HUNDRED),
        transaction_count=plan.count,
        average_transaction_amount=as_float(plan.avg),
    )
