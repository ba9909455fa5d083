"""Cashflow analytics over stored revenue and expense transactions."""

from .anomalies import find_anomalies
from .dates import ParseError, describe_period, resolve_date_range
from .expenses import expense_summary
from .profitability import profitability
from .revenue import list_plans, revenue_summary
from .stats import SampleStats, compute_stats
from .store import TransactionKind, TransactionStore
from .trends import cashflow_trend

__all__ = [
    "ParseError",
    "SampleStats",
    "TransactionKind",
    "TransactionStore",
    "cashflow_trend",
    "compute_stats",
    "describe_period",
    "expense_summary",
    "find_anomalies",
    "list_plans",
    "profitability",
    "resolve_date_range",
    "revenue_summary",
]
