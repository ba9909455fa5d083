"""Outlier and data-gap detection over the raw transactions of a range."""
from __future__ import annotations

from decimal import Decimal
from typing import Literal, Sequence, Union

from cashflow.core.log import get_logger, timeit
from cashflow.schemas.analytics import (
    AnomalyReport,
    AnomalyStatistics,
    DataGapAnomaly,
    StatsSummary,
    TransactionAnomaly,
)
from cashflow.schemas.common import DateRange

from .stats import SampleStats, as_float, compute_stats, safe_ratio
from .store import TransactionKind, TransactionRecord, TransactionStore

LOGGER = get_logger(__name__)

Sensitivity = Literal["low", "medium", "high"]

# Standard deviations from the mean beyond which an amount is flagged.
THRESHOLD_MULTIPLIERS: dict[str, Decimal] = {
    "low": Decimal("3"),
    "medium": Decimal("2"),
    "high": Decimal("1.5"),
}
GAP_THRESHOLD_DAYS = 7
_SECONDS_PER_DAY = 86400

_LABELS = {
    TransactionKind.REVENUE: ("revenue", "revenue"),
    TransactionKind.EXPENSE: ("expense", "expenses"),
}

AnomalyItem = Union[TransactionAnomaly, DataGapAnomaly]


def threshold_multiplier(sensitivity: str) -> Decimal:
    try:
        return THRESHOLD_MULTIPLIERS[sensitivity]
    except KeyError:
        raise ValueError(
            f"Unsupported sensitivity {sensitivity!r}; use low, medium or high"
        ) from None


def find_outliers(
    records: Sequence[TransactionRecord],
    stats: SampleStats,
    multiplier: Decimal,
) -> list[TransactionAnomaly]:
    """Flag records with ``|amount - mean| > multiplier * std_dev`` (strict)."""

    threshold = multiplier * stats.std_dev
    outliers: list[TransactionAnomaly] = []
    for record in records:
        distance = abs(record.amount - stats.mean)
        if not distance > threshold:
            continue
        anomaly_type, _ = _LABELS[record.kind]
        direction = "high" if record.amount > stats.mean else "low"
        outliers.append(
            TransactionAnomaly(
                type=anomaly_type,
                transaction_id=record.id,
                amount=as_float(record.amount),
                date=record.date,
                plan_id=record.plan_id if record.kind is TransactionKind.REVENUE else None,
                category=record.category if record.kind is TransactionKind.EXPENSE else None,
                deviation=as_float(safe_ratio(distance, stats.std_dev)),
                description=f"Unusually {direction} {anomaly_type}",
            )
        )
    return outliers


def find_gaps(
    records: Sequence[TransactionRecord],
    category: Literal["revenue", "expenses"],
) -> list[DataGapAnomaly]:
    """Report consecutive transactions more than a week apart."""

    dates = sorted(record.date for record in records)
    gaps: list[DataGapAnomaly] = []
    for earlier, later in zip(dates, dates[1:]):
        days = (later - earlier).total_seconds() / _SECONDS_PER_DAY
        if days > GAP_THRESHOLD_DAYS:
            days_missing = int(days)
            gaps.append(
                DataGapAnomaly(
                    category=category,
                    start_date=earlier,
                    end_date=later,
                    days_missing=days_missing,
                    description=f"{days_missing} day gap in {category} data",
                )
            )
    return gaps


def _summary(stats: SampleStats) -> StatsSummary:
    return StatsSummary(mean=as_float(stats.mean), std_dev=as_float(stats.std_dev))


def find_anomalies(
    store: TransactionStore,
    date_range: DateRange,
    sensitivity: Sensitivity = "medium",
    *,
    period: str = "custom",
) -> AnomalyReport:
    """Outliers per kind plus data gaps, newest first.

    Gap anomalies sort by their end date.
    """

    multiplier = threshold_multiplier(sensitivity)

    with timeit("Anomaly scan", logger=LOGGER, unit="transactions") as timer:
        revenue = store.find_many(TransactionKind.REVENUE, date_range)
        expenses = store.find_many(TransactionKind.EXPENSE, date_range)
        timer.add(len(revenue) + len(expenses))

        revenue_stats = compute_stats(record.amount for record in revenue)
        expense_stats = compute_stats(record.amount for record in expenses)

        revenue_outliers = find_outliers(revenue, revenue_stats, multiplier)
        expense_outliers = find_outliers(expenses, expense_stats, multiplier)
        revenue_gaps = find_gaps(revenue, "revenue")
        expense_gaps = find_gaps(expenses, "expenses")

    anomalies: list[AnomalyItem] = [
        *revenue_outliers,
        *expense_outliers,
        *revenue_gaps,
        *expense_gaps,
    ]
    anomalies.sort(key=lambda item: item.sort_date, reverse=True)

    return AnomalyReport(
        period=period,
        date_range=date_range,
        sensitivity=sensitivity,
        anomalies_found=len(anomalies),
        statistics=AnomalyStatistics(
            revenue=_summary(revenue_stats),
            expenses=_summary(expense_stats),
        ),
        anomalies=anomalies,
    )
