"""Client-side grouping for keys the store cannot group by natively."""
from __future__ import annotations

from decimal import Decimal
from typing import Iterable

from cashflow.schemas.analytics import GroupBucket

from .stats import ZERO, as_float, safe_ratio
from .store import GroupRow, TransactionRecord

_HUNDRED = Decimal("100")


def fold_by_month(records: Iterable[TransactionRecord]) -> list[GroupRow]:
    """Sum and count records per ``YYYY-MM``, sorted by month."""

    totals: dict[str, tuple[Decimal, int]] = {}
    for record in records:
        amount, count = totals.get(record.month, (ZERO, 0))
        totals[record.month] = (amount + record.amount, count + 1)
    return [
        GroupRow(value=month, sum=amount, count=count)
        for month, (amount, count) in sorted(totals.items())
    ]


def to_buckets(rows: Iterable[GroupRow], overall_total: Decimal) -> list[GroupBucket]:
    return [
        GroupBucket(
            key=row.value,
            total_amount=as_float(row.sum),
            transaction_count=row.count,
            percentage=as_float(safe_ratio(row.sum, overall_total) * _HUNDRED),
        )
        for row in rows
    ]
