"""Range-filtered read queries over revenue and expense transactions."""
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Any, Optional

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from cashflow.core.log import get_logger
from cashflow.models import ExpenseTransaction, RevenueTransaction
from cashflow.schemas.common import DateRange

from .stats import ZERO, safe_ratio, to_decimal

LOGGER = get_logger(__name__)


class TransactionKind(str, Enum):
    REVENUE = "revenue"
    EXPENSE = "expense"


_MODELS = {
    TransactionKind.REVENUE: RevenueTransaction,
    TransactionKind.EXPENSE: ExpenseTransaction,
}

# Columns usable as equality filters and group keys per kind.
_FILTER_FIELDS = {
    TransactionKind.REVENUE: {"plan_id", "category"},
    TransactionKind.EXPENSE: {"category", "vendor", "is_recurring"},
}
_GROUP_FIELDS = {
    TransactionKind.REVENUE: {"plan_id", "category"},
    TransactionKind.EXPENSE: {"category", "vendor"},
}


@dataclass(frozen=True)
class Aggregate:
    """Sum, count and average of ``amount`` for a filtered population."""

    sum: Decimal = ZERO
    count: int = 0

    @property
    def avg(self) -> Decimal:
        return safe_ratio(self.sum, Decimal(self.count))


@dataclass(frozen=True)
class GroupRow:
    value: str
    sum: Decimal
    count: int


@dataclass(frozen=True)
class TransactionRecord:
    """Plain snapshot of one stored transaction."""

    id: str
    kind: TransactionKind
    amount: Decimal
    date: datetime
    plan_id: Optional[str] = None
    category: Optional[str] = None
    description: Optional[str] = None
    vendor: Optional[str] = None
    customer_id: Optional[str] = None
    is_recurring: bool = False

    @property
    def month(self) -> str:
        return self.date.strftime("%Y-%m")


class TransactionStore:
    """Read-only query facade used by every analytics operation.

    All range filters are inclusive on both ends. Database errors are not
    caught here.
    """

    def __init__(self, session: Session) -> None:
        self.session = session
        self.query_count = 0

    @staticmethod
    def _model(kind: TransactionKind | str):
        return _MODELS[TransactionKind(kind)]

    def _range_filters(self, model, date_range: DateRange) -> list[Any]:
        return [
            model.date >= date_range.start_date,
            model.date <= date_range.end_date,
        ]

    def _equality_filters(self, kind: TransactionKind, model, filters: dict[str, Any]) -> list[Any]:
        clauses: list[Any] = []
        for name, value in filters.items():
            if value is None:
                continue
            if name not in _FILTER_FIELDS[kind]:
                raise ValueError(f"Unsupported {kind.value} filter: {name}")
            clauses.append(getattr(model, name) == value)
        return clauses

    def _execute(self, statement):
        self.query_count += 1
        return self.session.execute(statement)

    def aggregate(
        self,
        kind: TransactionKind | str,
        date_range: DateRange,
        **filters: Any,
    ) -> Aggregate:
        """Return sum/count of ``amount`` in range, optionally filtered."""

        kind = TransactionKind(kind)
        model = self._model(kind)
        query = select(
            func.coalesce(func.sum(model.amount), 0).label("total"),
            func.count(model.id).label("count"),
        ).where(
            *self._range_filters(model, date_range),
            *self._equality_filters(kind, model, filters),
        )
        row = self._execute(query).one()
        return Aggregate(sum=to_decimal(row.total), count=int(row.count or 0))

    def group_by(
        self,
        kind: TransactionKind | str,
        date_range: DateRange,
        field: str,
    ) -> list[GroupRow]:
        """Totals per stored column value; NULL values are left out."""

        kind = TransactionKind(kind)
        if field not in _GROUP_FIELDS[kind]:
            raise ValueError(f"Cannot group {kind.value} transactions by {field!r}")
        model = self._model(kind)
        column = getattr(model, field)
        query = (
            select(
                column.label("value"),
                func.coalesce(func.sum(model.amount), 0).label("total"),
                func.count(model.id).label("count"),
            )
            .where(*self._range_filters(model, date_range), column.is_not(None))
            .group_by(column)
            .order_by(column.asc())
        )
        return [
            GroupRow(value=str(row.value), sum=to_decimal(row.total), count=int(row.count))
            for row in self._execute(query).all()
        ]

    def find_many(
        self,
        kind: TransactionKind | str,
        date_range: DateRange,
        *,
        limit: Optional[int] = None,
        newest_first: bool = False,
    ) -> list[TransactionRecord]:
        """Load full records in range, oldest first unless ``newest_first``."""

        kind = TransactionKind(kind)
        model = self._model(kind)
        ordering = (
            (model.date.desc(), model.id.desc()) if newest_first else (model.date.asc(), model.id.asc())
        )
        query = select(model).where(*self._range_filters(model, date_range)).order_by(*ordering)
        if limit is not None:
            query = query.limit(limit)
        rows = self._execute(query).scalars().all()
        LOGGER.debug("Loaded %d %s transactions", len(rows), kind.value)
        return [self._to_record(kind, row) for row in rows]

    def recent(
        self,
        kind: TransactionKind | str,
        date_range: DateRange,
        limit: int,
    ) -> list[TransactionRecord]:
        return self.find_many(kind, date_range, limit=limit, newest_first=True)

    def distinct_customers(self, date_range: DateRange) -> int:
        """Number of distinct non-null customers with revenue in range."""

        model = RevenueTransaction
        query = select(func.count(func.distinct(model.customer_id))).where(
            *self._range_filters(model, date_range),
            model.customer_id.is_not(None),
        )
        return int(self._execute(query).scalar_one() or 0)

    @staticmethod
    def _to_record(kind: TransactionKind, row: Any) -> TransactionRecord:
        if kind is TransactionKind.REVENUE:
            return TransactionRecord(
                id=str(row.id),
                kind=kind,
                amount=to_decimal(row.amount),
                date=row.date,
                plan_id=row.plan_id,
                category=row.category,
                description=row.description,
                customer_id=row.customer_id,
            )
        return TransactionRecord(
            id=str(row.id),
            kind=kind,
            amount=to_decimal(row.amount),
            date=row.date,
            category=row.category,
            description=row.description,
            vendor=row.vendor,
            is_recurring=bool(row.is_recurring),
        )
