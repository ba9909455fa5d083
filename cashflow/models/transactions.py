"""ORM models for uploaded revenue and expense transactions."""
from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from uuid import uuid4

from sqlalchemy import Boolean, DateTime, Numeric, String
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.sql import func

from .base import Base

_AMOUNT_TYPE = Numeric(18, 2)


def _new_id() -> str:
    return str(uuid4())


class RevenueTransaction(Base):
    """Revenue line attributed to a pricing plan."""

    __tablename__ = "revenue_transaction"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_new_id)
    amount: Mapped[Decimal] = mapped_column(_AMOUNT_TYPE, nullable=False)
    date: Mapped[datetime] = mapped_column(DateTime, nullable=False, index=True)
    plan_id: Mapped[str] = mapped_column(String(64), nullable=False, index=True)
    category: Mapped[str | None] = mapped_column(String(64))
    description: Mapped[str | None] = mapped_column(String(255))
    customer_id: Mapped[str | None] = mapped_column(String(64))
    created_at: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, server_default=func.current_timestamp()
    )


class ExpenseTransaction(Base):
    """Company expense line; not attributable to a plan."""

    __tablename__ = "expense_transaction"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_new_id)
    amount: Mapped[Decimal] = mapped_column(_AMOUNT_TYPE, nullable=False)
    date: Mapped[datetime] = mapped_column(DateTime, nullable=False, index=True)
    category: Mapped[str] = mapped_column(String(64), nullable=False, index=True)
    description: Mapped[str | None] = mapped_column(String(255))
    vendor: Mapped[str | None] = mapped_column(String(128))
    is_recurring: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=False, server_default="0"
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, server_default=func.current_timestamp()
    )
