"""Shared fixtures: in-memory SQLite store and transaction factories."""
from __future__ import annotations

from datetime import datetime
from decimal import Decimal

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from cashflow.analytics.store import TransactionStore
from cashflow.models import Base, ExpenseTransaction, RevenueTransaction
from cashflow.schemas.common import DateRange

NOW = datetime(2024, 6, 15, 12, 30, 0)


def _as_datetime(value: str | datetime) -> datetime:
    if isinstance(value, datetime):
        return value
    return datetime.fromisoformat(value)


@pytest.fixture()
def engine():
    # StaticPool keeps one connection so TestClient worker threads see the same database.
    engine = create_engine(
        "sqlite://",
        future=True,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture()
def session(engine) -> Session:
    """Provide an in-memory database session for each test."""

    SessionLocal = sessionmaker(bind=engine, future=True)
    with SessionLocal() as session:
        yield session


@pytest.fixture()
def store(session: Session) -> TransactionStore:
    return TransactionStore(session)


@pytest.fixture()
def full_range() -> DateRange:
    return DateRange(start_date=datetime(2000, 1, 1), end_date=datetime(2100, 12, 31))


@pytest.fixture()
def add_revenue(session: Session):
    def _add(amount, on, plan_id: str = "basic", **fields) -> RevenueTransaction:
        txn = RevenueTransaction(
            amount=Decimal(str(amount)),
            date=_as_datetime(on),
            plan_id=plan_id,
            **fields,
        )
        session.add(txn)
        session.flush()
        return txn

    return _add


@pytest.fixture()
def add_expense(session: Session):
    def _add(amount, on, category: str = "Hosting", **fields) -> ExpenseTransaction:
        txn = ExpenseTransaction(
            amount=Decimal(str(amount)),
            date=_as_datetime(on),
            category=category,
            **fields,
        )
        session.add(txn)
        session.flush()
        return txn

    return _add
