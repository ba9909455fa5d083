"""Shared FastAPI dependencies."""
from __future__ import annotations

from collections.abc import Generator
from functools import lru_cache

from sqlalchemy.orm import Session, sessionmaker

from cashflow.db.session import get_sessionmaker
from cashflow.services import DashboardService
from cashflow.tools import ToolRegistry


@lru_cache(maxsize=1)
def _session_factory() -> sessionmaker:
    return get_sessionmaker()


def get_db_session() -> Generator[Session, None, None]:
    """Yield one session per request."""

    session = _session_factory()()
    try:
        yield session
    finally:
        session.close()


@lru_cache(maxsize=1)
def get_tool_registry() -> ToolRegistry:
    return ToolRegistry()


def get_dashboard_service() -> DashboardService:
    return DashboardService()
