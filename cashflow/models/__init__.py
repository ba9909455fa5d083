"""Database models for the cashflow domain."""
from __future__ import annotations

from .base import Base
from .transactions import ExpenseTransaction, RevenueTransaction

__all__ = ["Base", "ExpenseTransaction", "RevenueTransaction"]
