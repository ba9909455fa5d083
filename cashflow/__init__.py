"""Cashflow analytics: revenue/expense summaries, trends and anomaly detection."""

from .core import get_logger, get_settings

__all__ = ["get_logger", "get_settings"]
