"""Service layer entrypoints for the dashboard."""

from .dashboard_service import DashboardService

__all__ = ["DashboardService"]
