"""HTTP routers."""

from .dashboard import router as dashboard_router
from .tools import router as tools_router

__all__ = ["dashboard_router", "tools_router"]
