"""FastAPI application instance."""
from __future__ import annotations

from fastapi import FastAPI

from cashflow.core import get_logger
from cashflow.routers import dashboard_router, tools_router

LOGGER = get_logger(__name__)


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""

    app = FastAPI(title="Cashflow Analyst", version="0.1.0")
    app.include_router(dashboard_router)
    app.include_router(tools_router)
    LOGGER.info("FastAPI application initialised")
    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    # Development server
    uvicorn.run("cashflow.main:app", host="0.0.0.0", port=8000, reload=True)
