"""Dashboard overview endpoint."""
from __future__ import annotations

from typing import Any, Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from cashflow.analytics.dates import ParseError
from cashflow.core.log import get_logger
from cashflow.services import DashboardService

from .deps import get_dashboard_service, get_db_session

router = APIRouter(prefix="/api/dashboard", tags=["dashboard"])
LOGGER = get_logger(__name__)


@router.get("")
def dashboard_overview(
    period: Optional[str] = None,
    start_date: Optional[str] = Query(default=None, alias="startDate"),
    end_date: Optional[str] = Query(default=None, alias="endDate"),
    session: Session = Depends(get_db_session),
    service: DashboardService = Depends(get_dashboard_service),
) -> dict[str, Any]:
    try:
        result = service.get_dashboard(session, period, start_date, end_date)
    except ParseError as exc:
        LOGGER.warning("Dashboard rejected range: %s", exc)
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    return result.model_dump(mode="json", by_alias=True)
