"""Endpoints exposing the analytics tools over HTTP."""
from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Body, Depends, HTTPException
from pydantic import ValidationError
from sqlalchemy.orm import Session

from cashflow.core.log import get_logger
from cashflow.tools import ToolRegistry, UnknownToolError

from .deps import get_db_session, get_tool_registry

router = APIRouter(prefix="/api/tools", tags=["tools"])
LOGGER = get_logger(__name__)


@router.get("")
def list_tools(registry: ToolRegistry = Depends(get_tool_registry)) -> list[dict[str, Any]]:
    return registry.describe()


@router.post("/{name}")
def run_tool(
    name: str,
    arguments: dict[str, Any] = Body(default_factory=dict),
    session: Session = Depends(get_db_session),
    registry: ToolRegistry = Depends(get_tool_registry),
) -> dict[str, Any]:
    try:
        return registry.execute(name, arguments, session)
    except UnknownToolError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc
    except ValidationError as exc:
        raise HTTPException(
            status_code=400, detail=exc.errors(include_url=False, include_context=False)
        ) from exc
    except ValueError as exc:
        LOGGER.warning("Tool %s rejected input: %s", name, exc)
        raise HTTPException(status_code=400, detail=str(exc)) from exc
