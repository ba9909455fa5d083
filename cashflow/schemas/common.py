"""Shared pydantic configuration for result payloads."""
from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class ResultModel(BaseModel):
    """Immutable payload serialised with camelCase keys."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
    )


class DateRange(ResultModel):
    """Concrete range both ends of which are inclusive in store filters."""

    start_date: datetime
    end_date: datetime
