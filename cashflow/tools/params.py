"""Parameter models validating the flat argument objects sent by the agent."""
from __future__ import annotations

from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from cashflow.analytics.dates import SUPPORTED_PERIODS

_PERIOD_HELP = (
    "Predefined time period: " + ", ".join(SUPPORTED_PERIODS) + ", or a 4-digit year"
)


class ToolParams(BaseModel):
    """Date selection shared by every tool."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    period: Optional[str] = Field(default=None, description=_PERIOD_HELP)
    start_date: Optional[str] = Field(
        default=None,
        description="Custom start date in YYYY-MM-DD format. Overrides period if provided.",
    )
    end_date: Optional[str] = Field(
        default=None,
        description=(
            "Custom end date in YYYY-MM-DD format. Defaults to the current date "
            "if not provided with startDate."
        ),
    )


class RevenueSummaryParams(ToolParams):
    group_by: Literal["plan", "month", "category"] = Field(
        default="plan", description="How to group the revenue data"
    )


class ExpenseSummaryParams(ToolParams):
    group_by: Literal["category", "month", "vendor"] = Field(
        default="category", description="How to group the expense data"
    )


class ProfitabilityParams(ToolParams):
    plan_id: str = Field(min_length=1, description="The pricing plan ID to analyze")


class AnomalyParams(ToolParams):
    sensitivity: Literal["low", "medium", "high"] = Field(
        default="medium", description="Sensitivity level for anomaly detection"
    )
