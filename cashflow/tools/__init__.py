"""Analytics tool entrypoints exposed to the conversational agent."""
from .params import (
    AnomalyParams,
    ExpenseSummaryParams,
    ProfitabilityParams,
    RevenueSummaryParams,
    ToolParams,
)
from .registry import ToolRegistry, ToolSpec, UnknownToolError

__all__ = [
    "AnomalyParams",
    "ExpenseSummaryParams",
    "ProfitabilityParams",
    "RevenueSummaryParams",
    "ToolParams",
    "ToolRegistry",
    "ToolSpec",
    "UnknownToolError",
]
