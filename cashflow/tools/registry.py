"""Registry of the analytics tools callable by the conversational agent."""
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Callable, Dict, Mapping, Optional, Sequence

from sqlalchemy.orm import Session

from cashflow.analytics import (
    TransactionStore,
    cashflow_trend,
    describe_period,
    expense_summary,
    find_anomalies,
    list_plans,
    profitability,
    resolve_date_range,
    revenue_summary,
)
from cashflow.core.config import AnalyticsSettings, get_settings
from cashflow.core.log import get_logger, log_context, timeit
from cashflow.schemas.common import DateRange, ResultModel

from .params import (
    AnomalyParams,
    ExpenseSummaryParams,
    ProfitabilityParams,
    RevenueSummaryParams,
    ToolParams,
)

logger = get_logger(__name__)

Handler = Callable[[TransactionStore, DateRange, Any, str], ResultModel]


class UnknownToolError(KeyError):
    """Raised when a call names a tool that is not registered."""

    def __str__(self) -> str:
        return f"Unknown tool: {self.args[0]}"


@dataclass(frozen=True)
class ToolSpec:
    """Registry entry describing a callable analytics tool."""

    name: str
    description: str
    params_model: type[ToolParams]
    handler: Handler
    period_setting: str = "default_period"


def _default_specs() -> list[ToolSpec]:
    return [
        ToolSpec(
            name="list_pricing_plans",
            description="Get a list of all pricing plans with basic statistics",
            params_model=ToolParams,
            handler=lambda store, rng, params, period: list_plans(store, rng, period=period),
        ),
        ToolSpec(
            name="get_revenue_summary",
            description="Get comprehensive revenue analysis including trends and breakdowns",
            params_model=RevenueSummaryParams,
            handler=lambda store, rng, params, period: revenue_summary(
                store, rng, params.group_by, period=period
            ),
        ),
        ToolSpec(
            name="get_expense_summary",
            description="Get comprehensive expense analysis including categories and trends",
            params_model=ExpenseSummaryParams,
            handler=lambda store, rng, params, period: expense_summary(
                store, rng, params.group_by, period=period
            ),
        ),
        ToolSpec(
            name="calculate_profitability_for_plan",
            description="Calculate detailed profitability metrics for a specific pricing plan",
            params_model=ProfitabilityParams,
            handler=lambda store, rng, params, period: profitability(
                store, params.plan_id, rng, period=period
            ),
        ),
        ToolSpec(
            name="calculate_cashflow_trend",
            description="Analyze cashflow trends over time with monthly breakdown",
            params_model=ToolParams,
            handler=lambda store, rng, params, period: cashflow_trend(store, rng, period=period),
            period_setting="trend_period",
        ),
        ToolSpec(
            name="find_data_anomalies",
            description="Detect anomalies and unusual patterns in financial data",
            params_model=AnomalyParams,
            handler=lambda store, rng, params, period: find_anomalies(
                store, rng, params.sensitivity, period=period
            ),
        ),
    ]


class ToolRegistry:
    """Central registry for agent tool calls."""

    def __init__(
        self,
        settings: Optional[AnalyticsSettings] = None,
        clock: Callable[[], datetime] = datetime.now,
    ) -> None:
        self.settings = settings or get_settings().analytics
        self.clock = clock
        self._tools: Dict[str, ToolSpec] = {spec.name: spec for spec in _default_specs()}

    @property
    def names(self) -> list[str]:
        return list(self._tools)

    def describe(self) -> list[dict[str, Any]]:
        """Name, description and JSON schema of each tool's parameters."""
        return [
            {
                "name": spec.name,
                "description": spec.description,
                "parameters": spec.params_model.model_json_schema(by_alias=True),
            }
            for spec in self._tools.values()
        ]

    def execute(
        self,
        name: str,
        arguments: Optional[Mapping[str, Any]],
        session: Session,
    ) -> dict[str, Any]:
        """Validate arguments, run one tool and return its JSON-ready result.

        Input, parse and storage errors propagate to the caller.
        """
        spec = self._tools.get(name)
        if spec is None:
            raise UnknownToolError(name)

        params = spec.params_model.model_validate(dict(arguments or {}))
        period = params.period or getattr(self.settings, spec.period_setting)
        date_range = resolve_date_range(
            period, params.start_date, params.end_date, now=self.clock()
        )
        label = describe_period(period, params.start_date, params.end_date)

        store = TransactionStore(session)
        with log_context.scoped(tool=name):
            logger.info(
                "Executing tool=%s range=%s..%s",
                name,
                date_range.start_date.isoformat(),
                date_range.end_date.isoformat(),
            )
            with timeit(f"Tool {name}", logger=logger, unit="queries") as timer:
                result = spec.handler(store, date_range, params, label)
                timer.set_total(store.query_count)

        return result.model_dump(mode="json", by_alias=True)

    def execute_calls(
        self,
        calls: Sequence[Mapping[str, Any]],
        session: Session,
    ) -> list[dict[str, Any]]:
        """Run a batch of calls; rejected inputs are reported per call.

        Each entry of the returned list is ``{"tool", "result"}`` or
        ``{"tool", "error"}``. Storage failures abort the batch.
        """
        outcomes: list[dict[str, Any]] = []
        for call in calls:
            name = str(call.get("tool") or call.get("name") or "").strip()
            if not name:
                continue
            try:
                payload = self.execute(name, call.get("arguments"), session)
            except (UnknownToolError, ValueError) as exc:
                logger.warning("Tool %s rejected: %s", name, exc)
                outcomes.append({"tool": name, "error": str(exc)})
                continue
            outcomes.append({"tool": name, "result": payload})
        return outcomes
