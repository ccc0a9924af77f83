"""Pure cash flow, debt trend and forecasting computations."""

from analytics.costs import (
    LONG_TAIL_THRESHOLD,
    OTHER_LABEL,
    bucket_long_tail,
    get_monthly_cost_breakdown,
    get_monthly_cost_breakdown_by_tags,
    monthly_cost_breakdown,
)
from analytics.debt import MONTH_MS, WEEK_MS, calculate_change_rates
from analytics.forecasting import (
    FORECAST_MONTHS,
    SimulationDeltas,
    build_net_worth_frame,
    filter_metrics_by_timeframe,
    forecast_dates,
    forecast_from_history,
    project_net_worth,
    simulation_deltas,
    with_continuity_anchor,
)
from analytics.one_time import monthly_one_time_amount, one_time_yearly_totals
from analytics.recurring import list_tags, monthly_amount, recurring_monthly_totals
from analytics.simulation import DEFAULT_SUPPLY_RATE, estimate_interest, summarize_simulation

__all__ = [
    "monthly_amount",
    "recurring_monthly_totals",
    "list_tags",
    "monthly_one_time_amount",
    "one_time_yearly_totals",
    "OTHER_LABEL",
    "LONG_TAIL_THRESHOLD",
    "get_monthly_cost_breakdown",
    "get_monthly_cost_breakdown_by_tags",
    "monthly_cost_breakdown",
    "bucket_long_tail",
    "WEEK_MS",
    "MONTH_MS",
    "calculate_change_rates",
    "FORECAST_MONTHS",
    "SimulationDeltas",
    "forecast_dates",
    "simulation_deltas",
    "project_net_worth",
    "forecast_from_history",
    "with_continuity_anchor",
    "filter_metrics_by_timeframe",
    "build_net_worth_frame",
    "DEFAULT_SUPPLY_RATE",
    "summarize_simulation",
    "estimate_interest",
]
