"""Assemble forecast overviews from repository records."""

from __future__ import annotations

import logging
from typing import Sequence

from analytics.costs import (
    get_monthly_cost_breakdown,
    get_monthly_cost_breakdown_by_tags,
    monthly_cost_breakdown,
)
from analytics.debt import calculate_change_rates
from analytics.forecasting import build_net_worth_frame, forecast_from_history, with_continuity_anchor
from analytics.recurring import list_tags, recurring_monthly_totals
from config import Settings, get_settings
from core.formatting import build_insights, format_change_rate
from core.models import DailyMetric, DebtTrend, FinanceOverview, NetWorthSnapshot
from core.repository import FinanceRepository

__all__ = ["prepare_finance_overview", "debt_trend"]

logger = logging.getLogger(__name__)


def prepare_finance_overview(
    repository: FinanceRepository,
    user_id: str,
    *,
    current_net_worth: NetWorthSnapshot | None = None,
    monthly_income: float | None = None,
    monthly_cost: float | None = None,
    priority_tags: Sequence[str] = (),
    use_simulation: bool = False,
    settings: Settings | None = None,
) -> FinanceOverview:
    settings = settings or get_settings()
    monthly_income = settings.default_monthly_income if monthly_income is None else monthly_income
    monthly_cost = settings.default_monthly_cost if monthly_cost is None else monthly_cost

    recurring = repository.list_recurring_transactions(user_id)
    one_time = repository.list_one_time_transactions(user_id)
    metrics = repository.list_daily_metrics(user_id)

    totals = recurring_monthly_totals(recurring)
    monthly_cash_flow = (monthly_income + totals["monthly_income"]) - (monthly_cost + totals["monthly_cost"])

    simulation = repository.get_simulation(user_id) if use_simulation else None
    if use_simulation and simulation is None:
        logger.warning("Simulation requested for user %s but none is stored; using cash flow only", user_id)

    projected = forecast_from_history(
        metrics,
        monthly_income,
        monthly_cost,
        totals,
        current_net_worth=current_net_worth,
        simulation=simulation,
        months=settings.forecast_months,
    )

    current_value = _resolve_current_value(metrics, current_net_worth)
    projected_value = projected[-1].net_worth if projected else None

    cost_breakdown = get_monthly_cost_breakdown(recurring, one_time)
    tag_breakdown = monthly_cost_breakdown(
        recurring,
        one_time,
        threshold=settings.long_tail_threshold,
        other_label=settings.other_label,
    )
    top_cost = max(cost_breakdown, key=lambda row: row["amount"]) if cost_breakdown else None

    insights: list[str] = []
    if current_value is not None:
        insights = build_insights(
            current_net_worth=current_value,
            projected_net_worth=projected_value,
            months=settings.forecast_months,
            monthly_cash_flow=monthly_cash_flow,
            top_cost=top_cost,
            currency=settings.base_currency,
        )

    logger.info("Prepared overview for user %s with %d projected points", user_id, len(projected))

    return {
        "recurring_totals": totals,
        "monthly_cash_flow": monthly_cash_flow,
        "cost_breakdown": cost_breakdown,
        "cost_breakdown_by_tags": get_monthly_cost_breakdown_by_tags(recurring, one_time, priority_tags),
        "tag_breakdown": tag_breakdown,
        "tags": list_tags([*recurring, *one_time]),
        "real_metrics": metrics,
        "projected_metrics": with_continuity_anchor(metrics, projected),
        "net_worth_frame": build_net_worth_frame(metrics, projected),
        "current_net_worth": current_value,
        "projected_net_worth": projected_value,
        "forecast_type": "simulation" if simulation is not None else "cashflow",
        "insights": insights,
    }


def debt_trend(
    repository: FinanceRepository,
    debt_id: str,
    *,
    settings: Settings | None = None,
) -> DebtTrend:
    """Return change rates and display labels for one debt's history."""

    settings = settings or get_settings()
    rates = calculate_change_rates(repository.list_debt_history(debt_id))
    weekly = rates["weekly_change"]
    monthly = rates["monthly_change"]

    return {
        "weekly_change": weekly,
        "monthly_change": monthly,
        "weekly_label": format_change_rate(weekly, "week", settings.base_currency),
        "monthly_label": format_change_rate(monthly, "month", settings.base_currency),
        "direction": _trend_direction(monthly if monthly is not None else weekly),
    }


def _resolve_current_value(
    metrics: Sequence[DailyMetric],
    current_net_worth: NetWorthSnapshot | None,
) -> float | None:
    if current_net_worth is not None and current_net_worth.net_worth is not None:
        return current_net_worth.net_worth
    if not metrics:
        return None
    return max(metrics, key=lambda metric: metric.date).net_worth


def _trend_direction(rate: float | None) -> str:
    if rate is None:
        return "unknown"
    if rate < 0:
        return "decreasing"
    if rate > 0:
        return "increasing"
    return "flat"
