"""Net worth projection helpers combining cash flow and simulated revaluation."""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from typing import Iterable, Literal, Sequence

import pandas as pd

from core.models import DailyMetric, NetWorthSnapshot, RecurringTotals, SimulationSummary

__all__ = [
    "FORECAST_MONTHS",
    "Timeframe",
    "SimulationDeltas",
    "forecast_dates",
    "simulation_deltas",
    "project_net_worth",
    "forecast_from_history",
    "with_continuity_anchor",
    "filter_metrics_by_timeframe",
    "build_net_worth_frame",
]

logger = logging.getLogger(__name__)

FORECAST_MONTHS = 12
DAY_MS = 24 * 60 * 60 * 1000

Timeframe = Literal["7d", "30d", "90d", "all"]
_TIMEFRAME_DAYS = {"7d": 7, "30d": 30, "90d": 90}


@dataclass(frozen=True)
class SimulationDeltas:
    """Per-month changes needed to reach a simulation target."""

    net_worth: float
    assets: float
    debts: float


def forecast_dates(last_date: int, months: int = FORECAST_MONTHS) -> list[int]:
    """Return unix-ms dates for the first day (UTC) of each month after ``last_date``."""

    last = pd.Timestamp(last_date, unit="ms", tz="UTC")
    start = pd.Timestamp(year=last.year, month=last.month, day=1, tz="UTC") + pd.DateOffset(months=1)
    dates = pd.date_range(start, periods=months, freq="MS")
    return dates.as_unit("ms").asi8.tolist()


def simulation_deltas(
    simulation: SimulationSummary,
    starting_net_worth: float,
    starting_assets: float,
    starting_debts: float,
    months: int = FORECAST_MONTHS,
) -> SimulationDeltas:
    """Spread the gap to a simulation target evenly over ``months``.

    Simulated debts may only shrink: the debt target is clamped to the
    starting debts, so a higher simulated debt produces a zero change.
    """

    target_debts = min(starting_debts, simulation.adjusted_debts)
    debts_delta = (target_debts - starting_debts) / months if target_debts < starting_debts else 0.0

    deltas = SimulationDeltas(
        net_worth=(simulation.adjusted_value - starting_net_worth) / months,
        assets=(simulation.adjusted_assets - starting_assets) / months,
        debts=debts_delta,
    )
    logger.debug(
        "Simulation monthly changes: net_worth=%.2f assets=%.2f debts=%.2f",
        deltas.net_worth,
        deltas.assets,
        deltas.debts,
    )
    return deltas


def project_net_worth(
    last_metric: DailyMetric | None,
    monthly_income: float,
    monthly_cost: float,
    recurring_totals: RecurringTotals | None = None,
    *,
    current_net_worth: NetWorthSnapshot | None = None,
    simulation: SimulationSummary | None = None,
    months: int = FORECAST_MONTHS,
) -> list[DailyMetric]:
    """Project net worth for each month following ``last_metric``.

    Parameters
    ----------
    last_metric:
        Most recent real metric. Without one there is nothing to project and
        an empty list is returned.
    monthly_income, monthly_cost:
        Manual cash flow figures, added on top of ``recurring_totals``.
    recurring_totals:
        Monthly totals of stored recurring transactions.
    current_net_worth:
        Live baseline; any ``None`` field falls back to ``last_metric``.
    simulation:
        Optional revaluation target. When given, net worth moves by both the
        simulated change and the cash flow while assets and debts follow the
        simulation alone. Otherwise assets and debts stay flat.
    months:
        Number of monthly points to produce.

    Returns
    -------
    list[DailyMetric]
        Projected points flagged with ``is_projected``. The last real point
        is not included.
    """

    if last_metric is None:
        return []
    if monthly_income < 0 or monthly_cost < 0:
        raise ValueError("Monthly income and cost must be non-negative.")
    if months < 1:
        raise ValueError(f"Forecast horizon must be at least one month, got {months}")

    starting_net_worth, starting_assets, starting_debts = _resolve_baseline(last_metric, current_net_worth)

    totals = recurring_totals or {"monthly_income": 0.0, "monthly_cost": 0.0}
    cash_flow = (monthly_income + totals["monthly_income"]) - (monthly_cost + totals["monthly_cost"])

    deltas = None
    if simulation is not None:
        deltas = simulation_deltas(simulation, starting_net_worth, starting_assets, starting_debts, months)

    points: list[DailyMetric] = []
    for offset, date_ms in enumerate(forecast_dates(last_metric.date, months), start=1):
        if deltas is None:
            net_worth = starting_net_worth + cash_flow * offset
            assets = starting_assets
            debts = starting_debts
        else:
            net_worth = starting_net_worth + deltas.net_worth * offset + cash_flow * offset
            assets = starting_assets + deltas.assets * offset
            debts = starting_debts + deltas.debts * offset

        points.append(
            DailyMetric(
                date=date_ms,
                net_worth=net_worth,
                assets=assets,
                debts=debts,
                prices=dict(last_metric.prices),
                is_projected=True,
            )
        )

    return points


def forecast_from_history(
    metrics: Sequence[DailyMetric],
    monthly_income: float,
    monthly_cost: float,
    recurring_totals: RecurringTotals | None = None,
    *,
    current_net_worth: NetWorthSnapshot | None = None,
    simulation: SimulationSummary | None = None,
    months: int = FORECAST_MONTHS,
) -> list[DailyMetric]:
    """Project from the latest point of ``metrics``; empty history yields ``[]``."""

    last_metric = _latest(metrics)
    return project_net_worth(
        last_metric,
        monthly_income,
        monthly_cost,
        recurring_totals,
        current_net_worth=current_net_worth,
        simulation=simulation,
        months=months,
    )


def with_continuity_anchor(
    real_metrics: Sequence[DailyMetric],
    projected: Sequence[DailyMetric],
) -> list[DailyMetric]:
    """Prepend the latest real point to ``projected`` so chart lines connect."""

    anchor = _latest(real_metrics)
    if anchor is None or not projected:
        return list(projected)
    return [replace(anchor, is_projected=False), *projected]


def filter_metrics_by_timeframe(
    metrics: Iterable[DailyMetric],
    timeframe: Timeframe,
    now: int,
) -> list[DailyMetric]:
    """Keep metrics dated within ``timeframe`` of ``now`` (unix ms)."""

    if timeframe == "all":
        return list(metrics)

    days = _TIMEFRAME_DAYS.get(timeframe)
    if days is None:
        raise ValueError(f"Unknown timeframe: {timeframe!r}")

    cutoff = now - days * DAY_MS
    return [metric for metric in metrics if metric.date >= cutoff]


def build_net_worth_frame(
    real_metrics: Sequence[DailyMetric],
    projected: Sequence[DailyMetric],
) -> pd.DataFrame:
    """Return chart-ready rows for the actual and projected net worth series."""

    records: list[dict[str, object]] = [_frame_record(metric, "Actual") for metric in real_metrics]
    projected_series = with_continuity_anchor(real_metrics, projected) if projected else []
    records.extend(_frame_record(metric, "Projected") for metric in projected_series)

    frame = pd.DataFrame(records, columns=["Day", "NetWorth", "Assets", "Debts", "Series"])
    if not frame.empty:
        frame = frame.sort_values("Day", kind="stable").reset_index(drop=True)
    return frame


def _frame_record(metric: DailyMetric, series: str) -> dict[str, object]:
    return {
        "Day": pd.Timestamp(metric.date, unit="ms", tz="UTC"),
        "NetWorth": float(metric.net_worth),
        "Assets": float(metric.assets),
        "Debts": float(metric.debts),
        "Series": series,
    }


def _latest(metrics: Sequence[DailyMetric]) -> DailyMetric | None:
    if not metrics:
        return None
    return max(metrics, key=lambda metric: metric.date)


def _resolve_baseline(
    last_metric: DailyMetric,
    current: NetWorthSnapshot | None,
) -> tuple[float, float, float]:
    if current is None:
        return last_metric.net_worth, last_metric.assets, last_metric.debts

    net_worth = current.net_worth if current.net_worth is not None else last_metric.net_worth
    assets = current.assets if current.assets is not None else last_metric.assets
    debts = current.debts if current.debts is not None else last_metric.debts
    return net_worth, assets, debts
