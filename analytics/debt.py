"""Trend estimation for debt value histories."""

from __future__ import annotations

from typing import Any, Iterable, Mapping

import numpy as np
import pandas as pd

from core.models import DebtChangeRates, DebtHistoryPoint

__all__ = [
    "WEEK_MS",
    "MONTH_MS",
    "calculate_change_rates",
]

WEEK_MS = 7 * 24 * 60 * 60 * 1000
MONTH_MS = 30 * 24 * 60 * 60 * 1000


def calculate_change_rates(
    history: Iterable[DebtHistoryPoint | Mapping[str, Any]] | None,
) -> DebtChangeRates:
    """Return the average weekly and monthly change of a debt's value.

    Each rate is the least-squares slope of value against time, fitted over
    the trailing window (7 or 30 days before the latest point) and scaled to
    that window's length. A rate is ``None`` when its window holds fewer than
    two points or spans no time. Paying a debt down yields negative rates.
    """

    points = [_as_point(point) for point in history or ()]
    if len(points) < 2:
        return {"weekly_change": None, "monthly_change": None}

    frame = pd.DataFrame(
        {
            "timestamp": [point.timestamp for point in points],
            "value": [point.value for point in points],
        }
    ).sort_values("timestamp", kind="stable")
    latest = int(frame["timestamp"].iloc[-1])

    return {
        "weekly_change": _windowed_rate(frame, latest, WEEK_MS),
        "monthly_change": _windowed_rate(frame, latest, MONTH_MS),
    }


def _windowed_rate(frame: pd.DataFrame, latest: int, window_ms: int) -> float | None:
    window = frame[frame["timestamp"] >= latest - window_ms]
    if len(window) < 2:
        return None

    # Offsets from the latest point keep the fit well conditioned.
    x = (window["timestamp"] - latest).to_numpy(dtype=float)
    if x.max() == x.min():
        return None
    y = window["value"].to_numpy(dtype=float)

    try:
        slope, _ = np.polyfit(x, y, 1)
    except np.linalg.LinAlgError:
        return None
    return float(slope * window_ms)


def _as_point(point: DebtHistoryPoint | Mapping[str, Any]) -> DebtHistoryPoint:
    if isinstance(point, DebtHistoryPoint):
        return point
    return DebtHistoryPoint.from_record(point)
