"""Repository collaborators that supply records to the forecasting core."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any, Mapping, Protocol

from core.models import (
    DailyMetric,
    DebtHistoryPoint,
    OneTimeTransaction,
    RecurringTransaction,
    SimulationSummary,
)

__all__ = ["FinanceRepository", "InMemoryRepository", "load_repository"]

logger = logging.getLogger(__name__)


class FinanceRepository(Protocol):
    """Read/write interface of the document store backing the application."""

    def list_recurring_transactions(self, user_id: str) -> list[RecurringTransaction]: ...

    def list_one_time_transactions(self, user_id: str) -> list[OneTimeTransaction]: ...

    def list_daily_metrics(self, user_id: str) -> list[DailyMetric]: ...

    def list_debt_history(self, debt_id: str) -> list[DebtHistoryPoint]: ...

    def save_debt_history_point(self, debt_id: str, point: DebtHistoryPoint) -> None: ...

    def update_debt_history_point(
        self,
        debt_id: str,
        timestamp: int,
        *,
        new_timestamp: int | None = None,
        value: float | None = None,
    ) -> DebtHistoryPoint: ...

    def delete_debt_history_point(self, debt_id: str, timestamp: int) -> None: ...

    def get_simulation(self, user_id: str) -> SimulationSummary | None: ...


@dataclass
class InMemoryRepository:
    """Dictionary-backed repository keyed by user and debt identifiers."""

    recurring: dict[str, list[RecurringTransaction]] = field(default_factory=dict)
    one_time: dict[str, list[OneTimeTransaction]] = field(default_factory=dict)
    metrics: dict[str, list[DailyMetric]] = field(default_factory=dict)
    debt_history: dict[str, list[DebtHistoryPoint]] = field(default_factory=dict)
    simulations: dict[str, SimulationSummary] = field(default_factory=dict)

    def list_recurring_transactions(self, user_id: str) -> list[RecurringTransaction]:
        return list(self.recurring.get(user_id, ()))

    def list_one_time_transactions(self, user_id: str) -> list[OneTimeTransaction]:
        return list(self.one_time.get(user_id, ()))

    def list_daily_metrics(self, user_id: str) -> list[DailyMetric]:
        return sorted(self.metrics.get(user_id, ()), key=lambda metric: metric.date)

    def list_debt_history(self, debt_id: str) -> list[DebtHistoryPoint]:
        return sorted(self.debt_history.get(debt_id, ()), key=lambda point: point.timestamp)

    def save_debt_history_point(self, debt_id: str, point: DebtHistoryPoint) -> None:
        self.debt_history.setdefault(debt_id, []).append(point)

    def update_debt_history_point(
        self,
        debt_id: str,
        timestamp: int,
        *,
        new_timestamp: int | None = None,
        value: float | None = None,
    ) -> DebtHistoryPoint:
        """Patch the point recorded at ``timestamp``; omitted fields are kept."""

        points = self.debt_history.get(debt_id, [])
        index = _find_point(points, debt_id, timestamp)
        changes: dict[str, Any] = {}
        if new_timestamp is not None:
            changes["timestamp"] = int(new_timestamp)
        if value is not None:
            changes["value"] = float(value)
        points[index] = replace(points[index], **changes)
        logger.debug("Updated debt %s history point at %s", debt_id, timestamp)
        return points[index]

    def delete_debt_history_point(self, debt_id: str, timestamp: int) -> None:
        points = self.debt_history.get(debt_id, [])
        del points[_find_point(points, debt_id, timestamp)]
        logger.debug("Deleted debt %s history point at %s", debt_id, timestamp)

    def get_simulation(self, user_id: str) -> SimulationSummary | None:
        return self.simulations.get(user_id)


def _find_point(points: list[DebtHistoryPoint], debt_id: str, timestamp: int) -> int:
    for index, point in enumerate(points):
        if point.timestamp == timestamp:
            return index
    raise KeyError(f"No history point at {timestamp} for debt {debt_id!r}")

def load_repository(json_path: str | Path) -> InMemoryRepository:
    """Build an in-memory repository from a JSON export.

    The export holds a ``users`` mapping (per-user ``recurringTransactions``,
    ``oneTimeTransactions``, ``dailyMetrics`` and an optional ``simulation``
    summary) and a ``debtHistory`` mapping keyed by debt id.
    """

    path = Path(json_path)
    if not path.exists():
        raise FileNotFoundError(f"Export file not found: {path}")

    with path.open(encoding="utf-8") as handle:
        payload: Mapping[str, Any] = json.load(handle)

    repository = InMemoryRepository()
    for user_id, user in (payload.get("users") or {}).items():
        repository.recurring[user_id] = [
            RecurringTransaction.from_record(record) for record in user.get("recurringTransactions", ())
        ]
        repository.one_time[user_id] = [
            OneTimeTransaction.from_record(record) for record in user.get("oneTimeTransactions", ())
        ]
        repository.metrics[user_id] = [DailyMetric.from_record(record) for record in user.get("dailyMetrics", ())]
        if user.get("simulation"):
            repository.simulations[user_id] = SimulationSummary.from_record(user["simulation"])

    for debt_id, points in (payload.get("debtHistory") or {}).items():
        repository.debt_history[debt_id] = [DebtHistoryPoint.from_record(point) for point in points]

    logger.info(
        "Loaded export %s with %d users and %d debt histories",
        path,
        len(repository.metrics),
        len(repository.debt_history),
    )
    return repository
