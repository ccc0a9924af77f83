"""Shared record definitions for the net worth forecasting core."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Any, Iterable, Literal, Mapping, TypedDict

import pandas as pd

TransactionType = Literal["income", "expense"]
Frequency = Literal["monthly", "weekly", "quarterly", "yearly"]


class InvalidRecordError(ValueError):
    """Raised when a record violates a documented invariant."""


@dataclass(frozen=True, slots=True)
class MonthlySchedule:
    days_of_month: tuple[int, ...] = ()

    @property
    def frequency(self) -> str:
        return "monthly"


@dataclass(frozen=True, slots=True)
class WeeklySchedule:
    days_of_week: tuple[int, ...] = ()

    @property
    def frequency(self) -> str:
        return "weekly"


@dataclass(frozen=True, slots=True)
class QuarterlySchedule:
    month: int | None = None
    day: int | None = None

    @property
    def frequency(self) -> str:
        return "quarterly"


@dataclass(frozen=True, slots=True)
class YearlySchedule:
    month: int | None = None
    day: int | None = None

    @property
    def frequency(self) -> str:
        return "yearly"


Schedule = MonthlySchedule | WeeklySchedule | QuarterlySchedule | YearlySchedule

# Which schedule shape each frequency is allowed to populate.
_SHAPE_BY_FREQUENCY = {
    "monthly": "daysOfMonth",
    "weekly": "daysOfWeek",
    "quarterly": "month/day",
    "yearly": "month/day",
}


@dataclass(frozen=True, slots=True)
class RecurringTransaction:
    """A recurring income or expense with a frequency-specific schedule.

    ``schedule`` is ``None`` when the stored frequency is missing or not
    recognised; such transactions normalise to a zero monthly amount.
    """

    name: str
    amount: float
    type: str
    schedule: Schedule | None = None
    tags: tuple[str, ...] = ()
    hidden: bool = False

    def __post_init__(self) -> None:
        _require_non_negative(self.amount, self.name)
        object.__setattr__(self, "tags", _coerce_tags(self.tags))

    @property
    def frequency(self) -> str | None:
        return self.schedule.frequency if self.schedule is not None else None

    @classmethod
    def from_record(cls, record: Mapping[str, Any]) -> "RecurringTransaction":
        """Build a transaction from a stored camelCase record."""

        return cls(
            name=str(record.get("name") or ""),
            amount=_coerce_amount(record.get("amount")),
            type=str(record.get("type") or ""),
            schedule=_parse_schedule(record),
            tags=_coerce_tags(record.get("tags")),
            hidden=bool(record.get("hidden", False)),
        )

    def to_record(self) -> dict[str, Any]:
        record: dict[str, Any] = {
            "name": self.name,
            "amount": self.amount,
            "type": self.type,
            "frequency": self.frequency,
            "tags": list(self.tags),
            "hidden": self.hidden,
        }
        schedule = self.schedule
        if isinstance(schedule, MonthlySchedule):
            record["daysOfMonth"] = list(schedule.days_of_month)
        elif isinstance(schedule, WeeklySchedule):
            record["daysOfWeek"] = list(schedule.days_of_week)
        elif isinstance(schedule, (QuarterlySchedule, YearlySchedule)):
            record["month"] = schedule.month
            record["day"] = schedule.day
        return record


@dataclass(frozen=True, slots=True)
class OneTimeTransaction:
    """A single past or future cash event dated in unix milliseconds."""

    name: str
    amount: float
    type: str
    date: int = 0
    tags: tuple[str, ...] = ()
    hidden: bool = False

    def __post_init__(self) -> None:
        _require_non_negative(self.amount, self.name)
        object.__setattr__(self, "tags", _coerce_tags(self.tags))

    @classmethod
    def from_record(cls, record: Mapping[str, Any]) -> "OneTimeTransaction":
        return cls(
            name=str(record.get("name") or ""),
            amount=_coerce_amount(record.get("amount")),
            type=str(record.get("type") or ""),
            date=_coerce_int(record.get("date") or 0, "date"),
            tags=_coerce_tags(record.get("tags")),
            hidden=bool(record.get("hidden", False)),
        )

    def to_record(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "amount": self.amount,
            "type": self.type,
            "date": self.date,
            "tags": list(self.tags),
            "hidden": self.hidden,
        }


@dataclass(frozen=True, slots=True)
class DebtHistoryPoint:
    timestamp: int
    value: float

    @classmethod
    def from_record(cls, record: Mapping[str, Any]) -> "DebtHistoryPoint":
        return cls(timestamp=int(record["timestamp"]), value=float(record["value"]))

    def to_record(self) -> dict[str, Any]:
        return {"timestamp": self.timestamp, "value": self.value}


@dataclass(frozen=True)
class DailyMetric:
    """A net worth snapshot; projected points only live in memory."""

    date: int
    net_worth: float
    assets: float = 0.0
    debts: float = 0.0
    prices: Mapping[str, float] = field(default_factory=dict)
    is_projected: bool = False

    @classmethod
    def from_record(cls, record: Mapping[str, Any]) -> "DailyMetric":
        return cls(
            date=int(record["date"]),
            net_worth=float(record["netWorth"]),
            assets=float(record.get("assets") or 0.0),
            debts=float(record.get("debts") or 0.0),
            prices=dict(record.get("prices") or {}),
            is_projected=bool(record.get("isProjected", False)),
        )

    def to_record(self) -> dict[str, Any]:
        return {
            "date": self.date,
            "netWorth": self.net_worth,
            "assets": self.assets,
            "debts": self.debts,
            "prices": dict(self.prices),
            "isProjected": self.is_projected,
        }


@dataclass(frozen=True, slots=True)
class NetWorthSnapshot:
    """Caller-supplied current net worth; ``None`` fields fall back to history."""

    net_worth: float | None = None
    assets: float | None = None
    debts: float | None = None

    @classmethod
    def from_record(cls, record: Mapping[str, Any] | None) -> "NetWorthSnapshot | None":
        if record is None:
            return None
        return cls(
            net_worth=_optional_float(record.get("netWorth")),
            assets=_optional_float(record.get("assets")),
            debts=_optional_float(record.get("debts")),
        )


@dataclass(frozen=True, slots=True)
class SimulationSummary:
    """Original versus price-adjusted portfolio totals."""

    original_value: float
    adjusted_value: float
    original_assets: float
    adjusted_assets: float
    original_debts: float
    adjusted_debts: float
    percent_change: float

    @classmethod
    def from_record(cls, record: Mapping[str, Any]) -> "SimulationSummary":
        return cls(
            original_value=float(record["originalValue"]),
            adjusted_value=float(record["adjustedValue"]),
            original_assets=float(record["originalAssets"]),
            adjusted_assets=float(record["adjustedAssets"]),
            original_debts=float(record["originalDebts"]),
            adjusted_debts=float(record["adjustedDebts"]),
            percent_change=float(record.get("percentChange", 0.0)),
        )

    def to_record(self) -> dict[str, float]:
        return {
            "originalValue": self.original_value,
            "adjustedValue": self.adjusted_value,
            "originalAssets": self.original_assets,
            "adjustedAssets": self.adjusted_assets,
            "originalDebts": self.original_debts,
            "adjustedDebts": self.adjusted_debts,
            "percentChange": self.percent_change,
        }


@dataclass(frozen=True, slots=True)
class Holding:
    """A wallet position; quoted holdings are valued at quantity times price."""

    wallet_id: str
    quantity: float
    symbol: str | None = None
    quote_symbol: str | None = None
    is_debt: bool = False

    @property
    def price_symbol(self) -> str | None:
        return self.quote_symbol or self.symbol


@dataclass(frozen=True, slots=True)
class ManualValue:
    name: str
    value: float


class CostBreakdownItem(TypedDict):
    label: str
    amount: float


class RecurringTotals(TypedDict):
    monthly_income: float
    monthly_cost: float


class YearlyTotals(TypedDict):
    income: float
    expense: float


class DebtChangeRates(TypedDict):
    weekly_change: float | None
    monthly_change: float | None


class InterestEstimate(TypedDict):
    rate: float
    monthly: float
    yearly: float


class DebtTrend(TypedDict):
    weekly_change: float | None
    monthly_change: float | None
    weekly_label: str
    monthly_label: str
    direction: str


class FinanceOverview(TypedDict):
    recurring_totals: RecurringTotals
    monthly_cash_flow: float
    cost_breakdown: list[CostBreakdownItem]
    cost_breakdown_by_tags: list[CostBreakdownItem]
    tag_breakdown: list[CostBreakdownItem]
    tags: list[str]
    real_metrics: list[DailyMetric]
    projected_metrics: list[DailyMetric]
    net_worth_frame: pd.DataFrame
    current_net_worth: float | None
    projected_net_worth: float | None
    forecast_type: str
    insights: list[str]


def _require_non_negative(amount: float, name: str) -> None:
    if not math.isfinite(amount) or amount < 0:
        raise InvalidRecordError(f"Amount for {name or 'transaction'!r} must be a non-negative number, got {amount}")


def _coerce_amount(value: Any) -> float:
    try:
        return float(value)
    except (TypeError, ValueError) as exc:
        raise InvalidRecordError(f"Invalid amount: {value!r}") from exc


def _optional_float(value: Any) -> float | None:
    if value is None:
        return None
    return float(value)


def _coerce_tags(value: Iterable[str] | str | None) -> tuple[str, ...]:
    if not value:
        return ()
    if isinstance(value, str):
        return (value,)
    return tuple(str(tag) for tag in value)


def _coerce_int(value: Any, key: str) -> int:
    if isinstance(value, bool):
        raise InvalidRecordError(f"{key} must be an integer, got {value!r}")
    try:
        return int(value)
    except (TypeError, ValueError) as exc:
        raise InvalidRecordError(f"{key} must be an integer, got {value!r}") from exc


def _int_tuple(values: Iterable[Any] | None, low: int, high: int, key: str) -> tuple[int, ...]:
    if not values:
        return ()
    if isinstance(values, (str, bytes)) or not isinstance(values, Iterable):
        raise InvalidRecordError(f"{key} must be a list of integers, got {values!r}")
    parsed = tuple(_coerce_int(value, key) for value in values)
    for value in parsed:
        if not low <= value <= high:
            raise InvalidRecordError(f"{key} values must be within {low}-{high}, got {value}")
    return parsed


def _optional_int(value: Any, low: int, high: int, key: str) -> int | None:
    if value is None:
        return None
    parsed = _coerce_int(value, key)
    if not low <= parsed <= high:
        raise InvalidRecordError(f"{key} must be within {low}-{high}, got {parsed}")
    return parsed


def _parse_schedule(record: Mapping[str, Any]) -> Schedule | None:
    frequency = record.get("frequency")
    expected = _SHAPE_BY_FREQUENCY.get(frequency) if isinstance(frequency, str) else None
    if expected is None:
        return None

    days_of_month = _int_tuple(record.get("daysOfMonth"), 1, 31, "daysOfMonth")
    days_of_week = _int_tuple(record.get("daysOfWeek"), 0, 6, "daysOfWeek")
    month = _optional_int(record.get("month"), 1, 12, "month")
    day = _optional_int(record.get("day"), 1, 31, "day")

    populated = {
        shape
        for shape, present in (
            ("daysOfMonth", bool(days_of_month)),
            ("daysOfWeek", bool(days_of_week)),
            ("month/day", month is not None or day is not None),
        )
        if present
    }
    foreign = populated - {expected}
    if foreign:
        raise InvalidRecordError(f"A {frequency} schedule cannot carry {', '.join(sorted(foreign))}")

    if frequency == "monthly":
        return MonthlySchedule(days_of_month)
    if frequency == "weekly":
        return WeeklySchedule(days_of_week)
    if frequency == "quarterly":
        return QuarterlySchedule(month, day)
    return YearlySchedule(month, day)


__all__ = [
    "TransactionType",
    "Frequency",
    "InvalidRecordError",
    "MonthlySchedule",
    "WeeklySchedule",
    "QuarterlySchedule",
    "YearlySchedule",
    "Schedule",
    "RecurringTransaction",
    "OneTimeTransaction",
    "DebtHistoryPoint",
    "DailyMetric",
    "NetWorthSnapshot",
    "SimulationSummary",
    "Holding",
    "ManualValue",
    "CostBreakdownItem",
    "RecurringTotals",
    "YearlyTotals",
    "DebtChangeRates",
    "InterestEstimate",
    "DebtTrend",
    "FinanceOverview",
]
