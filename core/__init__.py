"""Core records and formatting for the net worth forecasting library."""

from .formatting import (
    build_insights,
    format_change_rate,
    format_compact_currency,
    format_compact_number,
    format_currency,
    format_number,
)
from .models import (
    CostBreakdownItem,
    DailyMetric,
    DebtChangeRates,
    DebtHistoryPoint,
    DebtTrend,
    FinanceOverview,
    Holding,
    InterestEstimate,
    InvalidRecordError,
    ManualValue,
    MonthlySchedule,
    NetWorthSnapshot,
    OneTimeTransaction,
    QuarterlySchedule,
    RecurringTotals,
    RecurringTransaction,
    SimulationSummary,
    WeeklySchedule,
    YearlySchedule,
    YearlyTotals,
)

__all__ = [
    "CostBreakdownItem",
    "DailyMetric",
    "DebtChangeRates",
    "DebtHistoryPoint",
    "DebtTrend",
    "FinanceOverview",
    "Holding",
    "InterestEstimate",
    "InvalidRecordError",
    "ManualValue",
    "MonthlySchedule",
    "NetWorthSnapshot",
    "OneTimeTransaction",
    "QuarterlySchedule",
    "RecurringTotals",
    "RecurringTransaction",
    "SimulationSummary",
    "WeeklySchedule",
    "YearlySchedule",
    "YearlyTotals",
    "build_insights",
    "format_change_rate",
    "format_compact_currency",
    "format_compact_number",
    "format_currency",
    "format_number",
]
