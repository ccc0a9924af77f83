"""Monthly normalisation helpers for recurring transactions."""

from __future__ import annotations

from typing import Any, Iterable, Mapping

from core.models import (
    MonthlySchedule,
    OneTimeTransaction,
    QuarterlySchedule,
    RecurringTotals,
    RecurringTransaction,
    WeeklySchedule,
    YearlySchedule,
)

__all__ = [
    "as_recurring",
    "monthly_amount",
    "recurring_monthly_totals",
    "list_tags",
]

_WEEKS_PER_YEAR = 52
_MONTHS_PER_YEAR = 12
_MONTHS_PER_QUARTER = 3


def as_recurring(item: RecurringTransaction | Mapping[str, Any]) -> RecurringTransaction:
    """Return ``item`` as a :class:`RecurringTransaction`, parsing raw records."""

    if isinstance(item, RecurringTransaction):
        return item
    return RecurringTransaction.from_record(item)


def monthly_amount(transaction: RecurringTransaction | Mapping[str, Any]) -> float:
    """Return the monthly-equivalent amount of a recurring transaction.

    Every listed day is a full charge of ``amount``: a monthly item paid on
    the 1st and 15th counts twice. Empty day lists mean a single occurrence.
    Transactions without a recognised schedule contribute nothing.
    """

    transaction = as_recurring(transaction)
    schedule = transaction.schedule
    amount = float(transaction.amount)

    if isinstance(schedule, MonthlySchedule):
        return amount * max(1, len(schedule.days_of_month))
    if isinstance(schedule, WeeklySchedule):
        occurrences = max(1, len(schedule.days_of_week))
        return amount * occurrences * _WEEKS_PER_YEAR / _MONTHS_PER_YEAR
    if isinstance(schedule, QuarterlySchedule):
        return amount / _MONTHS_PER_QUARTER
    if isinstance(schedule, YearlySchedule):
        return amount / _MONTHS_PER_YEAR
    return 0.0


def recurring_monthly_totals(
    recurring: Iterable[RecurringTransaction | Mapping[str, Any]],
) -> RecurringTotals:
    """Sum visible recurring items into monthly income and cost totals."""

    monthly_income = 0.0
    monthly_cost = 0.0
    for item in recurring:
        transaction = as_recurring(item)
        if transaction.hidden:
            continue
        amount = monthly_amount(transaction)
        if transaction.type == "income":
            monthly_income += amount
        else:
            monthly_cost += amount
    return {"monthly_income": monthly_income, "monthly_cost": monthly_cost}


def list_tags(items: Iterable[RecurringTransaction | OneTimeTransaction]) -> list[str]:
    """Return the distinct tags used by ``items`` in first-seen order."""

    seen: dict[str, None] = {}
    for item in items:
        for tag in item.tags:
            seen.setdefault(tag, None)
    return list(seen)
