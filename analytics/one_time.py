"""Amortisation helpers for one-time transactions."""

from __future__ import annotations

from typing import Any, Iterable, Mapping

import pandas as pd

from core.models import OneTimeTransaction, YearlyTotals

__all__ = [
    "as_one_time",
    "monthly_one_time_amount",
    "one_time_yearly_totals",
]

_AMORTISATION_MONTHS = 12


def as_one_time(item: OneTimeTransaction | Mapping[str, Any]) -> OneTimeTransaction:
    if isinstance(item, OneTimeTransaction):
        return item
    return OneTimeTransaction.from_record(item)


def monthly_one_time_amount(amount: float) -> float:
    """Spread a one-time amount evenly over twelve months, regardless of its date."""

    return float(amount) / _AMORTISATION_MONTHS


def one_time_yearly_totals(
    items: Iterable[OneTimeTransaction | Mapping[str, Any]],
    year: int,
) -> YearlyTotals:
    """Return raw income and expense sums for visible items dated within ``year`` (UTC)."""

    start = _year_start_ms(year)
    end = _year_start_ms(year + 1)

    income = 0.0
    expense = 0.0
    for item in items:
        transaction = as_one_time(item)
        if transaction.hidden or not start <= transaction.date < end:
            continue
        if transaction.type == "income":
            income += transaction.amount
        else:
            expense += transaction.amount
    return {"income": income, "expense": expense}


def _year_start_ms(year: int) -> int:
    return pd.Timestamp(year=year, month=1, day=1, tz="UTC").value // 1_000_000
