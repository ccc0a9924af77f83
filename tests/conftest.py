"""Shared fixtures for the forecasting core tests."""

from __future__ import annotations

import sys
from pathlib import Path

import pandas as pd
import pytest

ROOT = Path(__file__).resolve().parent.parent
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from config import get_settings
from core.models import DailyMetric, OneTimeTransaction, RecurringTransaction


def to_ms(text: str) -> int:
    """Return the unix-ms timestamp of an ISO date interpreted as UTC."""

    return pd.Timestamp(text, tz="UTC").value // 1_000_000


@pytest.fixture(autouse=True)
def clear_settings_cache():
    """Keep environment-driven settings from leaking between tests."""

    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture()
def sample_recurring() -> list[RecurringTransaction]:
    records = [
        {"name": "Salary", "amount": 5000, "type": "income", "frequency": "monthly", "daysOfMonth": [25]},
        {"name": "Rent", "amount": 1500, "type": "expense", "frequency": "monthly", "daysOfMonth": [1], "tags": ["housing"]},
        {
            "name": "Netflix",
            "amount": 20,
            "type": "expense",
            "frequency": "monthly",
            "daysOfMonth": [3],
            "tags": ["subscription", "entertainment"],
        },
        {"name": "Old gym", "amount": 40, "type": "expense", "frequency": "monthly", "hidden": True},
    ]
    return [RecurringTransaction.from_record(record) for record in records]


@pytest.fixture()
def sample_one_time() -> list[OneTimeTransaction]:
    return [
        OneTimeTransaction(name="Laptop", amount=1200, type="expense", date=to_ms("2024-03-10"), tags=("electronics",)),
        OneTimeTransaction(name="Bonus", amount=3000, type="income", date=to_ms("2024-06-01")),
    ]


@pytest.fixture()
def sample_metrics() -> list[DailyMetric]:
    return [
        DailyMetric(date=to_ms("2024-01-01"), net_worth=9000.0, assets=14000.0, debts=5000.0),
        DailyMetric(
            date=to_ms("2024-01-15"),
            net_worth=10000.0,
            assets=15000.0,
            debts=5000.0,
            prices={"ETH": 2500.0},
        ),
    ]
