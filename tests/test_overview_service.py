"""Tests for the repository, settings and overview service."""

from __future__ import annotations

import json

import pytest

from analytics.debt import MONTH_MS, WEEK_MS
from config import Settings, get_settings
from core.models import DebtHistoryPoint, NetWorthSnapshot, SimulationSummary
from core.overview_service import debt_trend, prepare_finance_overview
from core.repository import InMemoryRepository, load_repository


@pytest.fixture()
def settings() -> Settings:
    return Settings(default_monthly_income=0.0, default_monthly_cost=0.0)


@pytest.fixture()
def repository(sample_recurring, sample_one_time, sample_metrics) -> InMemoryRepository:
    return InMemoryRepository(
        recurring={"u1": sample_recurring},
        one_time={"u1": sample_one_time},
        metrics={"u1": list(reversed(sample_metrics))},
        simulations={
            "u1": SimulationSummary(
                original_value=10000.0,
                adjusted_value=16000.0,
                original_assets=15000.0,
                adjusted_assets=21000.0,
                original_debts=5000.0,
                adjusted_debts=5000.0,
                percent_change=60.0,
            )
        },
    )


def test_overview_projects_with_recurring_cash_flow(repository, settings):
    overview = prepare_finance_overview(repository, "u1", settings=settings)

    assert overview["recurring_totals"] == {"monthly_income": 5000.0, "monthly_cost": 1520.0}
    assert overview["monthly_cash_flow"] == pytest.approx(3480.0)
    assert overview["forecast_type"] == "cashflow"
    assert overview["current_net_worth"] == pytest.approx(10000.0)
    assert overview["projected_net_worth"] == pytest.approx(10000.0 + 3480.0 * 12)
    assert len(overview["projected_metrics"]) == 13
    assert not overview["projected_metrics"][0].is_projected
    assert [metric.date for metric in overview["real_metrics"]] == sorted(
        metric.date for metric in overview["real_metrics"]
    )
    assert overview["tags"] == ["housing", "subscription", "entertainment", "electronics"]
    assert any("surplus" in line for line in overview["insights"])


def test_overview_cost_breakdowns(repository, settings):
    overview = prepare_finance_overview(repository, "u1", priority_tags=["subscription"], settings=settings)

    assert [row["label"] for row in overview["cost_breakdown"]] == ["Rent", "Netflix", "Laptop"]
    assert [row["label"] for row in overview["cost_breakdown_by_tags"]] == ["Rent", "subscription", "Laptop"]
    assert overview["tag_breakdown"][0] == {"label": "housing", "amount": pytest.approx(1500.0)}


def test_overview_uses_stored_simulation(repository, settings):
    overview = prepare_finance_overview(
        repository,
        "u1",
        monthly_income=0.0,
        monthly_cost=3480.0,
        use_simulation=True,
        settings=settings,
    )

    assert overview["forecast_type"] == "simulation"
    assert overview["projected_net_worth"] == pytest.approx(16000.0)
    assert overview["projected_metrics"][-1].assets == pytest.approx(21000.0)


def test_overview_prefers_current_net_worth(repository, settings):
    overview = prepare_finance_overview(
        repository,
        "u1",
        current_net_worth=NetWorthSnapshot(net_worth=20000.0),
        settings=settings,
    )

    assert overview["current_net_worth"] == pytest.approx(20000.0)
    assert overview["projected_net_worth"] == pytest.approx(20000.0 + 3480.0 * 12)


def test_overview_without_history(settings):
    overview = prepare_finance_overview(InMemoryRepository(), "nobody", settings=settings)

    assert overview["projected_metrics"] == []
    assert overview["current_net_worth"] is None
    assert overview["projected_net_worth"] is None
    assert overview["net_worth_frame"].empty
    assert overview["insights"] == []


def test_overview_falls_back_to_default_slider_values(repository):
    overview = prepare_finance_overview(repository, "u1", settings=Settings())

    assert overview["monthly_cash_flow"] == pytest.approx((18000.0 + 5000.0) - (10000.0 + 1520.0))


def test_debt_trend_labels(settings):
    repository = InMemoryRepository()
    repository.save_debt_history_point("d1", DebtHistoryPoint(timestamp=MONTH_MS, value=80.0))
    repository.save_debt_history_point("d1", DebtHistoryPoint(timestamp=0, value=100.0))

    trend = debt_trend(repository, "d1", settings=settings)

    assert trend["weekly_change"] is None
    assert trend["monthly_change"] == pytest.approx(-20.0)
    assert trend["weekly_label"] == "n/a"
    assert trend["monthly_label"] == "-$20.00/month"
    assert trend["direction"] == "decreasing"


@pytest.fixture()
def debt_repository() -> InMemoryRepository:
    repository = InMemoryRepository()
    repository.save_debt_history_point("d1", DebtHistoryPoint(timestamp=0, value=100.0))
    repository.save_debt_history_point("d1", DebtHistoryPoint(timestamp=MONTH_MS, value=80.0))
    return repository


def test_debt_trend_reflects_edited_point(debt_repository, settings):
    updated = debt_repository.update_debt_history_point("d1", MONTH_MS, value=70.0)

    trend = debt_trend(debt_repository, "d1", settings=settings)

    assert updated == DebtHistoryPoint(timestamp=MONTH_MS, value=70.0)
    assert trend["monthly_change"] == pytest.approx(-30.0)
    assert trend["monthly_label"] == "-$30.00/month"


def test_editing_timestamp_moves_point(debt_repository, settings):
    debt_repository.update_debt_history_point("d1", 0, new_timestamp=MONTH_MS - WEEK_MS)

    trend = debt_trend(debt_repository, "d1", settings=settings)

    assert [point.value for point in debt_repository.list_debt_history("d1")] == [100.0, 80.0]
    assert trend["weekly_change"] == pytest.approx(-20.0)


def test_debt_trend_reflects_deleted_point(debt_repository, settings):
    debt_repository.delete_debt_history_point("d1", 0)

    trend = debt_trend(debt_repository, "d1", settings=settings)

    assert debt_repository.list_debt_history("d1") == [DebtHistoryPoint(timestamp=MONTH_MS, value=80.0)]
    assert trend["monthly_change"] is None
    assert trend["direction"] == "unknown"


def test_editing_unknown_point_raises(debt_repository):
    with pytest.raises(KeyError):
        debt_repository.update_debt_history_point("d1", 12345, value=1.0)
    with pytest.raises(KeyError):
        debt_repository.delete_debt_history_point("missing", 0)


def test_debt_trend_without_history(settings):
    trend = debt_trend(InMemoryRepository(), "missing", settings=settings)

    assert trend["direction"] == "unknown"


def test_load_repository_from_export(tmp_path):
    export = {
        "users": {
            "u1": {
                "recurringTransactions": [
                    {"name": "Rent", "amount": 1000, "type": "expense", "frequency": "monthly", "daysOfMonth": [1]}
                ],
                "oneTimeTransactions": [{"name": "TV", "amount": 600, "type": "expense", "date": 0}],
                "dailyMetrics": [{"date": 0, "netWorth": 100, "assets": 150, "debts": 50}],
                "simulation": {
                    "originalValue": 100,
                    "adjustedValue": 110,
                    "originalAssets": 150,
                    "adjustedAssets": 160,
                    "originalDebts": 50,
                    "adjustedDebts": 50,
                    "percentChange": 10,
                },
            }
        },
        "debtHistory": {"d1": [{"timestamp": 10, "value": 5}, {"timestamp": 0, "value": 6}]},
    }
    path = tmp_path / "export.json"
    path.write_text(json.dumps(export), encoding="utf-8")

    repository = load_repository(path)

    assert repository.list_recurring_transactions("u1")[0].name == "Rent"
    assert repository.list_one_time_transactions("u1")[0].amount == 600
    assert repository.list_daily_metrics("u1")[0].net_worth == 100
    assert repository.get_simulation("u1").adjusted_value == 110
    assert [point.timestamp for point in repository.list_debt_history("d1")] == [0, 10]


def test_load_repository_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_repository(tmp_path / "missing.json")


def test_settings_read_environment(monkeypatch):
    monkeypatch.setenv("FINANCE_FORECAST_MONTHS", "6")
    monkeypatch.setenv("FINANCE_OTHER_LABEL", "Misc")

    settings = get_settings()

    assert settings.forecast_months == 6
    assert settings.other_label == "Misc"
    assert get_settings() is settings
