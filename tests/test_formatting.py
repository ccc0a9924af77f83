"""Formatting helper tests."""

from __future__ import annotations

import pytest

from core.formatting import (
    build_insights,
    format_change_rate,
    format_compact_currency,
    format_compact_number,
    format_currency,
    format_number,
)


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        (0.005, "5.00e-3"),
        (1234, "1.23K"),
        (2500000, "2.50M"),
        (3_200_000_000, "3.20B"),
        (42, "42"),
        (1.5, "1.5"),
        (0, "0"),
    ],
)
def test_format_number(value, expected):
    assert format_number(value) == expected


def test_format_compact_currency():
    assert format_compact_currency(1250000) == "$1.25M"
    assert format_compact_currency(999_999) == "$1M"
    assert format_compact_currency(950) == "$950"
    assert format_compact_currency(-2500, "EUR") == "-€2.5K"


def test_format_compact_number():
    assert format_compact_number(440000) == "440k"
    assert format_compact_number(1250000) == "1.3m"


def test_format_currency():
    assert format_currency(1234.5) == "$1,234.50"
    assert format_currency(-1234.5) == "-$1,234.50"
    assert format_currency(10, "CHF") == "CHF 10.00"


def test_format_change_rate():
    assert format_change_rate(None, "week") == "n/a"
    assert format_change_rate(-20, "week") == "-$20.00/week"
    assert format_change_rate(5, "month") == "+$5.00/month"


def test_build_insights_mentions_projection_and_top_cost():
    insights = build_insights(
        current_net_worth=10000.0,
        projected_net_worth=16000.0,
        months=12,
        monthly_cash_flow=500.0,
        top_cost={"label": "Rent", "amount": 1500.0},
    )

    assert insights[0] == "Net worth is projected to reach $16K in 12 months (+$6K)."
    assert insights[1] == "Monthly cash flow surplus: $500.00."
    assert insights[2] == "Largest monthly cost: Rent at $1,500.00."
