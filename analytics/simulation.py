"""What-if portfolio revaluation under adjusted quote prices."""

from __future__ import annotations

from typing import Iterable, Mapping

from core.models import Holding, InterestEstimate, ManualValue, SimulationSummary

__all__ = ["DEFAULT_SUPPLY_RATE", "summarize_simulation", "estimate_interest"]

# Annual supply rate, in percent, used when no live rate is available.
DEFAULT_SUPPLY_RATE = 4.0


def summarize_simulation(
    holdings: Iterable[Holding],
    quotes: Mapping[str, float],
    adjusted_quotes: Mapping[str, float],
    manual_assets: Iterable[ManualValue] = (),
    manual_debts: Iterable[ManualValue] = (),
) -> SimulationSummary:
    """Revalue a portfolio with ``adjusted_quotes`` in place of ``quotes``.

    Holdings without a quote are valued at their quantity and never
    adjusted, as are manually entered assets and debts.
    """

    original_assets = adjusted_assets = 0.0
    original_debts = adjusted_debts = 0.0

    for holding in holdings:
        original, adjusted = _value_holding(holding, quotes, adjusted_quotes)
        if holding.is_debt:
            original_debts += original
            adjusted_debts += adjusted
        else:
            original_assets += original
            adjusted_assets += adjusted

    for asset in manual_assets:
        original_assets += asset.value
        adjusted_assets += asset.value

    for debt in manual_debts:
        original_debts += debt.value
        adjusted_debts += debt.value

    original_value = original_assets - original_debts
    adjusted_value = adjusted_assets - adjusted_debts
    percent_change = (adjusted_value - original_value) / original_value * 100 if original_value else 0.0

    return SimulationSummary(
        original_value=original_value,
        adjusted_value=adjusted_value,
        original_assets=original_assets,
        adjusted_assets=adjusted_assets,
        original_debts=original_debts,
        adjusted_debts=adjusted_debts,
        percent_change=percent_change,
    )


def _value_holding(
    holding: Holding,
    quotes: Mapping[str, float],
    adjusted_quotes: Mapping[str, float],
) -> tuple[float, float]:
    symbol = holding.price_symbol
    original_price = quotes.get(symbol) if symbol else None
    if not original_price:
        return holding.quantity, holding.quantity

    adjusted_price = adjusted_quotes.get(symbol, original_price)
    return holding.quantity * original_price, holding.quantity * adjusted_price


def estimate_interest(assets: float, rate: float | None = None) -> InterestEstimate:
    """Estimate the yield ``assets`` would earn at an annual ``rate`` percent.

    ``rate`` falls back to :data:`DEFAULT_SUPPLY_RATE` when it is ``None``.
    """

    applied = DEFAULT_SUPPLY_RATE if rate is None else float(rate)
    yearly = assets * applied / 100
    return {"rate": applied, "monthly": yearly / 12, "yearly": yearly}
