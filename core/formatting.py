"""Number and currency formatting helpers for forecast summaries."""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal
from typing import Optional, Sequence

from core.models import CostBreakdownItem

__all__ = [
    "format_number",
    "format_currency",
    "format_compact_currency",
    "format_compact_number",
    "format_change_rate",
    "build_insights",
]

_CURRENCY_SYMBOLS = {"USD": "$", "EUR": "€", "GBP": "£", "JPY": "¥"}
_COMPACT_UNITS: Sequence[tuple[float, str]] = ((1e12, "T"), (1e9, "B"), (1e6, "M"), (1e3, "K"))


def format_number(num: float) -> str:
    """Return a readable label: scientific for tiny values, K/M/B for large ones."""

    magnitude = abs(num)
    if 0 < magnitude < 0.01:
        mantissa, exponent = f"{num:.2e}".split("e")
        return f"{mantissa}e{int(exponent)}"

    if magnitude >= 1e9:
        return f"{num / 1e9:.2f}B"
    if magnitude >= 1e6:
        return f"{num / 1e6:.2f}M"
    if magnitude >= 1e3:
        return f"{num / 1e3:.2f}K"

    if magnitude < 1 and len(repr(float(num))) > 8:
        return f"{num:.6f}"

    return _trim(f"{num:,.3f}")


def format_currency(amount: float, currency: str = "USD") -> str:
    prefix = _currency_prefix(currency)
    sign = "-" if amount < 0 else ""
    return f"{sign}{prefix}{abs(amount):,.2f}"


def format_compact_currency(amount: float, currency: str = "USD") -> str:
    """Format ``amount`` compactly, e.g. ``$1.25M`` for 1,250,000."""

    sign = "-" if amount < 0 else ""
    return f"{sign}{_currency_prefix(currency)}{_compact(abs(amount), 2)}"


def format_compact_number(amount: float) -> str:
    """Format ``amount`` compactly with a lowercase suffix, e.g. ``440k``."""

    sign = "-" if amount < 0 else ""
    return f"{sign}{_compact(abs(amount), 1).lower()}"


def format_change_rate(value: Optional[float], period: str, currency: str = "USD") -> str:
    if value is None:
        return "n/a"
    sign = "+" if value >= 0 else "-"
    return f"{sign}{format_currency(abs(value), currency)}/{period}"


def build_insights(
    *,
    current_net_worth: float,
    projected_net_worth: Optional[float],
    months: int,
    monthly_cash_flow: float,
    top_cost: Optional[CostBreakdownItem],
    currency: str = "USD",
) -> list[str]:
    insights: list[str] = []

    if projected_net_worth is not None:
        change = projected_net_worth - current_net_worth
        sign = "+" if change >= 0 else "-"
        insights.append(
            (
                f"Net worth is projected to reach {format_compact_currency(projected_net_worth, currency)} "
                f"in {months} months ({sign}{format_compact_currency(abs(change), currency)})."
            )
        )

    direction = "surplus" if monthly_cash_flow >= 0 else "shortfall"
    insights.append(f"Monthly cash flow {direction}: {format_currency(abs(monthly_cash_flow), currency)}.")

    if top_cost is not None:
        insights.append(
            f"Largest monthly cost: {top_cost['label']} at {format_currency(top_cost['amount'], currency)}."
        )

    return insights


def _currency_prefix(currency: str) -> str:
    return _CURRENCY_SYMBOLS.get(currency.upper(), f"{currency.upper()} ")


def _compact(value: float, decimals: int) -> str:
    """Scale a non-negative value to the largest unit it reaches after rounding."""

    for index, (threshold, suffix) in enumerate(_COMPACT_UNITS):
        if value < threshold:
            continue
        scaled = _round_half_up(value / threshold, decimals)
        if scaled >= 1000 and index > 0:
            bigger_threshold, bigger_suffix = _COMPACT_UNITS[index - 1]
            return f"{_trim(str(_round_half_up(value / bigger_threshold, decimals)))}{bigger_suffix}"
        return f"{_trim(str(scaled))}{suffix}"

    scaled = _round_half_up(value, decimals)
    if scaled >= 1000:
        return f"{_trim(str(_round_half_up(value / 1e3, decimals)))}K"
    return _trim(str(scaled))


def _round_half_up(value: float, decimals: int) -> Decimal:
    quantum = Decimal(1).scaleb(-decimals)
    return Decimal(repr(value)).quantize(quantum, rounding=ROUND_HALF_UP)


def _trim(text: str) -> str:
    if "." not in text:
        return text
    return text.rstrip("0").rstrip(".")
