"""Monthly cost breakdowns grouped by name or tag."""

from __future__ import annotations

from typing import Any, Iterable, Mapping, Sequence

import pandas as pd

from analytics.one_time import as_one_time, monthly_one_time_amount
from analytics.recurring import as_recurring, monthly_amount
from core.models import CostBreakdownItem, OneTimeTransaction, RecurringTransaction

__all__ = [
    "OTHER_LABEL",
    "LONG_TAIL_THRESHOLD",
    "get_monthly_cost_breakdown",
    "get_monthly_cost_breakdown_by_tags",
    "monthly_cost_breakdown",
    "bucket_long_tail",
]

OTHER_LABEL = "Other"
LONG_TAIL_THRESHOLD = 0.01

RecurringInput = Iterable[RecurringTransaction | Mapping[str, Any]]
OneTimeInput = Iterable[OneTimeTransaction | Mapping[str, Any]]


def get_monthly_cost_breakdown(
    recurring: RecurringInput,
    one_time: OneTimeInput,
) -> list[CostBreakdownItem]:
    """Sum monthly expense amounts by exact item name, in first-seen order."""

    expenses = _build_expense_frame(recurring, one_time)
    if expenses.empty:
        return []

    totals = expenses.groupby("name", sort=False)["amount"].sum()
    return _to_items(totals)


def get_monthly_cost_breakdown_by_tags(
    recurring: RecurringInput,
    one_time: OneTimeInput,
    priority_tags: Sequence[str],
) -> list[CostBreakdownItem]:
    """Group monthly expenses under the first matching priority tag.

    Items whose tags match none of ``priority_tags`` are listed under their
    own name. Each item contributes to exactly one label.
    """

    expenses = _build_expense_frame(recurring, one_time)
    if expenses.empty:
        return []

    expenses["label"] = [
        _resolve_priority_label(tags, name, priority_tags)
        for tags, name in zip(expenses["tags"], expenses["name"])
    ]
    totals = expenses.groupby("label", sort=False)["amount"].sum()
    return _to_items(totals)


def monthly_cost_breakdown(
    recurring: RecurringInput,
    one_time: OneTimeInput,
    *,
    threshold: float = LONG_TAIL_THRESHOLD,
    other_label: str = OTHER_LABEL,
) -> list[CostBreakdownItem]:
    """Return per-tag monthly expense totals with the long tail folded into ``other_label``.

    Every tag on an expense receives the full monthly amount, so an expense
    with several tags is counted under each of them. Untagged expenses are
    always reported under ``other_label``. The result is sorted by amount,
    largest first.
    """

    expenses = _build_expense_frame(recurring, one_time)
    if expenses.empty:
        return []

    expenses["label"] = expenses["tags"].map(lambda tags: list(tags) if tags else [other_label])
    per_tag = expenses.explode("label")
    totals = per_tag.groupby("label", sort=False)["amount"].sum()
    return bucket_long_tail(_to_items(totals), threshold=threshold, other_label=other_label)


def bucket_long_tail(
    items: Iterable[CostBreakdownItem],
    *,
    threshold: float = LONG_TAIL_THRESHOLD,
    other_label: str = OTHER_LABEL,
) -> list[CostBreakdownItem]:
    """Merge buckets below ``threshold`` of the grand total into ``other_label``.

    A zero grand total yields a zero cutoff, so nothing is merged.
    """

    rows = list(items)
    cutoff = sum(row["amount"] for row in rows) * threshold

    kept: list[CostBreakdownItem] = []
    other_amount = 0.0
    has_other = False
    for row in rows:
        if row["label"] == other_label or row["amount"] < cutoff:
            other_amount += row["amount"]
            has_other = True
        else:
            kept.append({"label": row["label"], "amount": row["amount"]})

    if has_other:
        kept.append({"label": other_label, "amount": other_amount})

    kept.sort(key=lambda row: row["amount"], reverse=True)
    return kept


def _build_expense_frame(recurring: RecurringInput, one_time: OneTimeInput) -> pd.DataFrame:
    """Return visible expenses with their monthly-equivalent amounts."""

    records: list[dict[str, object]] = []
    for item in recurring:
        transaction = as_recurring(item)
        if transaction.hidden or transaction.type != "expense":
            continue
        records.append(
            {"name": transaction.name, "tags": transaction.tags, "amount": monthly_amount(transaction)}
        )

    for item in one_time:
        transaction = as_one_time(item)
        if transaction.hidden or transaction.type != "expense":
            continue
        records.append(
            {
                "name": transaction.name,
                "tags": transaction.tags,
                "amount": monthly_one_time_amount(transaction.amount),
            }
        )

    return pd.DataFrame(records, columns=["name", "tags", "amount"])


def _resolve_priority_label(tags: Sequence[str], name: str, priority_tags: Sequence[str]) -> str:
    return next((tag for tag in priority_tags if tag in tags), name)


def _to_items(totals: pd.Series) -> list[CostBreakdownItem]:
    return [{"label": str(label), "amount": float(amount)} for label, amount in totals.items()]
