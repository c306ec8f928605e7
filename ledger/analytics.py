"""Aggregation and chart rendering for the analytics view."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from decimal import ROUND_HALF_UP, Decimal
from io import BytesIO

import matplotlib
matplotlib.use("Agg")
import matplotlib.pyplot as plt

from shared.models import Transaction, TransactionCategory, TransactionType


_ZERO = Decimal("0")


@dataclass(slots=True)
class CategoryTurnover:
    """Turnover of one category within a transaction type."""

    category: TransactionCategory
    amount: Decimal
    percent: Decimal


@dataclass(slots=True)
class AnalyticsSummary:
    total_count: int
    income_count: int
    expense_count: int
    income_count_percent: Decimal
    expense_count_percent: Decimal
    total_turnover: Decimal
    income_turnover: Decimal
    expense_turnover: Decimal
    income_turnover_percent: Decimal
    expense_turnover_percent: Decimal
    categories: dict[TransactionType, list[CategoryTurnover]] = field(default_factory=dict)


def _percent(part: Decimal | int, whole: Decimal | int) -> Decimal:
    if not whole:
        return _ZERO
    return (Decimal(part) * 100 / Decimal(whole)).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)


def summarize(transactions: Sequence[Transaction]) -> AnalyticsSummary:
    """Aggregate the displayed list into counts, turnover and category shares."""

    income = [item for item in transactions if item.type == TransactionType.INCOME]
    expense = [item for item in transactions if item.type == TransactionType.EXPENSE]
    income_turnover = sum((item.amount for item in income), _ZERO)
    expense_turnover = sum((item.amount for item in expense), _ZERO)
    total_turnover = income_turnover + expense_turnover

    categories: dict[TransactionType, list[CategoryTurnover]] = {}
    for transaction_type, rows, type_turnover in (
        (TransactionType.INCOME, income, income_turnover),
        (TransactionType.EXPENSE, expense, expense_turnover),
    ):
        per_category: dict[TransactionCategory, Decimal] = {}
        for row in rows:
            per_category[row.category] = per_category.get(row.category, _ZERO) + row.amount
        categories[transaction_type] = sorted(
            (
                CategoryTurnover(
                    category=category,
                    amount=amount,
                    percent=_percent(amount, type_turnover),
                )
                for category, amount in per_category.items()
            ),
            key=lambda row: row.amount,
            reverse=True,
        )

    return AnalyticsSummary(
        total_count=len(transactions),
        income_count=len(income),
        expense_count=len(expense),
        income_count_percent=_percent(len(income), len(transactions)),
        expense_count_percent=_percent(len(expense), len(transactions)),
        total_turnover=total_turnover,
        income_turnover=income_turnover,
        expense_turnover=expense_turnover,
        income_turnover_percent=_percent(income_turnover, total_turnover),
        expense_turnover_percent=_percent(expense_turnover, total_turnover),
        categories=categories,
    )


def render_category_chart(summary: AnalyticsSummary, transaction_type: TransactionType) -> bytes:
    """Render the category split of one transaction type as a PNG pie chart."""

    rows = [row for row in summary.categories.get(transaction_type, []) if row.amount > 0]

    fig, ax = plt.subplots(figsize=(5.0, 3.6), dpi=120)
    if rows:
        ax.pie(
            [float(row.amount) for row in rows],
            labels=[row.category.value for row in rows],
            autopct=lambda pct: f"{pct:.1f}%" if pct >= 3 else "",
            startangle=90,
        )
        ax.axis("equal")
    else:
        ax.text(0.5, 0.5, "No data", ha="center", va="center")
        ax.axis("off")
    ax.set_title(f"{transaction_type.value.capitalize()} by category")

    buffer = BytesIO()
    fig.savefig(buffer, format="png", bbox_inches="tight")
    plt.close(fig)
    return buffer.getvalue()
