"""Budgeting domain services."""

from __future__ import annotations

from calendar import monthrange
from dataclasses import dataclass, field
from datetime import date, datetime, time
from typing import Iterable

from ..models.budget import Budget
from ..models.transaction import Transaction


@dataclass(slots=True)
class CategorySpend:
    """Budget category with its derived actual spend."""

    name: str
    limit: float
    spent: float

    @property
    def remaining(self) -> float:
        return self.limit - self.spent


@dataclass(slots=True)
class BudgetSummary:
    """Budget-vs-actual view for one month."""

    budget: Budget
    categories: list[CategorySpend] = field(default_factory=list)
    total_spent: float = 0.0
    spending_by_category: dict[str, float] = field(default_factory=dict)


def month_bounds(year: int, month: int) -> tuple[date, date]:
    """Return the first and last day of the month, both inclusive."""

    last_day = monthrange(year, month)[1]
    return date(year, month, 1), date(year, month, last_day)


def month_window(year: int, month: int) -> tuple[datetime, datetime]:
    """Datetime range covering every instant of the month."""

    start, end = month_bounds(year, month)
    return datetime.combine(start, time.min), datetime.combine(end, time.max)


def spending_by_category(transactions: Iterable[Transaction]) -> dict[str, float]:
    """Sum signed transaction amounts per category label.

    Income and expense entries both contribute with the sign they were
    stored with.
    """

    totals: dict[str, float] = {}
    for txn in transactions:
        totals[txn.category] = totals.get(txn.category, 0.0) + float(txn.amount)
    return totals


def summarize(budget: Budget, transactions: Iterable[Transaction]) -> BudgetSummary:
    """Compose budget vs actual spend for the budget's month.

    Categories keep the budget's order; transaction categories the budget
    does not list are left out of the per-category view but still count
    towards ``total_spent``.
    """

    totals = spending_by_category(transactions)
    categories = [
        CategorySpend(name=cat.name, limit=cat.limit, spent=totals.get(cat.name, 0.0))
        for cat in budget.categories
    ]
    return BudgetSummary(
        budget=budget,
        categories=categories,
        total_spent=sum(totals.values()),
        spending_by_category=totals,
    )


__all__ = [
    "BudgetSummary",
    "CategorySpend",
    "month_bounds",
    "month_window",
    "spending_by_category",
    "summarize",
]
