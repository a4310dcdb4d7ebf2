"""Budget form definitions."""

from __future__ import annotations

from typing import Annotated

from pydantic import Field, field_validator

from ..forms import PayloadForm


class CategoryForm(PayloadForm):
    name: Annotated[str, Field(min_length=1, max_length=64)]
    limit: float = Field(ge=0)


class BudgetUpdateForm(PayloadForm):
    """Total and category limits; the month of a budget is fixed."""

    total_budget: float = Field(default=None, ge=0)
    categories: list[CategoryForm] = None

    @field_validator("categories")
    @classmethod
    def unique_names(cls, categories: list[CategoryForm]) -> list[CategoryForm]:
        seen: set[str] = set()
        for category in categories:
            if category.name in seen:
                raise ValueError(f"Duplicate category: {category.name}.")
            seen.add(category.name)
        return categories


class BudgetForm(BudgetUpdateForm):
    """Form model for a family's budget of one month."""

    year: int = Field(ge=1900, le=9999)
    month: int = Field(ge=1, le=12)
    total_budget: float = Field(ge=0)
    categories: list[CategoryForm] = Field(default_factory=list)


__all__ = ["BudgetForm", "BudgetUpdateForm", "CategoryForm"]
