"""Budgeting tables."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import ClassVar, Optional

from sqlalchemy import UniqueConstraint
from sqlalchemy.orm import relationship
from sqlmodel import Field, Relationship, SQLModel


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Budget(SQLModel, table=True):
    """Monthly family budget; at most one per (family, year, month)."""

    __tablename__: ClassVar[str] = "budget"
    __table_args__ = (
        UniqueConstraint("family_id", "year", "month", name="uq_budget_family_month"),
    )

    id: Optional[int] = Field(default=None, primary_key=True)
    family_id: int = Field(foreign_key="family.id", nullable=False, index=True)
    year: int = Field(nullable=False, index=True)
    month: int = Field(nullable=False, ge=1, le=12)
    total_budget: float = Field(nullable=False)
    created_at: datetime = Field(default_factory=_utcnow, nullable=False)
    updated_at: datetime = Field(default_factory=_utcnow, nullable=False)

    categories: list["BudgetCategory"] = Relationship(
        sa_relationship=relationship(
            "BudgetCategory",
            back_populates="budget",
            cascade="all, delete-orphan",
            order_by="BudgetCategory.position",
        ),
    )


class BudgetCategory(SQLModel, table=True):
    """Spending limit for one category within a budget.

    Actual spend is derived from transactions at read time and never stored.
    """

    __tablename__: ClassVar[str] = "budget_category"

    id: Optional[int] = Field(default=None, primary_key=True)
    budget_id: Optional[int] = Field(default=None, foreign_key="budget.id", index=True)
    name: str = Field(nullable=False, max_length=64)
    limit: float = Field(nullable=False)
    position: int = Field(default=0, nullable=False)

    budget: Optional["Budget"] = Relationship(
        sa_relationship=relationship("Budget", back_populates="categories"),
    )
