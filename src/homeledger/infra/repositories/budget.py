"""SQLModel implementation of Budget repository."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Optional, Sequence

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import selectinload
from sqlmodel import Session, select

from ...errors import Conflict, NotFound
from ...models.budget import Budget, BudgetCategory
from ..database import SessionFactory


class SQLModelBudgetRepository:
    """SQLModel-based budget repository implementation."""

    def __init__(self, session_factory: SessionFactory):
        """Initialize with a session factory."""
        self.session_factory = session_factory

    def _reload(self, session: Session, budget_id: int) -> Budget:
        statement = (
            select(Budget)
            .options(selectinload(Budget.categories))
            .where(Budget.id == budget_id)
            .execution_options(populate_existing=True)
        )
        return session.exec(statement).one()

    def get_by_id(self, budget_id: int) -> Optional[Budget]:
        """Retrieve a budget by ID."""
        with self.session_factory() as session:
            statement = (
                select(Budget)
                .options(selectinload(Budget.categories))
                .where(Budget.id == budget_id)
            )
            return session.exec(statement).first()

    def get_for_month(self, year: int, month: int, *, family_id: int) -> Optional[Budget]:
        """Get the family's budget for a specific month."""
        with self.session_factory() as session:
            statement = (
                select(Budget)
                .options(selectinload(Budget.categories))
                .where(Budget.family_id == family_id)
                .where(Budget.year == year)
                .where(Budget.month == month)
            )
            return session.exec(statement).first()

    def list_for_family(self, *, family_id: int) -> list[Budget]:
        """List all budgets, newest month first."""
        with self.session_factory() as session:
            statement = (
                select(Budget)
                .options(selectinload(Budget.categories))
                .where(Budget.family_id == family_id)
                .order_by(Budget.year.desc(), Budget.month.desc())  # type: ignore
            )
            return list(session.exec(statement).all())

    def create(self, budget: Budget) -> Budget:
        """Create a new budget.

        The unique (family, year, month) constraint backs up the caller's
        existence check when two requests race.
        """
        try:
            with self.session_factory() as session:
                session.add(budget)
                session.flush()
                return self._reload(session, budget.id)
        except IntegrityError as exc:
            raise Conflict("Budget already exists for this month") from exc

    def update(
        self,
        budget_id: int,
        *,
        total_budget: Optional[float] = None,
        categories: Optional[Sequence[BudgetCategory]] = None,
    ) -> Budget:
        """Replace the total and/or the category list of a budget."""
        with self.session_factory() as session:
            budget = session.exec(
                select(Budget).options(selectinload(Budget.categories)).where(Budget.id == budget_id)
            ).first()
            if budget is None:
                raise NotFound("Budget not found")
            if total_budget is not None:
                budget.total_budget = total_budget
            if categories is not None:
                budget.categories.clear()
                session.flush()
                for position, category in enumerate(categories):
                    category.position = position
                    budget.categories.append(category)
            budget.updated_at = datetime.now(timezone.utc)
            session.add(budget)
            session.flush()
            return self._reload(session, budget.id)

    def delete(self, budget_id: int) -> None:
        """Delete a budget by ID."""
        with self.session_factory() as session:
            budget = session.get(Budget, budget_id)
            if budget:
                session.delete(budget)
