"""Budget repository protocol."""

from __future__ import annotations

from typing import Optional, Protocol, Sequence

from ...models.budget import Budget, BudgetCategory


class BudgetRepository(Protocol):
    """Repository for managing budget entities."""

    def get_by_id(self, budget_id: int) -> Optional[Budget]:
        """Retrieve a budget by ID regardless of family."""
        ...

    def get_for_month(self, year: int, month: int, *, family_id: int) -> Optional[Budget]:
        """Get the family's budget for a specific month."""
        ...

    def list_for_family(self, *, family_id: int) -> list[Budget]:
        """List all budgets of a family, newest month first."""
        ...

    def create(self, budget: Budget) -> Budget:
        """Create a new budget; raises ``Conflict`` on a duplicate month."""
        ...

    def update(
        self,
        budget_id: int,
        *,
        total_budget: Optional[float] = None,
        categories: Optional[Sequence[BudgetCategory]] = None,
    ) -> Budget:
        """Replace the total and/or the category list of a budget."""
        ...

    def delete(self, budget_id: int) -> None:
        """Delete a budget by ID."""
        ...
