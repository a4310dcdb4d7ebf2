"""Bill repository protocol."""

from __future__ import annotations

from typing import Optional, Protocol, Sequence

from ...models.bill import Bill, BillReminder


class BillRepository(Protocol):
    """Repository for bills with their history and reminders loaded."""

    def get_by_id(self, bill_id: int) -> Optional[Bill]:
        """Retrieve a bill by ID regardless of owner."""
        ...

    def list_for_user(self, *, user_id: int) -> list[Bill]:
        """List a user's bills ordered by due date."""
        ...

    def list_by_status(self, status: str) -> list[Bill]:
        """List every bill in ``status`` across users."""
        ...

    def create(self, bill: Bill) -> Bill:
        """Persist a new bill."""
        ...

    def save(
        self,
        bill: Bill,
        *,
        successor: Optional[Bill] = None,
        reminders: Optional[Sequence[BillReminder]] = None,
    ) -> tuple[Bill, Optional[Bill]]:
        """Persist ``bill`` and an optional successor in one unit of work."""
        ...

    def save_all(self, bills: list[Bill]) -> None:
        """Persist several bills in one unit of work."""
        ...

    def delete(self, bill_id: int) -> None:
        """Delete a bill by ID."""
        ...
