"""Transaction repository protocol."""

from __future__ import annotations

from datetime import datetime
from typing import Optional, Protocol

from ...models.transaction import Transaction


class TransactionRepository(Protocol):
    """Transactions are append-only: no update or delete."""

    def get_by_id(self, transaction_id: int) -> Optional[Transaction]:
        ...

    def list_for_family(
        self,
        *,
        family_id: int,
        start: Optional[datetime] = None,
        end: Optional[datetime] = None,
        category: Optional[str] = None,
        txn_type: Optional[str] = None,
    ) -> list[Transaction]:
        """List family transactions, newest first, with optional filters."""
        ...

    def create(self, transaction: Transaction) -> Transaction:
        ...
