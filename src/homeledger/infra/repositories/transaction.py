"""SQLModel implementation of Transaction repository."""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from sqlmodel import select

from ...models.transaction import Transaction
from ..database import SessionFactory


class SQLModelTransactionRepository:
    """SQLModel-based transaction repository; append-only."""

    def __init__(self, session_factory: SessionFactory):
        """Initialize with a session factory."""
        self.session_factory = session_factory

    def get_by_id(self, transaction_id: int) -> Optional[Transaction]:
        """Retrieve a transaction by ID."""
        with self.session_factory() as session:
            return session.get(Transaction, transaction_id)

    def list_for_family(
        self,
        *,
        family_id: int,
        start: Optional[datetime] = None,
        end: Optional[datetime] = None,
        category: Optional[str] = None,
        txn_type: Optional[str] = None,
    ) -> list[Transaction]:
        """List family transactions, newest first; ``start``/``end`` inclusive."""
        with self.session_factory() as session:
            statement = select(Transaction).where(Transaction.family_id == family_id)

            if start is not None:
                statement = statement.where(Transaction.date >= start)
            if end is not None:
                statement = statement.where(Transaction.date <= end)
            if category:
                statement = statement.where(Transaction.category == category)
            if txn_type:
                statement = statement.where(Transaction.type == txn_type)

            statement = statement.order_by(Transaction.date.desc(), Transaction.id.desc())  # type: ignore
            return list(session.exec(statement).all())

    def create(self, transaction: Transaction) -> Transaction:
        """Create a new transaction."""
        with self.session_factory() as session:
            session.add(transaction)
            session.flush()
            session.refresh(transaction)
            return transaction
