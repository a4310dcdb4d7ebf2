"""SQLModel implementation of Bill repository."""

from __future__ import annotations

from typing import Iterable, Optional, Sequence

from sqlalchemy.orm import selectinload
from sqlmodel import Session, select

from ...models.bill import Bill, BillReminder
from ..database import SessionFactory


def _with_children(statement):
    return statement.options(selectinload(Bill.history), selectinload(Bill.reminders))


class SQLModelBillRepository:
    """SQLModel-based bill repository implementation."""

    def __init__(self, session_factory: SessionFactory):
        """Initialize with a session factory."""
        self.session_factory = session_factory

    def _reload(self, session: Session, bill_id: int) -> Bill:
        statement = (
            _with_children(select(Bill))
            .where(Bill.id == bill_id)
            .execution_options(populate_existing=True)
        )
        return session.exec(statement).one()

    def get_by_id(self, bill_id: int) -> Optional[Bill]:
        """Retrieve a bill by ID regardless of owner."""
        with self.session_factory() as session:
            return session.exec(_with_children(select(Bill)).where(Bill.id == bill_id)).first()

    def list_for_user(self, *, user_id: int) -> list[Bill]:
        """List a user's bills ordered by due date."""
        with self.session_factory() as session:
            statement = (
                _with_children(select(Bill))
                .where(Bill.user_id == user_id)
                .order_by(Bill.due_date, Bill.id)  # type: ignore
            )
            return list(session.exec(statement).all())

    def list_by_status(self, status: str) -> list[Bill]:
        """List every bill in ``status`` across users."""
        with self.session_factory() as session:
            statement = (
                _with_children(select(Bill))
                .where(Bill.status == status)
                .order_by(Bill.due_date, Bill.id)  # type: ignore
            )
            return list(session.exec(statement).all())

    def create(self, bill: Bill) -> Bill:
        """Persist a new bill with its reminders."""
        with self.session_factory() as session:
            session.add(bill)
            session.flush()
            return self._reload(session, bill.id)

    def save(
        self,
        bill: Bill,
        *,
        successor: Optional[Bill] = None,
        reminders: Optional[Sequence[BillReminder]] = None,
    ) -> tuple[Bill, Optional[Bill]]:
        """Persist ``bill`` and ``successor`` together.

        Both rows are written in the same session; if either write fails the
        whole unit of work is rolled back. ``reminders``, when given, replace
        the bill's current reminders.
        """
        with self.session_factory() as session:
            session.add(bill)
            if reminders is not None:
                bill.reminders.clear()
                session.flush()
                bill.reminders.extend(reminders)
            if successor is not None:
                session.add(successor)
            session.flush()
            saved = self._reload(session, bill.id)
            saved_successor = self._reload(session, successor.id) if successor is not None else None
            return saved, saved_successor

    def save_all(self, bills: Iterable[Bill]) -> None:
        """Persist several bills in one unit of work."""
        with self.session_factory() as session:
            for bill in bills:
                session.add(bill)

    def delete(self, bill_id: int) -> None:
        """Delete a bill by ID."""
        with self.session_factory() as session:
            bill = session.get(Bill, bill_id)
            if bill:
                session.delete(bill)
