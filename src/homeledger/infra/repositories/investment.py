"""SQLModel implementation of Investment repository."""

from __future__ import annotations

from typing import Iterable, Optional

from sqlalchemy.orm import selectinload
from sqlmodel import Session, select

from ...models.investment import Investment
from ..database import SessionFactory


class SQLModelInvestmentRepository:
    """SQLModel-based investment repository implementation."""

    def __init__(self, session_factory: SessionFactory):
        """Initialize with a session factory."""
        self.session_factory = session_factory

    def _reload(self, session: Session, investment_id: int) -> Investment:
        statement = (
            select(Investment)
            .options(selectinload(Investment.history))
            .where(Investment.id == investment_id)
            .execution_options(populate_existing=True)
        )
        return session.exec(statement).one()

    def get_by_id(self, investment_id: int) -> Optional[Investment]:
        """Retrieve an investment by ID."""
        with self.session_factory() as session:
            return session.exec(
                select(Investment)
                .options(selectinload(Investment.history))
                .where(Investment.id == investment_id)
            ).first()

    def list_for_user(self, *, user_id: int) -> list[Investment]:
        """List a user's positions, most recent purchase first."""
        with self.session_factory() as session:
            statement = (
                select(Investment)
                .options(selectinload(Investment.history))
                .where(Investment.user_id == user_id)
                .order_by(Investment.purchase_date.desc(), Investment.id)  # type: ignore
            )
            return list(session.exec(statement).all())

    def create(self, investment: Investment) -> Investment:
        """Create a new position with its opening history."""
        with self.session_factory() as session:
            session.add(investment)
            session.flush()
            return self._reload(session, investment.id)

    def save(self, investment: Investment) -> Investment:
        """Persist changes to an existing position."""
        with self.session_factory() as session:
            session.add(investment)
            session.flush()
            return self._reload(session, investment.id)

    def save_all(self, investments: Iterable[Investment]) -> None:
        """Persist several positions in one unit of work."""
        with self.session_factory() as session:
            for investment in investments:
                session.add(investment)

    def delete(self, investment_id: int) -> None:
        """Delete a position and its history."""
        with self.session_factory() as session:
            investment = session.get(Investment, investment_id)
            if investment:
                session.delete(investment)
