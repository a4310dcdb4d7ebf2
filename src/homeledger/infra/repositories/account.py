"""SQLModel implementation of BankAccount repository."""

from __future__ import annotations

from typing import Optional

from sqlmodel import select

from ...models.account import BankAccount
from ...models.bill import Bill
from ..database import SessionFactory


class SQLModelBankAccountRepository:
    """SQLModel-based bank account repository implementation."""

    def __init__(self, session_factory: SessionFactory):
        """Initialize with a session factory."""
        self.session_factory = session_factory

    def get_by_id(self, account_id: int) -> Optional[BankAccount]:
        """Retrieve an account by ID."""
        with self.session_factory() as session:
            return session.get(BankAccount, account_id)

    def list_for_user(self, *, user_id: int, include_inactive: bool = False) -> list[BankAccount]:
        """List a user's accounts by bank name."""
        with self.session_factory() as session:
            statement = select(BankAccount).where(BankAccount.user_id == user_id)
            if not include_inactive:
                statement = statement.where(BankAccount.is_active == True)  # noqa: E712
            statement = statement.order_by(BankAccount.bank_name, BankAccount.id)  # type: ignore
            return list(session.exec(statement).all())

    def create(self, account: BankAccount) -> BankAccount:
        """Create a new account."""
        with self.session_factory() as session:
            session.add(account)
            session.flush()
            session.refresh(account)
            return account

    def save(self, account: BankAccount) -> BankAccount:
        """Persist changes to an existing account."""
        with self.session_factory() as session:
            session.add(account)
            session.flush()
            session.refresh(account)
            return account

    def delete(self, account_id: int) -> None:
        """Delete an account, detaching any bills that autopay from it."""
        with self.session_factory() as session:
            account = session.get(BankAccount, account_id)
            if account is None:
                return
            bills = session.exec(select(Bill).where(Bill.autopay_account_id == account_id)).all()
            for bill in bills:
                bill.autopay_account_id = None
                bill.autopay_enabled = False
                session.add(bill)
            session.flush()
            session.delete(account)
