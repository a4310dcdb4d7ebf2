"""Pytest configuration and shared fixtures for HomeLedger tests.

Provides an isolated SQLite database per test, model factories for the engine
tests, and a Flask app plus authenticated client helpers for the API tests.
"""

from __future__ import annotations

import tempfile
from datetime import date, datetime
from pathlib import Path

import pytest
from sqlmodel import SQLModel, create_engine

from homeledger import create_app
from homeledger.infra.database import create_session_factory
from homeledger.models import (
    Bill,
    BillReminder,
    Budget,
    BudgetCategory,
    Family,
    Investment,
    Transaction,
    User,
)

# =============================================================================
# Database Fixtures
# =============================================================================


@pytest.fixture(scope="function")
def db_engine():
    """Create an isolated SQLite database for each test.

    Yields:
        Engine: SQLModel engine connected to a temporary database file
    """
    with tempfile.NamedTemporaryFile(suffix=".db", delete=False) as f:
        db_path = Path(f.name)

    engine = create_engine(f"sqlite:///{db_path}", echo=False)
    SQLModel.metadata.create_all(engine)

    yield engine

    engine.dispose()
    db_path.unlink(missing_ok=True)


@pytest.fixture(scope="function")
def session_factory(db_engine):
    """Unit-of-work session factory bound to the test database."""

    return create_session_factory(db_engine)


@pytest.fixture
def family(session_factory) -> Family:
    with session_factory() as session:
        row = Family(name="Test family")
        session.add(row)
        session.flush()
        session.refresh(row)
        return row


@pytest.fixture
def user(session_factory, family) -> User:
    """A persisted user inside ``family``."""

    with session_factory() as session:
        row = User(
            username="tester",
            email="tester@example.com",
            password_hash="dummy-hash",
            family_id=family.id,
        )
        session.add(row)
        session.flush()
        session.refresh(row)
        return row


# =============================================================================
# Test Data Factories
# =============================================================================


@pytest.fixture
def bill_factory():
    """Build unsaved bills with sensible defaults."""

    def _create_bill(
        *,
        name: str = "Rent",
        amount: float = 1200.0,
        due_date: date = date(2024, 1, 31),
        is_recurring: bool = True,
        frequency: str | None = "monthly",
        status: str = "pending",
        reminders: list[BillReminder] | None = None,
        user_id: int = 1,
        family_id: int = 1,
        **extra,
    ) -> Bill:
        bill = Bill(
            user_id=user_id,
            family_id=family_id,
            name=name,
            amount=amount,
            due_date=due_date,
            category="housing",
            is_recurring=is_recurring,
            frequency=frequency if is_recurring else None,
            status=status,
            **extra,
        )
        bill.reminders = list(reminders or [])
        return bill

    return _create_bill


@pytest.fixture
def investment_factory():
    """Build unsaved investments with sensible defaults."""

    def _create_investment(
        *,
        symbol: str = "AAPL",
        quantity: float = 10,
        purchase_price: float = 100,
        current_price: float = 120,
        type: str = "stocks",
        user_id: int = 1,
        family_id: int = 1,
    ) -> Investment:
        return Investment(
            user_id=user_id,
            family_id=family_id,
            type=type,
            symbol=symbol,
            name=f"{symbol} position",
            quantity=quantity,
            purchase_price=purchase_price,
            current_price=current_price,
        )

    return _create_investment


@pytest.fixture
def transaction_factory():
    """Build unsaved transactions with sensible defaults."""

    def _create_transaction(
        amount: float,
        category: str,
        *,
        when: datetime = datetime(2024, 3, 10, 12, 0),
        type: str = "expense",
        user_id: int = 1,
        family_id: int = 1,
    ) -> Transaction:
        return Transaction(
            user_id=user_id,
            family_id=family_id,
            amount=amount,
            type=type,
            category=category,
            date=when,
        )

    return _create_transaction


@pytest.fixture
def budget_factory():
    def _create_budget(
        categories: list[tuple[str, float]],
        *,
        year: int = 2024,
        month: int = 3,
        total_budget: float = 1000.0,
        family_id: int = 1,
    ) -> Budget:
        budget = Budget(family_id=family_id, year=year, month=month, total_budget=total_budget)
        budget.categories = [
            BudgetCategory(name=name, limit=limit, position=index)
            for index, (name, limit) in enumerate(categories)
        ]
        return budget

    return _create_budget


# =============================================================================
# Application Fixtures
# =============================================================================


@pytest.fixture()
def app(tmp_path, monkeypatch: pytest.MonkeyPatch):
    db_path = tmp_path / "homeledger.db"
    monkeypatch.setenv("HOMELEDGER_DATA_DIR", str(tmp_path))
    monkeypatch.setenv("HOMELEDGER_DATABASE_URL", f"sqlite:///{db_path}")
    monkeypatch.setenv("HOMELEDGER_SECRET_KEY", "test-secret-key-for-the-homeledger-suite")
    return create_app("testing")


@pytest.fixture()
def client(app):
    with app.test_client() as test_client:
        yield test_client


@pytest.fixture()
def register(client):
    """Register a user and return ``(headers, user_payload)``."""

    def _register(username: str = "alice", **extra) -> tuple[dict[str, str], dict]:
        payload = {"username": username, "password": "secret123", "email": f"{username}@example.com"}
        payload.update(extra)
        response = client.post("/api/auth/register", json=payload)
        assert response.status_code == 201, response.get_json()
        body = response.get_json()
        return {"Authorization": f"Bearer {body['token']}"}, body["user"]

    return _register


@pytest.fixture()
def auth_headers(register) -> dict[str, str]:
    headers, _ = register()
    return headers
