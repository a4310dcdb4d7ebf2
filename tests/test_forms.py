"""Tests for the pydantic payload forms."""

from __future__ import annotations

from datetime import date, datetime

import pytest

from homeledger.blueprints.bills.forms import BillForm, BillUpdateForm
from homeledger.blueprints.budget.forms import BudgetForm, BudgetUpdateForm
from homeledger.blueprints.forms import error_key
from homeledger.blueprints.investments.forms import InvestmentForm
from homeledger.blueprints.transactions.routes import TransactionForm
from homeledger.errors import ValidationFailed

BILL = {
    "name": " Rent ",
    "amount": "1200",
    "due_date": "2024-01-31",
    "category": "housing",
}


def test_bill_form_cleans_submitted_fields():
    data = BillForm.clean(BILL)

    assert data == {
        "name": "Rent",
        "amount": 1200.0,
        "due_date": date(2024, 1, 31),
        "category": "housing",
    }


def test_bill_form_requires_frequency_for_recurring():
    with pytest.raises(ValidationFailed) as excinfo:
        BillForm.clean({**BILL, "is_recurring": True}, "Invalid bill")

    assert excinfo.value.message == "Invalid bill"
    assert list(excinfo.value.errors) == ["frequency"]

    with pytest.raises(ValidationFailed) as excinfo:
        BillForm.clean({**BILL, "frequency": "monthly"})
    assert list(excinfo.value.errors) == ["frequency"]


def test_bill_update_form_is_partial():
    assert BillUpdateForm.clean({"status": "paid"}) == {"status": "paid"}
    assert BillUpdateForm.clean({"is_recurring": True}) == {"is_recurring": True}
    assert BillUpdateForm.clean({"frequency": None}) == {"frequency": None}

    with pytest.raises(ValidationFailed) as excinfo:
        BillUpdateForm.clean({"amount": None, "due_date": "soon"})
    assert set(excinfo.value.errors) == {"amount", "due_date"}


def test_bill_form_rejects_bad_numbers():
    with pytest.raises(ValidationFailed) as excinfo:
        BillForm.clean({**BILL, "amount": "Infinity", "autopay_account_id": 0})
    assert set(excinfo.value.errors) == {"amount", "autopay_account_id"}


def test_budget_update_ignores_the_month():
    data = BudgetUpdateForm.clean({"year": 2030, "total_budget": 50})
    assert data == {"total_budget": 50.0}


def test_budget_form_flags_duplicate_categories():
    with pytest.raises(ValidationFailed) as excinfo:
        BudgetForm.clean(
            {
                "year": 2024,
                "month": 3,
                "total_budget": 10,
                "categories": [{"name": "Food", "limit": 1}, {"name": "Food", "limit": 2}],
            }
        )
    assert excinfo.value.errors == {"categories": ["Value error, Duplicate category: Food."]}


def test_investment_form_normalizes_symbol_tags_and_date():
    data = InvestmentForm.clean(
        {
            "type": "etfs",
            "symbol": "vti",
            "name": "Total market",
            "quantity": 3,
            "purchase_price": 200,
            "purchase_date": "2024-03-10T12:00:00+02:00",
            "tags": "core, ,long",
        }
    )

    assert data["symbol"] == "VTI"
    assert data["tags"] == "core,long"
    assert data["purchase_date"] == datetime(2024, 3, 10, 10, 0)


def test_transaction_form_accepts_tag_lists():
    data = TransactionForm.clean(
        {"amount": -4.5, "type": "expense", "category": "Food", "tags": ["work", "meal"]}
    )
    assert data == {"amount": -4.5, "type": "expense", "category": "Food", "tags": "work,meal"}


@pytest.mark.parametrize(
    ("loc", "expected"),
    [
        (("amount",), "amount"),
        (("categories", 1, "name"), "categories[1].name"),
        ((), ""),
    ],
)
def test_error_key(loc, expected):
    assert error_key(loc) == expected
