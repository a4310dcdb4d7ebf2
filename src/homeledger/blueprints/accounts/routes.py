"""Bank account routes. Account numbers leave the service masked."""

from __future__ import annotations

from typing import Annotated

from flask import jsonify, request
from pydantic import Field, field_validator

from ...domain.repositories import BankAccountRepository
from ...errors import NotFound
from ...infra.repositories import SQLModelBankAccountRepository
from ...models.account import AccountType, BankAccount
from ...models.user import User
from ...services.access import ensure_user_owns
from ..auth.guards import current_user, login_required
from ..common import json_body, session_factory
from ..forms import PayloadForm
from . import bp

BankName = Annotated[str, Field(min_length=1, max_length=128)]


class AccountUpdateForm(PayloadForm):
    bank_name: BankName = None
    account_type: AccountType = None
    balance: float = None
    currency: str = Field(default=None, min_length=1, max_length=3)
    is_active: bool = None

    @field_validator("currency")
    @classmethod
    def upper_currency(cls, value: str) -> str:
        return value.upper()


class AccountForm(AccountUpdateForm):
    bank_name: BankName
    account_type: AccountType
    account_number: Annotated[str, Field(min_length=1, max_length=64)]


def account_to_dict(account: BankAccount) -> dict[str, object]:
    data = account.model_dump(mode="json", exclude={"account_number"})
    data["account_number"] = account.masked_number
    return data


def _repo() -> BankAccountRepository:
    return SQLModelBankAccountRepository(session_factory())


def _load_owned(repo: BankAccountRepository, account_id: int, user: User) -> BankAccount:
    account = repo.get_by_id(account_id)
    if account is None:
        raise NotFound("Bank account not found")
    ensure_user_owns(account, user)
    return account


@bp.get("/")
@login_required
def list_accounts():
    include_inactive = request.args.get("include_inactive", "").lower() in {"1", "true"}
    accounts = _repo().list_for_user(user_id=current_user().id, include_inactive=include_inactive)
    return jsonify([account_to_dict(a) for a in accounts])


@bp.post("/")
@login_required
def create_account():
    user = current_user()
    data = AccountForm.clean(json_body(), "Invalid bank account")
    account = _repo().create(BankAccount(user_id=user.id, family_id=user.family_id, **data))
    return jsonify(account_to_dict(account)), 201


@bp.get("/<int:account_id>")
@login_required
def get_account(account_id: int):
    account = _load_owned(_repo(), account_id, current_user())
    return jsonify(account_to_dict(account))


@bp.put("/<int:account_id>")
@login_required
def update_account(account_id: int):
    repo = _repo()
    account = _load_owned(repo, account_id, current_user())
    changes = AccountUpdateForm.clean(json_body(), "Invalid bank account update")
    for key, value in changes.items():
        setattr(account, key, value)
    return jsonify(account_to_dict(repo.save(account)))


@bp.delete("/<int:account_id>")
@login_required
def delete_account(account_id: int):
    """Remove an account; bills paying from it fall back to manual payment."""

    repo = _repo()
    _load_owned(repo, account_id, current_user())
    repo.delete(account_id)
    return jsonify({"message": "Bank account removed"})
