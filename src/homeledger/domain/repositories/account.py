"""Bank account repository protocol."""

from __future__ import annotations

from typing import Optional, Protocol

from ...models.account import BankAccount


class BankAccountRepository(Protocol):
    def get_by_id(self, account_id: int) -> Optional[BankAccount]:
        ...

    def list_for_user(self, *, user_id: int, include_inactive: bool = False) -> list[BankAccount]:
        ...

    def create(self, account: BankAccount) -> BankAccount:
        ...

    def save(self, account: BankAccount) -> BankAccount:
        ...

    def delete(self, account_id: int) -> None:
        ...
