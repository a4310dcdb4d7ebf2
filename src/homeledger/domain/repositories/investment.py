"""Investment repository protocol."""

from __future__ import annotations

from typing import Iterable, Optional, Protocol

from ...models.investment import Investment


class InvestmentRepository(Protocol):
    def get_by_id(self, investment_id: int) -> Optional[Investment]:
        ...

    def list_for_user(self, *, user_id: int) -> list[Investment]:
        """List a user's positions, most recent purchase first."""
        ...

    def create(self, investment: Investment) -> Investment:
        ...

    def save(self, investment: Investment) -> Investment:
        ...

    def save_all(self, investments: Iterable[Investment]) -> None:
        ...

    def delete(self, investment_id: int) -> None:
        ...
