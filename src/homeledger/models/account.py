"""Bank account model."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import ClassVar, Literal, Optional

from sqlmodel import Field, SQLModel

AccountType = Literal["checking", "savings", "credit", "investment", "loan"]


class BankAccount(SQLModel, table=True):
    __tablename__: ClassVar[str] = "bank_account"

    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: int = Field(foreign_key="user.id", nullable=False, index=True)
    family_id: int = Field(foreign_key="family.id", nullable=False, index=True)
    bank_name: str = Field(nullable=False, max_length=128)
    account_type: str = Field(nullable=False, max_length=16)
    account_number: str = Field(nullable=False, max_length=64)
    balance: float = Field(default=0.0, nullable=False)
    currency: str = Field(default="USD", max_length=3)
    is_active: bool = Field(default=True, nullable=False)
    last_sync: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        nullable=False,
    )

    @property
    def masked_number(self) -> str:
        tail = self.account_number[-4:]
        return f"****{tail}"
