"""SQLModel definitions for ledger transactions."""

from __future__ import annotations

from datetime import datetime
from typing import ClassVar, Literal, Optional, get_args

from sqlmodel import Field, SQLModel

TransactionType = Literal["income", "expense"]

TRANSACTION_TYPES = get_args(TransactionType)


class Transaction(SQLModel, table=True):
    """A single income or expense entry. Immutable once created."""

    __tablename__: ClassVar[str] = "transaction"

    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: int = Field(foreign_key="user.id", nullable=False, index=True)
    family_id: int = Field(foreign_key="family.id", nullable=False, index=True)
    amount: float = Field(nullable=False, description="Signed amount as entered")
    type: str = Field(nullable=False, max_length=16)
    category: str = Field(nullable=False, max_length=64, index=True)
    description: str = Field(default="", max_length=255)
    date: datetime = Field(nullable=False, index=True)
    is_shared: bool = Field(default=False, nullable=False)
    tags: str = Field(default="", max_length=255, description="Comma-separated tags")

    @property
    def tag_list(self) -> list[str]:
        return [tag for tag in self.tags.split(",") if tag]
