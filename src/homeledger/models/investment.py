"""Investment positions and their event history."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import ClassVar, Literal, Optional

from sqlalchemy.orm import relationship
from sqlmodel import Field, Relationship, SQLModel

InvestmentType = Literal["stocks", "bonds", "mutualFunds", "etfs", "crypto", "realEstate", "other"]

# Types whose price is refreshed from the quote service.
QUOTED_TYPES = frozenset({"stocks", "etfs"})


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Investment(SQLModel, table=True):
    """A held position. Valuation fields are derived, never stored."""

    __tablename__: ClassVar[str] = "investment"

    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: int = Field(foreign_key="user.id", nullable=False, index=True)
    family_id: int = Field(foreign_key="family.id", nullable=False, index=True)
    type: str = Field(nullable=False, max_length=16)
    symbol: str = Field(nullable=False, index=True, max_length=32)
    name: str = Field(nullable=False, max_length=128)
    quantity: float = Field(nullable=False)
    purchase_price: float = Field(nullable=False)
    purchase_date: datetime = Field(default_factory=_utcnow, nullable=False)
    current_price: float = Field(default=0.0, nullable=False)
    last_updated: datetime = Field(default_factory=_utcnow, nullable=False)
    notes: Optional[str] = Field(default=None, max_length=1000)
    tags: str = Field(default="", max_length=255)

    history: list["InvestmentEvent"] = Relationship(
        sa_relationship=relationship(
            "InvestmentEvent",
            back_populates="investment",
            cascade="all, delete-orphan",
            order_by="InvestmentEvent.id",
        ),
    )

    @property
    def current_value(self) -> float:
        return self.quantity * self.current_price

    @property
    def cost_basis(self) -> float:
        return self.quantity * self.purchase_price

    @property
    def total_return(self) -> float:
        return self.current_value - self.cost_basis

    @property
    def return_percentage(self) -> Optional[float]:
        """Per-unit price change in percent; ``None`` for a zero purchase price."""
        if self.purchase_price == 0:
            return None
        return (self.current_price - self.purchase_price) / self.purchase_price * 100


class InvestmentEvent(SQLModel, table=True):
    """Append-only buy/sell/dividend/split record."""

    __tablename__: ClassVar[str] = "investment_event"

    id: Optional[int] = Field(default=None, primary_key=True)
    investment_id: Optional[int] = Field(default=None, foreign_key="investment.id", index=True)
    occurred_at: datetime = Field(default_factory=_utcnow, nullable=False)
    price: float = Field(nullable=False)
    action: str = Field(nullable=False, max_length=16)
    quantity: float = Field(nullable=False)
    amount: float = Field(nullable=False)

    investment: Optional["Investment"] = Relationship(
        sa_relationship=relationship("Investment", back_populates="history"),
    )
