"""Bill tables: the bill itself, its payment history and reminders."""

from __future__ import annotations

from datetime import date, datetime, timezone
from typing import ClassVar, Literal, Optional

from sqlalchemy.orm import relationship
from sqlmodel import Field, Relationship, SQLModel

BillFrequency = Literal["weekly", "monthly", "quarterly", "yearly"]
BillStatus = Literal["pending", "paid", "overdue"]
PaymentMethod = Literal["bank_transfer", "credit_card", "debit_card", "cash", "other"]
ReminderChannel = Literal["email", "push", "sms"]


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Bill(SQLModel, table=True):
    """A payable bill, optionally recurring."""

    __tablename__: ClassVar[str] = "bill"

    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: int = Field(foreign_key="user.id", nullable=False, index=True)
    family_id: int = Field(foreign_key="family.id", nullable=False, index=True)
    name: str = Field(nullable=False, max_length=120)
    amount: float = Field(nullable=False)
    due_date: date = Field(nullable=False, index=True)
    category: str = Field(nullable=False, max_length=64)
    is_recurring: bool = Field(default=False, nullable=False)
    frequency: Optional[str] = Field(default=None, max_length=16)
    status: str = Field(default="pending", nullable=False, max_length=16, index=True)
    payment_method: Optional[str] = Field(default=None, max_length=32)
    autopay_enabled: bool = Field(default=False, nullable=False)
    autopay_account_id: Optional[int] = Field(default=None, foreign_key="bank_account.id")
    notes: Optional[str] = Field(default=None, max_length=1000)
    created_at: datetime = Field(default_factory=_utcnow, nullable=False)
    updated_at: datetime = Field(default_factory=_utcnow, nullable=False)

    history: list["BillPayment"] = Relationship(
        sa_relationship=relationship(
            "BillPayment",
            back_populates="bill",
            cascade="all, delete-orphan",
            order_by="BillPayment.id",
        ),
    )
    reminders: list["BillReminder"] = Relationship(
        sa_relationship=relationship(
            "BillReminder",
            back_populates="bill",
            cascade="all, delete-orphan",
            order_by="BillReminder.id",
        ),
    )


class BillPayment(SQLModel, table=True):
    """Append-only payment history entry."""

    __tablename__: ClassVar[str] = "bill_payment"

    id: Optional[int] = Field(default=None, primary_key=True)
    bill_id: Optional[int] = Field(default=None, foreign_key="bill.id", index=True)
    paid_at: datetime = Field(default_factory=_utcnow, nullable=False)
    amount: float = Field(nullable=False)
    status: str = Field(default="paid", nullable=False, max_length=16)
    payment_method: Optional[str] = Field(default=None, max_length=32)
    notes: Optional[str] = Field(default=None, max_length=1000)

    bill: Optional["Bill"] = Relationship(
        sa_relationship=relationship("Bill", back_populates="history"),
    )


class BillReminder(SQLModel, table=True):
    """Reminder sent ``days_before_due`` days ahead of the due date."""

    __tablename__: ClassVar[str] = "bill_reminder"

    id: Optional[int] = Field(default=None, primary_key=True)
    bill_id: Optional[int] = Field(default=None, foreign_key="bill.id", index=True)
    channel: str = Field(nullable=False, max_length=16)
    days_before_due: int = Field(nullable=False, ge=0)
    sent: bool = Field(default=False, nullable=False)

    bill: Optional["Bill"] = Relationship(
        sa_relationship=relationship("Bill", back_populates="reminders"),
    )
