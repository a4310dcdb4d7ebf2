"""Bill form definitions."""

from __future__ import annotations

from datetime import date
from typing import Annotated, ClassVar, Optional

from pydantic import Field, model_validator

from ...models.bill import BillFrequency, BillStatus, PaymentMethod, ReminderChannel
from ..forms import PayloadForm

BillName = Annotated[str, Field(min_length=1, max_length=120)]
BillCategory = Annotated[str, Field(min_length=1, max_length=64)]


def recurrence_error(is_recurring: bool, frequency: Optional[str]) -> Optional[str]:
    """A frequency must be present exactly when the bill recurs."""

    if is_recurring and not frequency:
        return "Frequency is required for recurring bills."
    if not is_recurring and frequency:
        return "Frequency only applies to recurring bills."
    return None


class ReminderForm(PayloadForm):
    channel: ReminderChannel
    days_before_due: int = Field(ge=0, le=365)


class BillForm(PayloadForm):
    """Form model for creating a bill."""

    root_error_field: ClassVar[str] = "frequency"
    check_recurrence: ClassVar[bool] = True

    name: BillName
    amount: float = Field(ge=0)
    due_date: date
    category: BillCategory
    is_recurring: bool = False
    frequency: Optional[BillFrequency] = None
    status: BillStatus = "pending"
    payment_method: Optional[PaymentMethod] = None
    autopay_enabled: bool = False
    autopay_account_id: Optional[int] = Field(default=None, ge=1)
    notes: Optional[str] = Field(default=None, max_length=1000)
    reminders: list[ReminderForm] = Field(default_factory=list)

    @model_validator(mode="after")
    def ensure_frequency(self) -> "BillForm":
        """Require a frequency exactly when the bill recurs."""

        if self.check_recurrence:
            message = recurrence_error(self.is_recurring, self.frequency)
            if message:
                raise ValueError(message)
        return self


class BillUpdateForm(BillForm):
    """Only the fields a client sends are applied.

    Recurrence is checked by the route against the merged bill.
    """

    check_recurrence: ClassVar[bool] = False

    name: BillName = None
    amount: float = Field(default=None, ge=0)
    due_date: date = None
    category: BillCategory = None


__all__ = ["BillForm", "BillUpdateForm", "ReminderForm", "recurrence_error"]
