"""Bill lifecycle: payment history, recurring successors and due-date math."""

from __future__ import annotations

from calendar import monthrange
from dataclasses import dataclass
from datetime import date, datetime, timedelta, timezone
from typing import Any, Callable, Iterable, Mapping, Optional

from ..errors import ValidationFailed
from ..models.bill import Bill, BillPayment, BillReminder

# Columns a successor bill does not inherit.
_FRESH_FIELDS = frozenset({"id", "created_at", "updated_at"})

MUTABLE_FIELDS = frozenset(
    {
        "name",
        "amount",
        "due_date",
        "category",
        "is_recurring",
        "frequency",
        "status",
        "payment_method",
        "autopay_enabled",
        "autopay_account_id",
        "notes",
    }
)


def _add_months(value: date, months: int) -> date:
    """Shift ``value`` by whole calendar months, clamping the day of month."""

    month_index = value.month - 1 + months
    year = value.year + month_index // 12
    month = month_index % 12 + 1
    day = min(value.day, monthrange(year, month)[1])
    return date(year, month, day)


FREQUENCY_STEPS: dict[str, Callable[[date], date]] = {
    "weekly": lambda d: d + timedelta(days=7),
    "monthly": lambda d: _add_months(d, 1),
    "quarterly": lambda d: _add_months(d, 3),
    "yearly": lambda d: _add_months(d, 12),
}


def advance_due_date(due_date: date, frequency: Optional[str]) -> date:
    """Return ``due_date`` moved forward by one period of ``frequency``."""

    step = FREQUENCY_STEPS.get(frequency or "")
    if step is None:
        raise ValidationFailed(
            "Recurring bill has no valid frequency",
            {"frequency": [f"Must be one of: {', '.join(FREQUENCY_STEPS)}."]},
        )
    return step(due_date)


@dataclass(slots=True)
class BillTransition:
    """Outcome of a bill update: the bill itself and an optional successor."""

    bill: Bill
    payment: Optional[BillPayment] = None
    successor: Optional[Bill] = None


def build_successor(bill: Bill) -> Bill:
    """Copy ``bill`` into the next period's pending instance."""

    data = bill.model_dump(exclude=set(_FRESH_FIELDS))
    data.update(
        due_date=advance_due_date(bill.due_date, bill.frequency),
        status="pending",
    )
    successor = Bill(**data)
    successor.reminders = [
        BillReminder(channel=r.channel, days_before_due=r.days_before_due, sent=False)
        for r in bill.reminders
    ]
    return successor


def apply_status_transition(
    bill: Bill,
    changes: Mapping[str, Any],
    *,
    now: datetime | None = None,
) -> BillTransition:
    """Apply a requested update to ``bill``.

    Moving a bill into ``paid`` from any other status appends one payment to
    its history and, for recurring bills, produces the successor for the next
    period. The successor is built from the bill as it was before the update.
    The remaining requested fields are then merged onto the bill. Persisting
    both records is left to the caller.
    """

    now = now or datetime.now(timezone.utc)
    payment: Optional[BillPayment] = None
    successor: Optional[Bill] = None

    if changes.get("status") == "paid" and bill.status != "paid":
        payment = BillPayment(
            paid_at=now,
            amount=bill.amount,
            status="paid",
            payment_method=changes.get("payment_method") or "other",
            notes=changes.get("notes"),
        )
        bill.history.append(payment)
        if bill.is_recurring:
            successor = build_successor(bill)

    for key, value in changes.items():
        if key in MUTABLE_FIELDS:
            setattr(bill, key, value)
    bill.updated_at = now

    return BillTransition(bill=bill, payment=payment, successor=successor)


def is_overdue(bill: Bill, today: date) -> bool:
    return bill.status == "pending" and bill.due_date < today


def mark_overdue(bills: Iterable[Bill], today: date) -> list[Bill]:
    """Flag pending bills past their due date; returns the bills changed."""

    changed = []
    for bill in bills:
        if is_overdue(bill, today):
            bill.status = "overdue"
            changed.append(bill)
    return changed


def due_reminders(bill: Bill, today: date) -> list[BillReminder]:
    """Unsent reminders of a pending bill whose send date has arrived."""

    if bill.status != "pending":
        return []
    return [
        reminder
        for reminder in bill.reminders
        if not reminder.sent
        and bill.due_date - timedelta(days=reminder.days_before_due) <= today
    ]


def upcoming(bills: Iterable[Bill], today: date, *, days: int = 30) -> list[Bill]:
    """Pending bills due between today and ``days`` from now, soonest first."""

    horizon = today + timedelta(days=days)
    return sorted(
        (b for b in bills if b.status == "pending" and today <= b.due_date <= horizon),
        key=lambda b: b.due_date,
    )


__all__ = [
    "BillTransition",
    "FREQUENCY_STEPS",
    "advance_due_date",
    "apply_status_transition",
    "build_successor",
    "due_reminders",
    "is_overdue",
    "mark_overdue",
    "upcoming",
]
