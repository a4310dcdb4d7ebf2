"""Bill routes."""

from __future__ import annotations

from datetime import date

from flask import jsonify

from ...domain.repositories import BillRepository
from ...errors import NotFound, UpstreamFailure, ValidationFailed
from ...infra.repositories import SQLModelBankAccountRepository, SQLModelBillRepository
from ...logging_config import get_logger
from ...models.bill import Bill, BillReminder
from ...models.user import User
from ...services import bills as bill_service
from ...services.access import ensure_user_owns
from ...services.notifications import render_bill_reminder
from ..auth.guards import current_user, login_required
from ..common import app_config, json_body, mailer, session_factory
from . import bp
from .forms import BillForm, BillUpdateForm, recurrence_error

logger = get_logger(__name__)


def _repo() -> BillRepository:
    return SQLModelBillRepository(session_factory())


def bill_to_dict(bill: Bill) -> dict[str, object]:
    data = bill.model_dump(mode="json")
    data["history"] = [
        entry.model_dump(mode="json", exclude={"bill_id"}) for entry in bill.history
    ]
    data["reminders"] = [
        reminder.model_dump(mode="json", exclude={"bill_id"}) for reminder in bill.reminders
    ]
    return data


def _load_owned(repo: BillRepository, bill_id: int, user: User) -> Bill:
    bill = repo.get_by_id(bill_id)
    if bill is None:
        raise NotFound("Bill not found")
    ensure_user_owns(bill, user)
    return bill


def _check_autopay_account(account_id: int | None, user: User) -> None:
    if account_id is None:
        return
    account = SQLModelBankAccountRepository(session_factory()).get_by_id(account_id)
    if account is None or account.user_id != user.id:
        raise ValidationFailed(
            "Invalid bill", {"autopay_account_id": ["Unknown bank account."]}
        )


@bp.get("/")
@login_required
def list_bills():
    """All of the caller's bills, soonest due first."""

    bills = _repo().list_for_user(user_id=current_user().id)
    return jsonify([bill_to_dict(b) for b in bills])


@bp.post("/")
@login_required
def create_bill():
    user = current_user()
    data = BillForm.clean(json_body(), "Invalid bill")
    _check_autopay_account(data.get("autopay_account_id"), user)

    reminders = data.pop("reminders", [])
    bill = Bill(user_id=user.id, family_id=user.family_id, **data)
    bill.reminders = [BillReminder(**r) for r in reminders]
    bill = _repo().create(bill)
    logger.info("Bill created", extra={"bill_id": bill.id, "user_id": user.id})
    return jsonify(bill_to_dict(bill)), 201


@bp.get("/upcoming")
@login_required
def upcoming_bills():
    """Pending bills due within the configured horizon."""

    bills = _repo().list_for_user(user_id=current_user().id)
    due = bill_service.upcoming(bills, date.today(), days=app_config().UPCOMING_DAYS)
    return jsonify([bill_to_dict(b) for b in due])


@bp.get("/<int:bill_id>")
@login_required
def get_bill(bill_id: int):
    bill = _load_owned(_repo(), bill_id, current_user())
    return jsonify(bill_to_dict(bill))


@bp.put("/<int:bill_id>")
@login_required
def update_bill(bill_id: int):
    """Apply field changes; paying a bill records history and rolls recurrences.

    A ``reminders`` list replaces the bill's reminders.
    """

    user = current_user()
    repo = _repo()
    bill = _load_owned(repo, bill_id, user)
    changes = BillUpdateForm.clean(json_body(), "Invalid bill update")
    reminders = changes.pop("reminders", None)

    is_recurring = changes.get("is_recurring", bill.is_recurring)
    if not is_recurring and "frequency" not in changes:
        changes["frequency"] = None
    frequency = changes.get("frequency", bill.frequency)
    message = recurrence_error(is_recurring, frequency)
    if message:
        raise ValidationFailed("Invalid bill update", {"frequency": [message]})
    _check_autopay_account(changes.get("autopay_account_id"), user)

    transition = bill_service.apply_status_transition(bill, changes)
    saved, successor = repo.save(
        transition.bill,
        successor=transition.successor,
        reminders=[BillReminder(**r) for r in reminders] if reminders is not None else None,
    )

    if transition.payment is not None:
        logger.info(
            "Bill paid",
            extra={
                "bill_id": saved.id,
                "amount": saved.amount,
                "next_bill_id": successor.id if successor else None,
            },
        )
    return jsonify(
        {
            "bill": bill_to_dict(saved),
            "next_bill": bill_to_dict(successor) if successor else None,
        }
    )


@bp.delete("/<int:bill_id>")
@login_required
def delete_bill(bill_id: int):
    repo = _repo()
    bill = _load_owned(repo, bill_id, current_user())
    repo.delete(bill.id)
    return jsonify({"message": "Bill removed"})


@bp.post("/<int:bill_id>/remind")
@login_required
def remind_bill(bill_id: int):
    """Email the bill owner a payment reminder."""

    user = current_user()
    bill = _load_owned(_repo(), bill_id, user)
    subject, body = render_bill_reminder(bill)
    if not mailer().send_mail(user.email, subject, body):
        raise UpstreamFailure("Reminder could not be sent")
    return jsonify({"message": "Reminder sent successfully"})
