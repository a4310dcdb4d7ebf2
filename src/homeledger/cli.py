"""Flask CLI commands for HomeLedger."""

from __future__ import annotations

from datetime import date

import click
from flask import current_app

from .blueprints.common import MAILER_KEY
from .extensions import get_session_factory
from .infra.repositories import SQLModelBillRepository
from .logging_config import get_logger
from .services import auth as auth_service
from .services import bills as bill_service
from .services.notifications import render_bill_reminder

logger = get_logger(__name__)


def _today(value: str | None) -> date:
    return date.fromisoformat(value) if value else date.today()


def init_app(app) -> None:
    """Register CLI commands on the Flask app."""

    @app.cli.command("homeledger-mark-overdue")
    @click.option("--today", default=None, help="Reference date (YYYY-MM-DD), defaults to today")
    def homeledger_mark_overdue(today: str | None) -> None:
        """Flag pending bills whose due date has passed."""

        repo = SQLModelBillRepository(get_session_factory())
        changed = bill_service.mark_overdue(repo.list_by_status("pending"), _today(today))
        if changed:
            repo.save_all(changed)
        logger.info("Overdue bills marked", extra={"count": len(changed)})
        click.echo(f"Marked {len(changed)} bill(s) overdue.")

    @app.cli.command("homeledger-send-reminders")
    @click.option("--today", default=None, help="Reference date (YYYY-MM-DD), defaults to today")
    def homeledger_send_reminders(today: str | None) -> None:
        """Email due reminders of pending bills and mark them sent."""

        session_factory = get_session_factory()
        mailer = current_app.extensions[MAILER_KEY]
        repo = SQLModelBillRepository(session_factory)
        reference = _today(today)

        sent = 0
        touched = []
        for bill in repo.list_by_status("pending"):
            # Only email reminders have a transport.
            reminders = [r for r in bill_service.due_reminders(bill, reference) if r.channel == "email"]
            if not reminders:
                continue
            user = auth_service.get_user(bill.user_id, session_factory=session_factory)
            if user is None:
                continue
            subject, body = render_bill_reminder(bill)
            if not mailer.send_mail(user.email, subject, body):
                continue
            for reminder in reminders:
                reminder.sent = True
            sent += len(reminders)
            touched.append(bill)

        if touched:
            repo.save_all(touched)
        logger.info("Bill reminders sent", extra={"count": sent})
        click.echo(f"Sent {sent} reminder(s).")
