"""Outbound email for bill reminders."""

from __future__ import annotations

import smtplib
from dataclasses import dataclass
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText
from html import escape

from ..config import BaseConfig
from ..logging_config import get_logger
from ..models.bill import Bill

logger = get_logger(__name__)


@dataclass(slots=True)
class Mailer:
    """SMTP sender configured from the application config."""

    host: str
    port: int = 587
    username: str = ""
    password: str = ""
    sender: str = ""
    enabled: bool = True
    timeout: float = 30.0

    @classmethod
    def from_config(cls, config: BaseConfig) -> "Mailer":
        return cls(
            host=config.SMTP_HOST,
            port=config.SMTP_PORT,
            username=config.SMTP_USER,
            password=config.SMTP_PASSWORD,
            sender=config.MAIL_FROM,
            enabled=config.MAIL_ENABLED and bool(config.SMTP_HOST),
        )

    def send_mail(self, to: str, subject: str, html_body: str) -> bool:
        """Send one HTML message; returns False when disabled or on failure."""

        if not self.enabled:
            logger.info("Mail disabled, message dropped", extra={"to": to, "subject": subject})
            return False
        if not to:
            logger.warning("No recipient address", extra={"subject": subject})
            return False

        msg = MIMEMultipart("alternative")
        msg["From"] = self.sender
        msg["To"] = to
        msg["Subject"] = subject
        msg.attach(MIMEText(html_body, "html"))

        try:
            with smtplib.SMTP(self.host, self.port, timeout=self.timeout) as server:
                server.starttls()
                if self.username:
                    server.login(self.username, self.password)
                server.send_message(msg)
        except (smtplib.SMTPException, OSError):
            logger.exception("Mail delivery failed", extra={"to": to, "subject": subject})
            return False

        logger.info("Mail sent", extra={"to": to, "subject": subject})
        return True


def render_bill_reminder(bill: Bill) -> tuple[str, str]:
    """Return (subject, html body) for a bill payment reminder."""

    subject = f"Bill Reminder: {bill.name}"
    body = (
        "<h2>Bill Payment Reminder</h2>"
        "<p>This is a reminder for your upcoming bill:</p>"
        "<ul>"
        f"<li><strong>Bill:</strong> {escape(bill.name)}</li>"
        f"<li><strong>Amount:</strong> ${bill.amount:,.2f}</li>"
        f"<li><strong>Due Date:</strong> {bill.due_date.strftime('%B %d, %Y')}</li>"
        "</ul>"
        "<p>Please ensure timely payment to avoid any late fees.</p>"
    )
    return subject, body
