"""Tests for the Flask CLI commands."""

from __future__ import annotations

import pytest

from homeledger.blueprints.common import MAILER_KEY


class FakeMailer:
    def __init__(self):
        self.sent = []

    def send_mail(self, to, subject, html_body):
        self.sent.append((to, subject))
        return True


def _bill(client, headers, name, due_date, reminders=()):
    response = client.post(
        "/api/bills/",
        json={
            "name": name,
            "amount": 10,
            "due_date": due_date,
            "category": "misc",
            "reminders": list(reminders),
        },
        headers=headers,
    )
    assert response.status_code == 201
    return response.get_json()


@pytest.fixture()
def runner(app):
    return app.test_cli_runner()


def test_mark_overdue(client, auth_headers, runner):
    late = _bill(client, auth_headers, "late", "2024-02-01")
    future = _bill(client, auth_headers, "future", "2024-03-01")

    result = runner.invoke(args=["homeledger-mark-overdue", "--today", "2024-02-15"])

    assert result.exit_code == 0, result.output
    assert "Marked 1 bill(s) overdue." in result.output
    assert client.get(f"/api/bills/{late['id']}", headers=auth_headers).get_json()["status"] == "overdue"
    assert client.get(f"/api/bills/{future['id']}", headers=auth_headers).get_json()["status"] == "pending"


def test_send_reminders(app, client, auth_headers, runner):
    mailer = FakeMailer()
    app.extensions[MAILER_KEY] = mailer
    bill = _bill(
        client,
        auth_headers,
        "Internet",
        "2024-02-10",
        reminders=[
            {"channel": "email", "days_before_due": 3},
            {"channel": "sms", "days_before_due": 3},
            {"channel": "email", "days_before_due": 1},
        ],
    )

    result = runner.invoke(args=["homeledger-send-reminders", "--today", "2024-02-08"])

    assert result.exit_code == 0, result.output
    assert "Sent 1 reminder(s)." in result.output
    assert mailer.sent == [("alice@example.com", "Bill Reminder: Internet")]
    reminders = client.get(f"/api/bills/{bill['id']}", headers=auth_headers).get_json()["reminders"]
    assert [r["sent"] for r in reminders] == [True, False, False]

    again = runner.invoke(args=["homeledger-send-reminders", "--today", "2024-02-08"])
    assert "Sent 0 reminder(s)." in again.output
