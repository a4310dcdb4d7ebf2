"""Tests for the bank account endpoints."""

from __future__ import annotations


def _create(client, headers, **overrides):
    payload = {
        "bank_name": "First Bank",
        "account_type": "checking",
        "account_number": "0012345678",
        "balance": 250.5,
    }
    payload.update(overrides)
    return client.post("/api/accounts/", json=payload, headers=headers)


def test_account_number_is_masked(client, auth_headers):
    response = _create(client, auth_headers)
    assert response.status_code == 201
    body = response.get_json()
    assert body["account_number"] == "****5678"
    assert body["currency"] == "USD"
    assert body["is_active"] is True

    listed = client.get("/api/accounts/", headers=auth_headers).get_json()
    assert [a["account_number"] for a in listed] == ["****5678"]


def test_account_validation(client, auth_headers):
    response = _create(client, auth_headers, account_type="wallet", account_number="")
    assert response.status_code == 400
    assert set(response.get_json()["errors"]) == {"account_type", "account_number"}


def test_update_and_deactivate(client, auth_headers):
    account = _create(client, auth_headers).get_json()

    response = client.put(
        f"/api/accounts/{account['id']}",
        json={"balance": 99, "currency": "eur", "is_active": False},
        headers=auth_headers,
    )
    assert response.status_code == 200
    body = response.get_json()
    assert (body["balance"], body["currency"], body["is_active"]) == (99, "EUR", False)

    assert client.get("/api/accounts/", headers=auth_headers).get_json() == []
    listed = client.get("/api/accounts/?include_inactive=true", headers=auth_headers).get_json()
    assert len(listed) == 1


def test_delete_detaches_autopay_bill(client, auth_headers):
    account = _create(client, auth_headers).get_json()
    bill = client.post(
        "/api/bills/",
        json={
            "name": "Power",
            "amount": 80,
            "due_date": "2024-06-01",
            "category": "utilities",
            "autopay_enabled": True,
            "autopay_account_id": account["id"],
        },
        headers=auth_headers,
    ).get_json()
    assert bill["autopay_account_id"] == account["id"]

    assert client.delete(f"/api/accounts/{account['id']}", headers=auth_headers).status_code == 200

    reloaded = client.get(f"/api/bills/{bill['id']}", headers=auth_headers).get_json()
    assert reloaded["autopay_account_id"] is None
    assert reloaded["autopay_enabled"] is False
    assert client.get(f"/api/accounts/{account['id']}", headers=auth_headers).status_code == 404


def test_other_user_cannot_read_account(client, register, auth_headers):
    account = _create(client, auth_headers).get_json()
    other_headers, _ = register("mallory")
    assert client.get(f"/api/accounts/{account['id']}", headers=other_headers).status_code == 401
