"""Tests for registration, login and the bearer-token guard."""

from __future__ import annotations

from homeledger.models import User
from homeledger.services import auth as auth_service


def test_register_and_me(client, register):
    headers, user = register("alice")

    assert user["username"] == "alice"
    assert user["family_id"] is not None

    response = client.get("/api/auth/me", headers=headers)
    assert response.status_code == 200
    assert response.get_json()["username"] == "alice"


def test_register_duplicate_username(client, register):
    register("alice")
    response = client.post("/api/auth/register", json={"username": "alice", "password": "secret123"})
    assert response.status_code == 409
    assert response.get_json()["message"] == "Username already exists"


def test_register_validation(client):
    response = client.post("/api/auth/register", json={"username": "bob", "password": "123"})
    assert response.status_code == 400
    assert "password" in response.get_json()["errors"]

    response = client.post("/api/auth/register", json={"password": "secret123"})
    assert response.status_code == 400
    assert "username" in response.get_json()["errors"]


def test_register_into_existing_family(client, register):
    _, alice = register("alice")
    _, bob = register("bob", family_id=alice["family_id"])
    assert bob["family_id"] == alice["family_id"]

    response = client.post(
        "/api/auth/register",
        json={"username": "carol", "password": "secret123", "family_id": 9999},
    )
    assert response.status_code == 404


def test_login(client, register):
    register("alice")

    response = client.post("/api/auth/login", json={"username": "alice", "password": "secret123"})
    assert response.status_code == 200
    assert response.get_json()["token"]

    response = client.post("/api/auth/login", json={"username": "alice", "password": "wrong-pass"})
    assert response.status_code == 401
    assert response.get_json() == {"message": "Invalid credentials"}


def test_missing_or_bad_token(client):
    response = client.get("/api/bills/")
    assert response.status_code == 401
    assert response.get_json()["message"] == "No token, authorization denied"

    response = client.get("/api/bills/", headers={"Authorization": "Bearer not-a-token"})
    assert response.status_code == 401


def test_non_json_body(client):
    response = client.post("/api/auth/login", data="plain", content_type="text/plain")
    assert response.status_code == 400


def test_expired_token(app, client, register):
    _, user = register("alice")
    token = auth_service.issue_token(
        User(id=user["id"], username="alice", password_hash="x", family_id=user["family_id"]),
        secret_key=app.config["SECRET_KEY"],
        expires_in=-10,
    )

    response = client.get("/api/auth/me", headers={"Authorization": f"Bearer {token}"})
    assert response.status_code == 401
    assert response.get_json() == {"message": "Token expired"}


def test_token_signed_with_other_key(client, register):
    _, user = register("alice")
    token = auth_service.issue_token(
        User(id=user["id"], username="alice", password_hash="x", family_id=user["family_id"]),
        secret_key="some-other-key-that-is-long-enough-to-sign",
        expires_in=60,
    )

    response = client.get("/api/auth/me", headers={"Authorization": f"Bearer {token}"})
    assert response.get_json() == {"message": "Token is not valid"}
