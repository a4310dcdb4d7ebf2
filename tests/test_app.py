"""Tests for the application factory and error rendering."""

from __future__ import annotations

from homeledger.blueprints.common import QUOTES_KEY


def test_health(client):
    response = client.get("/health")
    assert response.status_code == 200
    assert response.get_json() == {"status": "ok"}


def test_unknown_route_is_json(client):
    response = client.get("/api/nothing-here")
    assert response.status_code == 404
    assert "message" in response.get_json()


def test_unexpected_error_hides_detail(app, client, auth_headers):
    class ExplodingQuotes:
        def get_quote(self, symbol):
            raise RuntimeError("secret internals")

    app.extensions[QUOTES_KEY] = ExplodingQuotes()
    client.post(
        "/api/investments/",
        json={"type": "stocks", "symbol": "X", "name": "X", "quantity": 1, "purchase_price": 1},
        headers=auth_headers,
    )

    response = client.get("/api/investments/", headers=auth_headers)

    assert response.status_code == 500
    assert response.get_json() == {"message": "Server error"}


def test_request_logging(client, caplog):
    with caplog.at_level("INFO", logger="homeledger"):
        client.get("/health")
    assert "GET /health 200" in caplog.text
