"""Tests for the price quote client."""

from __future__ import annotations

import pytest
import requests

from homeledger.services.quotes import QuoteClient, QuoteError


class FakeResponse:
    def __init__(self, payload=None, status_code=200, json_error=False):
        self.payload = payload
        self.status_code = status_code
        self.json_error = json_error

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.exceptions.HTTPError(f"{self.status_code} error")

    def json(self):
        if self.json_error:
            raise ValueError("no json")
        return self.payload


class FakeSession:
    def __init__(self, response=None, error=None):
        self.response = response
        self.error = error
        self.calls = []

    def get(self, url, timeout):
        self.calls.append((url, timeout))
        if self.error is not None:
            raise self.error
        return self.response


def test_get_quote():
    session = FakeSession(FakeResponse({"price": "187.5"}))
    client = QuoteClient("https://quotes.test/stocks/", timeout=3, session=session)

    assert client.get_quote(" aapl ") == pytest.approx(187.5)
    assert session.calls == [("https://quotes.test/stocks/AAPL", 3)]


@pytest.mark.parametrize(
    "session",
    [
        FakeSession(error=requests.exceptions.Timeout()),
        FakeSession(error=requests.exceptions.ConnectionError()),
        FakeSession(FakeResponse({"price": 1}, status_code=503)),
        FakeSession(FakeResponse(json_error=True)),
        FakeSession(FakeResponse({"symbol": "AAPL"})),
        FakeSession(FakeResponse({"price": "n/a"})),
        FakeSession(FakeResponse({"price": -1})),
        FakeSession(FakeResponse(["not", "an", "object"])),
    ],
)
def test_get_quote_failures(session):
    client = QuoteClient("https://quotes.test/stocks", session=session)
    with pytest.raises(QuoteError):
        client.get_quote("AAPL")


def test_empty_symbol():
    with pytest.raises(QuoteError):
        QuoteClient("https://quotes.test", session=FakeSession()).get_quote("  ")
