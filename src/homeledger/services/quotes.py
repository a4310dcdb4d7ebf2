"""HTTP client for the stock price quote service."""

from __future__ import annotations

from typing import Optional

import requests

from ..logging_config import get_logger

logger = get_logger(__name__)


class QuoteError(Exception):
    """Raised when a quote cannot be obtained for a symbol."""


class QuoteClient:
    """Fetch the latest price for a ticker symbol.

    The service is expected to answer ``GET {base_url}/{symbol}`` with a JSON
    body carrying a numeric ``price`` field.
    """

    def __init__(
        self,
        base_url: str,
        *,
        timeout: float = 10.0,
        session: Optional[requests.Session] = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()

    def get_quote(self, symbol: str) -> float:
        symbol = symbol.strip().upper()
        if not symbol:
            raise QuoteError("Empty symbol")

        url = f"{self.base_url}/{symbol}"
        try:
            response = self.session.get(url, timeout=self.timeout)
            response.raise_for_status()
            payload = response.json()
        except requests.exceptions.Timeout as exc:
            raise QuoteError(f"Quote service timed out for {symbol}") from exc
        except requests.exceptions.ConnectionError as exc:
            raise QuoteError("Cannot connect to quote service") from exc
        except requests.exceptions.HTTPError as exc:
            raise QuoteError(f"Quote service error for {symbol}: {exc}") from exc
        except ValueError as exc:
            raise QuoteError(f"Quote service returned invalid JSON for {symbol}") from exc

        price = payload.get("price") if isinstance(payload, dict) else None
        try:
            value = float(price)
        except (TypeError, ValueError) as exc:
            raise QuoteError(f"No price in quote for {symbol}") from exc
        if value < 0:
            raise QuoteError(f"Negative price in quote for {symbol}")

        logger.debug("Quote fetched", extra={"symbol": symbol, "price": value})
        return value
