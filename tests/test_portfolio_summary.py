"""Tests for portfolio aggregation, position history and price refresh."""

from __future__ import annotations

from datetime import datetime, timezone

import pytest

from homeledger.services.portfolio import (
    apply_position_update,
    opening_event,
    rank_by_return,
    refresh_prices,
    summarize_portfolio,
)
from homeledger.services.quotes import QuoteError

NOW = datetime(2024, 5, 1, tzinfo=timezone.utc)


class FakeQuotes:
    def __init__(self, prices):
        self.prices = prices
        self.calls = []

    def get_quote(self, symbol):
        self.calls.append(symbol)
        price = self.prices.get(symbol)
        if price is None:
            raise QuoteError(f"no quote for {symbol}")
        return price


def test_single_position_summary(investment_factory):
    summary = summarize_portfolio([investment_factory(quantity=10, purchase_price=100, current_price=120)])

    assert summary.total_value == pytest.approx(1200)
    assert summary.total_cost == pytest.approx(1000)
    assert summary.total_return == pytest.approx(200)
    assert summary.total_return_percentage == pytest.approx(20)
    bucket = summary.by_type["stocks"]
    assert (bucket.value, bucket.total_return, bucket.count) == (
        pytest.approx(1200),
        pytest.approx(200),
        1,
    )


def test_empty_portfolio():
    summary = summarize_portfolio([])
    assert summary.total_value == 0
    assert summary.total_return_percentage is None
    assert summary.top_performers == []
    assert summary.worst_performers == []


def test_zero_cost_basis_has_no_percentage(investment_factory):
    gift = investment_factory(symbol="GIFT", purchase_price=0, current_price=10)
    summary = summarize_portfolio([gift])

    assert gift.return_percentage is None
    assert summary.total_return_percentage is None
    assert summary.total_value == pytest.approx(100)


def test_zero_cost_positions_rank_last(investment_factory):
    gift = investment_factory(symbol="GIFT", purchase_price=0, current_price=10)
    loser = investment_factory(symbol="LOSS", purchase_price=100, current_price=50)
    assert [i.symbol for i in rank_by_return([gift, loser])] == ["LOSS", "GIFT"]


def test_performers_overlap_below_ten(investment_factory):
    positions = [
        investment_factory(symbol=f"S{i}", purchase_price=100, current_price=100 + i)
        for i in range(3)
    ]
    summary = summarize_portfolio(positions)

    assert [i.symbol for i in summary.top_performers] == ["S2", "S1", "S0"]
    assert [i.symbol for i in summary.worst_performers] == ["S0", "S1", "S2"]


def test_performers_capped_at_five(investment_factory):
    positions = [
        investment_factory(symbol=f"S{i}", purchase_price=100, current_price=100 + i)
        for i in range(12)
    ]
    summary = summarize_portfolio(positions)

    assert [i.symbol for i in summary.top_performers] == ["S11", "S10", "S9", "S8", "S7"]
    assert [i.symbol for i in summary.worst_performers] == ["S0", "S1", "S2", "S3", "S4"]


def test_ties_keep_input_order(investment_factory):
    a = investment_factory(symbol="A")
    b = investment_factory(symbol="B")
    assert [i.symbol for i in rank_by_return([a, b])] == ["A", "B"]


def test_opening_event(investment_factory):
    event = opening_event(investment_factory(quantity=4, purchase_price=25), now=NOW)
    assert (event.action, event.quantity, event.price, event.amount) == ("buy", 4, 25, 100)
    assert event.occurred_at == NOW


def test_quantity_decrease_records_sell(investment_factory):
    inv = investment_factory(quantity=10, current_price=120)

    event = apply_position_update(inv, {"quantity": 6}, now=NOW)

    assert event.action == "sell"
    assert event.quantity == pytest.approx(4)
    assert event.amount == pytest.approx(480)
    assert inv.quantity == 6
    assert inv.history == [event]


def test_quantity_increase_records_buy_at_new_price(investment_factory):
    inv = investment_factory(quantity=10, current_price=120)

    event = apply_position_update(inv, {"quantity": 12, "current_price": 130}, now=NOW)

    assert event.action == "buy"
    assert event.amount == pytest.approx(260)
    assert inv.current_price == 130
    assert inv.last_updated == NOW


def test_metadata_update_records_nothing(investment_factory):
    inv = investment_factory()
    assert apply_position_update(inv, {"notes": "long hold"}, now=NOW) is None
    assert inv.notes == "long hold"
    assert inv.history == []


def test_refresh_prices_updates_quoted_types_only(investment_factory):
    stock = investment_factory(symbol="AAPL", current_price=100)
    bond = investment_factory(symbol="BOND", type="bonds", current_price=100)
    quotes = FakeQuotes({"AAPL": 150.0, "BOND": 1.0})

    updated = refresh_prices([stock, bond], quotes, now=NOW)

    assert updated == [stock]
    assert stock.current_price == 150.0
    assert stock.last_updated == NOW
    assert bond.current_price == 100
    assert quotes.calls == ["AAPL"]


def test_refresh_prices_keeps_stale_price_on_failure(investment_factory, caplog):
    stock = investment_factory(symbol="MISS", current_price=100)

    with caplog.at_level("WARNING", logger="homeledger"):
        updated = refresh_prices([stock], FakeQuotes({}), now=NOW)

    assert updated == []
    assert stock.current_price == 100
    assert "Price refresh failed" in caplog.text


def test_return_percentage_is_per_unit(investment_factory):
    closed = investment_factory(symbol="SOLD", quantity=0, purchase_price=50, current_price=60)
    loser = investment_factory(symbol="LOSS", purchase_price=100, current_price=50)

    assert closed.cost_basis == 0
    assert closed.return_percentage == pytest.approx(20)
    assert [i.symbol for i in rank_by_return([loser, closed])] == ["SOLD", "LOSS"]
