"""Portfolio valuation, position history and price refresh."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Iterable, Mapping, Optional, Protocol, Sequence

from ..logging_config import get_logger
from ..models.investment import QUOTED_TYPES, Investment, InvestmentEvent
from .quotes import QuoteError

logger = get_logger(__name__)

PERFORMER_COUNT = 5

MUTABLE_FIELDS = frozenset(
    {"type", "symbol", "name", "quantity", "purchase_price", "current_price", "notes", "tags"}
)


class QuoteSource(Protocol):
    def get_quote(self, symbol: str) -> float:  # pragma: no cover - interface
        ...


@dataclass(slots=True)
class TypeBucket:
    value: float = 0.0
    total_return: float = 0.0
    count: int = 0


@dataclass(slots=True)
class PortfolioSummary:
    total_value: float = 0.0
    total_cost: float = 0.0
    total_return: float = 0.0
    total_return_percentage: Optional[float] = None
    by_type: dict[str, TypeBucket] = field(default_factory=dict)
    top_performers: list[Investment] = field(default_factory=list)
    worst_performers: list[Investment] = field(default_factory=list)


def _rank_key(investment: Investment) -> float:
    pct = investment.return_percentage
    # Positions bought at a zero price have no percentage and rank last.
    return float("-inf") if pct is None else pct


def rank_by_return(investments: Sequence[Investment]) -> list[Investment]:
    """Best return first; equal returns keep their input order."""

    return sorted(investments, key=_rank_key, reverse=True)


def summarize_portfolio(investments: Iterable[Investment]) -> PortfolioSummary:
    """Aggregate value, cost and return across positions and per type."""

    positions = list(investments)
    summary = PortfolioSummary()

    for inv in positions:
        value = inv.current_value
        cost = inv.cost_basis
        summary.total_value += value
        summary.total_cost += cost

        bucket = summary.by_type.setdefault(inv.type, TypeBucket())
        bucket.value += value
        bucket.total_return += value - cost
        bucket.count += 1

    summary.total_return = summary.total_value - summary.total_cost
    if summary.total_cost != 0:
        summary.total_return_percentage = summary.total_return / summary.total_cost * 100

    ranked = rank_by_return(positions)
    summary.top_performers = ranked[:PERFORMER_COUNT]
    summary.worst_performers = ranked[-PERFORMER_COUNT:][::-1]
    return summary


def opening_event(investment: Investment, *, now: datetime | None = None) -> InvestmentEvent:
    """Initial ``buy`` entry recorded when a position is created."""

    return InvestmentEvent(
        occurred_at=now or datetime.now(timezone.utc),
        price=investment.purchase_price,
        action="buy",
        quantity=investment.quantity,
        amount=investment.purchase_price * investment.quantity,
    )


def apply_position_update(
    investment: Investment,
    changes: Mapping[str, Any],
    *,
    now: datetime | None = None,
) -> Optional[InvestmentEvent]:
    """Merge ``changes`` into ``investment``, recording a buy/sell event.

    An event is appended when the quantity or the current price changes: a
    ``buy`` when the quantity grew, otherwise a ``sell``, sized by the
    absolute quantity delta at the new (or existing) current price.
    """

    now = now or datetime.now(timezone.utc)
    new_quantity = float(changes.get("quantity", investment.quantity))
    new_price = changes.get("current_price")
    price = float(new_price) if new_price is not None else investment.current_price

    event: Optional[InvestmentEvent] = None
    quantity_changed = new_quantity != investment.quantity
    price_changed = new_price is not None and float(new_price) != investment.current_price
    if quantity_changed or price_changed:
        delta = abs(new_quantity - investment.quantity)
        event = InvestmentEvent(
            occurred_at=now,
            price=price,
            action="buy" if new_quantity > investment.quantity else "sell",
            quantity=delta,
            amount=delta * price,
        )
        investment.history.append(event)

    for key, value in changes.items():
        if key in MUTABLE_FIELDS:
            setattr(investment, key, value)
    if price_changed:
        investment.last_updated = now
    return event


def refresh_prices(
    investments: Iterable[Investment],
    quotes: QuoteSource,
    *,
    now: datetime | None = None,
) -> list[Investment]:
    """Best-effort price refresh for quoted types; returns updated positions.

    A failed lookup is logged and the stale price kept.
    """

    now = now or datetime.now(timezone.utc)
    updated: list[Investment] = []
    for inv in investments:
        if inv.type not in QUOTED_TYPES:
            continue
        try:
            price = quotes.get_quote(inv.symbol)
        except QuoteError as exc:
            logger.warning(
                "Price refresh failed",
                extra={"symbol": inv.symbol, "investment_id": inv.id, "reason": str(exc)},
            )
            continue
        inv.current_price = price
        inv.last_updated = now
        updated.append(inv)
    return updated


__all__ = [
    "PortfolioSummary",
    "TypeBucket",
    "apply_position_update",
    "opening_event",
    "rank_by_return",
    "refresh_prices",
    "summarize_portfolio",
]
