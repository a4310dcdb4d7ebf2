"""Investment routes and the portfolio summary."""

from __future__ import annotations

from flask import jsonify

from ...domain.repositories import InvestmentRepository
from ...errors import NotFound
from ...infra.repositories import SQLModelInvestmentRepository
from ...logging_config import get_logger
from ...models.investment import Investment
from ...models.user import User
from ...services import portfolio
from ...services.access import ensure_user_owns
from ..auth.guards import current_user, login_required
from ..common import json_body, quote_client, session_factory
from . import bp
from .forms import InvestmentForm, InvestmentUpdateForm

logger = get_logger(__name__)


def _repo() -> InvestmentRepository:
    return SQLModelInvestmentRepository(session_factory())


def investment_to_dict(inv: Investment) -> dict[str, object]:
    data = inv.model_dump(mode="json")
    data["tags"] = [tag for tag in inv.tags.split(",") if tag]
    data.update(
        current_value=inv.current_value,
        cost_basis=inv.cost_basis,
        total_return=inv.total_return,
        return_percentage=inv.return_percentage,
        history=[
            event.model_dump(mode="json", exclude={"investment_id"}) for event in inv.history
        ],
    )
    return data


def _brief(inv: Investment) -> dict[str, object]:
    return {
        "id": inv.id,
        "symbol": inv.symbol,
        "name": inv.name,
        "type": inv.type,
        "current_value": inv.current_value,
        "total_return": inv.total_return,
        "return_percentage": inv.return_percentage,
    }


def summary_to_dict(summary: portfolio.PortfolioSummary) -> dict[str, object]:
    return {
        "total_value": summary.total_value,
        "total_cost": summary.total_cost,
        "total_return": summary.total_return,
        "total_return_percentage": summary.total_return_percentage,
        "by_type": {
            name: {"value": b.value, "return": b.total_return, "count": b.count}
            for name, b in summary.by_type.items()
        },
        "top_performers": [_brief(inv) for inv in summary.top_performers],
        "worst_performers": [_brief(inv) for inv in summary.worst_performers],
    }


def _load_owned(repo: InvestmentRepository, investment_id: int, user: User) -> Investment:
    investment = repo.get_by_id(investment_id)
    if investment is None:
        raise NotFound("Investment not found")
    ensure_user_owns(investment, user)
    return investment


@bp.get("/")
@login_required
def list_investments():
    """The caller's positions with prices refreshed where a quote is available."""

    repo = _repo()
    investments = repo.list_for_user(user_id=current_user().id)
    updated = portfolio.refresh_prices(investments, quote_client())
    if updated:
        repo.save_all(updated)
    return jsonify([investment_to_dict(inv) for inv in investments])


@bp.post("/")
@login_required
def create_investment():
    user = current_user()
    data = InvestmentForm.clean(json_body(), "Invalid investment")
    for key in ("purchase_date", "current_price"):
        if data.get(key) is None:
            data.pop(key, None)

    investment = Investment(user_id=user.id, family_id=user.family_id, **data)
    investment.history.append(portfolio.opening_event(investment))
    investment = _repo().create(investment)
    logger.info(
        "Investment added",
        extra={"investment_id": investment.id, "symbol": investment.symbol},
    )
    return jsonify(investment_to_dict(investment)), 201


@bp.get("/portfolio")
@login_required
def portfolio_summary():
    investments = _repo().list_for_user(user_id=current_user().id)
    return jsonify(summary_to_dict(portfolio.summarize_portfolio(investments)))


@bp.put("/<int:investment_id>")
@login_required
def update_investment(investment_id: int):
    """Merge field changes, recording a buy or sell when the position moves."""

    repo = _repo()
    investment = _load_owned(repo, investment_id, current_user())
    changes = InvestmentUpdateForm.clean(json_body(), "Invalid investment update")
    if "current_price" in changes and changes["current_price"] is None:
        del changes["current_price"]
    portfolio.apply_position_update(investment, changes)
    return jsonify(investment_to_dict(repo.save(investment)))


@bp.delete("/<int:investment_id>")
@login_required
def delete_investment(investment_id: int):
    repo = _repo()
    _load_owned(repo, investment_id, current_user())
    repo.delete(investment_id)
    return jsonify({"message": "Investment removed"})
