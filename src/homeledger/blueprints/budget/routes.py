"""Budget routes and the budget-vs-actual summary."""

from __future__ import annotations

from flask import jsonify

from ...domain.repositories import BudgetRepository
from ...errors import Conflict, NotFound, ValidationFailed
from ...infra.repositories import SQLModelBudgetRepository, SQLModelTransactionRepository
from ...logging_config import get_logger
from ...models.budget import Budget, BudgetCategory
from ...models.user import User
from ...services.access import ensure_family_owns
from ...services.budgeting import BudgetSummary, month_window, summarize
from ..auth.guards import current_user, login_required
from ..common import json_body, session_factory
from . import bp
from .forms import BudgetForm, BudgetUpdateForm

logger = get_logger(__name__)


def _repo() -> BudgetRepository:
    return SQLModelBudgetRepository(session_factory())


def budget_to_dict(budget: Budget) -> dict[str, object]:
    data = budget.model_dump(mode="json")
    data["categories"] = [
        {"name": cat.name, "limit": cat.limit} for cat in budget.categories
    ]
    return data


def summary_to_dict(summary: BudgetSummary) -> dict[str, object]:
    budget = summary.budget.model_dump(mode="json")
    budget["categories"] = [
        {
            "name": cat.name,
            "limit": cat.limit,
            "spent": cat.spent,
            "remaining": cat.remaining,
        }
        for cat in summary.categories
    ]
    return {
        "budget": budget,
        "total_spent": summary.total_spent,
        "spending_by_category": summary.spending_by_category,
    }


def _check_month(year: int, month: int) -> None:
    if not 1 <= month <= 12:
        raise ValidationFailed("Invalid month", {"month": ["Must be between 1 and 12."]})


def _load_owned(repo: BudgetRepository, budget_id: int, user: User) -> Budget:
    budget = repo.get_by_id(budget_id)
    if budget is None:
        raise NotFound("Budget not found")
    ensure_family_owns(budget, user)
    return budget


def _categories(rows: list[dict]) -> list[BudgetCategory]:
    return [BudgetCategory(name=row["name"], limit=row["limit"]) for row in rows]


@bp.post("/")
@login_required
def create_budget():
    """Create the family budget for a month; one per month."""

    user = current_user()
    data = BudgetForm.clean(json_body(), "Invalid budget")
    repo = _repo()
    if repo.get_for_month(data["year"], data["month"], family_id=user.family_id):
        raise Conflict("Budget already exists for this month")

    budget = Budget(
        family_id=user.family_id,
        year=data["year"],
        month=data["month"],
        total_budget=data["total_budget"],
    )
    for position, category in enumerate(_categories(data.get("categories", []))):
        category.position = position
        budget.categories.append(category)
    budget = repo.create(budget)
    logger.info(
        "Budget created",
        extra={"budget_id": budget.id, "year": budget.year, "month": budget.month},
    )
    return jsonify(budget_to_dict(budget)), 201


@bp.get("/<int:year>/<int:month>")
@login_required
def get_budget(year: int, month: int):
    _check_month(year, month)
    budget = _repo().get_for_month(year, month, family_id=current_user().family_id)
    if budget is None:
        raise NotFound("Budget not found")
    return jsonify(budget_to_dict(budget))


@bp.put("/<int:budget_id>")
@login_required
def update_budget(budget_id: int):
    repo = _repo()
    _load_owned(repo, budget_id, current_user())
    data = BudgetUpdateForm.clean(json_body(), "Invalid budget update")
    categories = data.get("categories")
    budget = repo.update(
        budget_id,
        total_budget=data.get("total_budget"),
        categories=_categories(categories) if categories is not None else None,
    )
    return jsonify(budget_to_dict(budget))


@bp.delete("/<int:budget_id>")
@login_required
def delete_budget(budget_id: int):
    repo = _repo()
    _load_owned(repo, budget_id, current_user())
    repo.delete(budget_id)
    return jsonify({"message": "Budget removed"})


@bp.get("/summary/<int:year>/<int:month>")
@login_required
def budget_summary(year: int, month: int):
    """Budget limits next to the month's actual spending per category."""

    _check_month(year, month)
    user = current_user()
    budget = _repo().get_for_month(year, month, family_id=user.family_id)
    if budget is None:
        raise NotFound("Budget not found")

    start, end = month_window(year, month)
    transactions = SQLModelTransactionRepository(session_factory()).list_for_family(
        family_id=user.family_id, start=start, end=end
    )
    return jsonify(summary_to_dict(summarize(budget, transactions)))
