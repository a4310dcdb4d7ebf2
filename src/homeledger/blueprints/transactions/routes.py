"""Transaction routes; entries are immutable once recorded."""

from __future__ import annotations

from datetime import datetime, time, timezone
from typing import Annotated, Optional

from flask import jsonify, request
from pydantic import Field, ValidationError

from ...domain.repositories import TransactionRepository
from ...errors import NotFound, ValidationFailed
from ...infra.repositories import SQLModelTransactionRepository
from ...logging_config import get_logger
from ...models.transaction import TRANSACTION_TYPES, Transaction, TransactionType
from ...services.access import ensure_family_owns
from ..auth.guards import current_user, login_required
from ..common import json_body, session_factory
from ..forms import PayloadForm, Tags, UtcDatetime, parse_moment
from . import bp

logger = get_logger(__name__)


class TransactionForm(PayloadForm):
    amount: float
    type: TransactionType
    category: Annotated[str, Field(min_length=1, max_length=64)]
    description: str = Field(default="", max_length=255)
    date: Optional[UtcDatetime] = None
    is_shared: bool = False
    tags: Tags = Field(default_factory=list)


def transaction_to_dict(txn: Transaction) -> dict[str, object]:
    data = txn.model_dump(mode="json")
    data["tags"] = txn.tag_list
    return data


def _repo() -> TransactionRepository:
    return SQLModelTransactionRepository(session_factory())


def _query_bound(name: str, *, end: bool = False) -> Optional[datetime]:
    """Parse a date or timestamp query argument; a bare ``end`` date covers the whole day."""

    raw = request.args.get(name)
    if not raw:
        return None
    try:
        moment = parse_moment(raw)
    except ValidationError as exc:
        raise ValidationFailed(
            "Invalid filter", {name: ["Enter an ISO-8601 date or timestamp."]}
        ) from exc
    if end and len(raw.strip()) == 10:
        moment = datetime.combine(moment.date(), time.max)
    return moment


@bp.post("/")
@login_required
def create_transaction():
    user = current_user()
    data = TransactionForm.clean(json_body(), "Invalid transaction")
    if data.get("date") is None:
        data["date"] = datetime.now(timezone.utc).replace(tzinfo=None)
    txn = _repo().create(Transaction(user_id=user.id, family_id=user.family_id, **data))
    logger.info(
        "Transaction recorded",
        extra={"transaction_id": txn.id, "category": txn.category, "amount": txn.amount},
    )
    return jsonify(transaction_to_dict(txn)), 201


@bp.get("/")
@login_required
def list_transactions():
    """Family transactions, newest first, optionally filtered."""

    txn_type = request.args.get("type") or None
    if txn_type is not None and txn_type not in TRANSACTION_TYPES:
        raise ValidationFailed(
            "Invalid filter", {"type": [f"Must be one of: {', '.join(TRANSACTION_TYPES)}."]}
        )
    transactions = _repo().list_for_family(
        family_id=current_user().family_id,
        start=_query_bound("start"),
        end=_query_bound("end", end=True),
        category=request.args.get("category") or None,
        txn_type=txn_type,
    )
    return jsonify([transaction_to_dict(t) for t in transactions])


@bp.get("/<int:transaction_id>")
@login_required
def get_transaction(transaction_id: int):
    txn = _repo().get_by_id(transaction_id)
    if txn is None:
        raise NotFound("Transaction not found")
    ensure_family_owns(txn, current_user())
    return jsonify(transaction_to_dict(txn))
