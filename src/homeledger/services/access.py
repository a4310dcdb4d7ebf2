"""Ownership checks shared by the API handlers."""

from __future__ import annotations

from typing import Protocol

from ..errors import Unauthorized
from ..models.user import User


class UserOwned(Protocol):
    user_id: int


class FamilyOwned(Protocol):
    family_id: int


def ensure_user_owns(record: UserOwned, user: User) -> None:
    """Raise ``Unauthorized`` unless ``user`` owns ``record``."""

    if record.user_id != user.id:
        raise Unauthorized("Not authorized")


def ensure_family_owns(record: FamilyOwned, user: User) -> None:
    """Raise ``Unauthorized`` unless ``record`` belongs to the user's family."""

    if record.family_id != user.family_id:
        raise Unauthorized("Not authorized")
