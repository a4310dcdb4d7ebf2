"""Bearer-token guard for API routes."""

from __future__ import annotations

from functools import wraps
from typing import Callable, TypeVar

from flask import g, request

from ...errors import Unauthorized
from ...models.user import User
from ...services import auth as auth_service
from ..common import app_config, session_factory

F = TypeVar("F", bound=Callable)


def _bearer_token() -> str:
    header = request.headers.get("Authorization", "")
    scheme, _, token = header.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        raise Unauthorized("No token, authorization denied")
    return token.strip()


def login_required(view: F) -> F:
    """Resolve the bearer token into ``g.current_user`` or answer 401."""

    @wraps(view)
    def wrapper(*args, **kwargs):
        config = app_config()
        user_id = auth_service.read_token(_bearer_token(), secret_key=config.SECRET_KEY)
        user = auth_service.get_user(user_id, session_factory=session_factory())
        if user is None:
            raise Unauthorized("Token is not valid")
        g.current_user = user
        return view(*args, **kwargs)

    return wrapper  # type: ignore[return-value]


def current_user() -> User:
    user = g.get("current_user")
    if user is None:  # pragma: no cover - only reachable without the guard
        raise Unauthorized("No token, authorization denied")
    return user
