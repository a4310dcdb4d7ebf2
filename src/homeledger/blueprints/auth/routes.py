"""Registration and login routes."""

from __future__ import annotations

from typing import Annotated, Optional

from flask import jsonify
from pydantic import Field

from ...models.user import User
from ...services import auth as auth_service
from ..common import app_config, json_body, session_factory
from ..forms import PayloadForm
from . import bp
from .guards import current_user, login_required


class RegisterForm(PayloadForm):
    username: Annotated[str, Field(min_length=1, max_length=64)]
    password: Annotated[str, Field(min_length=1)]
    email: str = Field(default="", max_length=255)
    family_id: Optional[int] = Field(default=None, ge=1)
    family_name: Optional[str] = Field(default=None, max_length=80)


class LoginForm(PayloadForm):
    username: Annotated[str, Field(min_length=1)]
    password: Annotated[str, Field(min_length=1)]


def _user_to_dict(user: User) -> dict[str, object]:
    return {
        "id": user.id,
        "username": user.username,
        "email": user.email,
        "family_id": user.family_id,
    }


def _token_response(user: User, status: int = 200):
    config = app_config()
    token = auth_service.issue_token(
        user, secret_key=config.SECRET_KEY, expires_in=config.TOKEN_MAX_AGE
    )
    return jsonify({"token": token, "user": _user_to_dict(user)}), status


@bp.post("/register")
def register():
    """Create an account and return a bearer token."""

    data = RegisterForm.clean(json_body(), "Invalid registration")
    user = auth_service.register_user(
        username=data["username"],
        password=data["password"],
        email=data.get("email") or "",
        family_id=data.get("family_id"),
        family_name=data.get("family_name"),
        session_factory=session_factory(),
    )
    return _token_response(user, 201)


@bp.post("/login")
def login():
    data = LoginForm.clean(json_body(), "Invalid credentials")
    user = auth_service.authenticate(
        username=data["username"],
        password=data["password"],
        session_factory=session_factory(),
    )
    return _token_response(user)


@bp.get("/me")
@login_required
def me():
    return jsonify(_user_to_dict(current_user()))
