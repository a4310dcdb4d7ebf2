"""Request helpers shared by the API blueprints."""

from __future__ import annotations

from typing import Any, Mapping

from flask import current_app, request

from ..config import BaseConfig
from ..errors import ValidationFailed
from ..extensions import get_session_factory
from ..infra.database import SessionFactory

QUOTES_KEY = "homeledger.quotes"
MAILER_KEY = "homeledger.mailer"


def json_body() -> Mapping[str, Any]:
    """Return the JSON object posted with the request."""

    payload = request.get_json(silent=True)
    if payload is None:
        raise ValidationFailed("Request body must be JSON")
    if not isinstance(payload, dict):
        raise ValidationFailed("Request body must be a JSON object")
    return payload


def app_config() -> BaseConfig:
    return current_app.config["HOMELEDGER_CONFIG"]


def session_factory() -> SessionFactory:
    return get_session_factory()


def quote_client():
    """Price-quote collaborator registered on the app."""

    return current_app.extensions[QUOTES_KEY]


def mailer():
    """Mail collaborator registered on the app."""

    return current_app.extensions[MAILER_KEY]
