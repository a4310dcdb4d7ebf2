"""HomeLedger application factory."""

from __future__ import annotations

import time
from importlib import import_module
from typing import Iterable

from flask import Flask, g, jsonify, request

from .blueprints.common import MAILER_KEY, QUOTES_KEY
from .config import BaseConfig, DevConfig, TestConfig
from .errors import register_error_handlers
from .logging_config import get_logger, setup_logging
from .services.notifications import Mailer
from .services.quotes import QuoteClient

_CONFIG_MAP = {
    "development": DevConfig,
    "testing": TestConfig,
    "default": BaseConfig,
}

logger = get_logger(__name__)


def _resolve_config(name: str | None) -> type[BaseConfig]:
    """Return the config class for the provided environment name."""

    if not name:
        return BaseConfig
    return _CONFIG_MAP.get(name.lower(), BaseConfig)


def _blueprint_paths() -> Iterable[str]:
    yield "homeledger.blueprints.auth"
    yield "homeledger.blueprints.bills"
    yield "homeledger.blueprints.budget"
    yield "homeledger.blueprints.transactions"
    yield "homeledger.blueprints.investments"
    yield "homeledger.blueprints.accounts"


def create_app(config_name: str | None = None) -> Flask:
    """Create and configure the Flask application instance."""

    app = Flask(__name__)
    config_obj = _resolve_config(config_name)()
    app.config.from_object(config_obj)
    app.config["HOMELEDGER_CONFIG"] = config_obj

    setup_logging(config_obj)
    register_error_handlers(app)

    from .extensions import init_db

    init_db(app)

    app.extensions[QUOTES_KEY] = QuoteClient(
        config_obj.QUOTE_API_URL, timeout=config_obj.QUOTE_TIMEOUT
    )
    app.extensions[MAILER_KEY] = Mailer.from_config(config_obj)

    _register_blueprints(app)

    @app.get("/health")
    def health():
        return jsonify({"status": "ok"})

    _register_request_logging(app)

    from . import cli

    cli.init_app(app)
    logger.info(
        "Application ready",
        extra={"database": config_obj.DATABASE_URL.split("://")[0]},
    )
    return app


def _register_blueprints(app: Flask) -> None:
    """Import and register all blueprints declared in `_blueprint_paths`."""

    for dotted_path in _blueprint_paths():
        module = import_module(dotted_path)
        app.register_blueprint(getattr(module, "bp"))


def _register_request_logging(app: Flask) -> None:
    @app.before_request
    def _start_timer():
        g.request_started = time.perf_counter()

    @app.after_request
    def _log_request(response):
        started = g.get("request_started")
        elapsed_ms = (time.perf_counter() - started) * 1000 if started else None
        logger.info(
            "%s %s %s",
            request.method,
            request.path,
            response.status_code,
            extra={
                "method": request.method,
                "path": request.path,
                "status": response.status_code,
                "duration_ms": round(elapsed_ms, 2) if elapsed_ms is not None else None,
            },
        )
        return response


__all__ = ["BaseConfig", "DevConfig", "TestConfig", "create_app"]
