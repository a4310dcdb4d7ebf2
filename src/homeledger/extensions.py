"""Database wiring for the Flask application."""

from __future__ import annotations

from contextlib import contextmanager
from typing import Iterator

from flask import Flask, current_app
from sqlmodel import Session

from .config import BaseConfig
from .infra.database import SessionFactory, create_db_engine, create_session_factory, init_database

_EXTENSION_KEY = "homeledger.db"


def init_db(app: Flask) -> None:
    """Create the engine, schema and session factory for ``app``."""

    config: BaseConfig = app.config["HOMELEDGER_CONFIG"]
    engine = create_db_engine(config)
    init_database(engine)
    app.extensions[_EXTENSION_KEY] = {
        "engine": engine,
        "session_factory": create_session_factory(engine),
    }


def get_session_factory() -> SessionFactory:
    """Return the unit-of-work session factory bound to the current app."""

    state = current_app.extensions.get(_EXTENSION_KEY)
    if state is None:  # pragma: no cover - misconfiguration
        raise RuntimeError("Database engine not initialized")
    return state["session_factory"]


@contextmanager
def session_scope() -> Iterator[Session]:
    """Provide a transactional scope around operations."""

    with get_session_factory()() as session:
        yield session
