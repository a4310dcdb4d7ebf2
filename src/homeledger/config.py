"""Application configuration objects and helpers."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

from dotenv import load_dotenv

load_dotenv()


def _env_bool(name: str, default: bool = False) -> bool:
    """Interpret environment variable values as booleans."""

    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


def _env_int(name: str, default: int) -> int:
    value = os.getenv(name)
    if value is None or not value.strip():
        return default
    try:
        return int(value)
    except ValueError as exc:
        raise ValueError(f"{name} must be an integer, got {value!r}.") from exc


def _env_float(name: str, default: float) -> float:
    value = os.getenv(name)
    if value is None or not value.strip():
        return default
    try:
        return float(value)
    except ValueError as exc:
        raise ValueError(f"{name} must be a number, got {value!r}.") from exc


class BaseConfig:
    """Base configuration shared across environments."""

    APP_NAME = "HomeLedger"
    DB_FILENAME = "homeledger.db"
    SQLITE_PRAGMAS = {"journal_mode": "wal", "foreign_keys": "on"}
    DEV_MODE_DEFAULT = False
    TESTING = False

    def __init__(self) -> None:
        self.SECRET_KEY = os.getenv("HOMELEDGER_SECRET_KEY", "replace-me")
        self.DEV_MODE = _env_bool("HOMELEDGER_DEV_MODE", default=self.DEV_MODE_DEFAULT)
        self.DATA_DIR = self._resolve_data_dir()
        self.DATABASE_URL = os.getenv("HOMELEDGER_DATABASE_URL", self._build_sqlite_url())
        self.TOKEN_MAX_AGE = _env_int("HOMELEDGER_TOKEN_MAX_AGE", 7 * 24 * 3600)
        self.UPCOMING_DAYS = _env_int("HOMELEDGER_UPCOMING_DAYS", 30)

        self.QUOTE_API_URL = os.getenv("HOMELEDGER_QUOTE_API_URL", "https://api.example.com/stocks")
        self.QUOTE_TIMEOUT = _env_float("HOMELEDGER_QUOTE_TIMEOUT", 10.0)

        self.MAIL_ENABLED = _env_bool("HOMELEDGER_MAIL_ENABLED", default=False)
        self.SMTP_HOST = os.getenv("HOMELEDGER_SMTP_HOST", "")
        self.SMTP_PORT = _env_int("HOMELEDGER_SMTP_PORT", 587)
        self.SMTP_USER = os.getenv("HOMELEDGER_SMTP_USER", "")
        self.SMTP_PASSWORD = os.getenv("HOMELEDGER_SMTP_PASSWORD", "")
        self.MAIL_FROM = os.getenv("HOMELEDGER_MAIL_FROM", self.SMTP_USER)

        if not self.DEV_MODE and not self.TESTING and self.SECRET_KEY == "replace-me":
            raise ValueError("HOMELEDGER_SECRET_KEY must be set in non-dev mode.")

    def _resolve_data_dir(self) -> Path:
        """Return the directory where the SQLite file and logs live."""

        data_root = os.getenv("HOMELEDGER_DATA_DIR", "instance")
        path = Path(data_root).expanduser().resolve()
        path.mkdir(parents=True, exist_ok=True)
        return path

    def _build_sqlite_url(self) -> str:
        db_path = self.DATA_DIR / self.DB_FILENAME
        return f"sqlite:///{db_path}"

    def sqlalchemy_engine_options(self) -> dict[str, Any]:
        """Expose engine kwargs for SQLModel to consume."""

        if self.DATABASE_URL.startswith("sqlite"):
            return {"connect_args": {"check_same_thread": False}}
        return {"pool_pre_ping": True}


class DevConfig(BaseConfig):
    """Development configuration using local SQLite."""

    DEBUG = True
    DEV_MODE_DEFAULT = True


class TestConfig(BaseConfig):
    """Configuration used by the test-suite; never sends mail."""

    TESTING = True
    DEV_MODE_DEFAULT = True

    def __init__(self) -> None:
        super().__init__()
        self.MAIL_ENABLED = False
