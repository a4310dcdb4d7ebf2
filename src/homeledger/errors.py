"""Typed failures raised by engines and handlers, and their JSON rendering."""

from __future__ import annotations

from typing import Mapping, Sequence

from flask import Flask, jsonify
from werkzeug.exceptions import HTTPException

from .logging_config import get_logger

logger = get_logger(__name__)


class HomeLedgerError(Exception):
    """Base class for failures that map onto an HTTP status."""

    status_code = 500

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def to_dict(self) -> dict[str, object]:
        return {"message": self.message}


class NotFound(HomeLedgerError):
    """No record matches the requested key."""

    status_code = 404


class Unauthorized(HomeLedgerError):
    """Caller identity is missing or does not own the record."""

    status_code = 401


class ValidationFailed(HomeLedgerError):
    """Malformed input: missing field, bad number, or value outside an enum."""

    status_code = 400

    def __init__(
        self,
        message: str = "Validation failed",
        errors: Mapping[str, Sequence[str]] | None = None,
    ) -> None:
        super().__init__(message)
        self.errors = {field: list(msgs) for field, msgs in (errors or {}).items()}

    def to_dict(self) -> dict[str, object]:
        payload = super().to_dict()
        if self.errors:
            payload["errors"] = self.errors
        return payload


class Conflict(HomeLedgerError):
    """A record with the same unique key already exists."""

    status_code = 409


class UpstreamFailure(HomeLedgerError):
    """An outbound collaborator (mail relay) refused the request."""

    status_code = 502


def register_error_handlers(app: Flask) -> None:
    """Render typed failures, HTTP errors and crashes as JSON."""

    @app.errorhandler(HomeLedgerError)
    def _handle_domain_error(exc: HomeLedgerError):
        logger.info(
            "Request failed",
            extra={"error": type(exc).__name__, "status": exc.status_code, "detail": exc.message},
        )
        return jsonify(exc.to_dict()), exc.status_code

    @app.errorhandler(HTTPException)
    def _handle_http_error(exc: HTTPException):
        return jsonify({"message": exc.description or exc.name}), exc.code or 500

    @app.errorhandler(Exception)
    def _handle_unexpected(exc: Exception):
        logger.exception("Unhandled error while serving request")
        return jsonify({"message": "Server error"}), 500
