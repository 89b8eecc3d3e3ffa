"""Error taxonomy and the Flask handlers that turn it into JSON responses."""

from __future__ import annotations

from flask import current_app, jsonify
from werkzeug.exceptions import HTTPException

from common.extensions import db


class ValidationError(ValueError):
    """A payload broke one or more field constraints."""

    def __init__(self, message: str, details: list[dict] | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or []


class ConflictError(ValueError):
    """A reservation overlaps an existing one on the same catway."""


class NotFoundError(LookupError):
    """A keyed operation targeted a record that does not exist."""


class ForbiddenError(Exception):
    """Credentials were presented but rejected."""


class StorageError(RuntimeError):
    """The persistence layer failed for a reason the client cannot fix."""


def _message(e: Exception) -> str:
    return str(e.args[0]) if e.args else e.__class__.__name__


# install JSON error handlers on the given app
def register_error_handlers(app):
    @app.errorhandler(ValidationError)
    def handle_validation(e: ValidationError):
        current_app.logger.warning(f"Validation error: {e.message}")
        body = {"message": e.message}
        if e.details:
            body["details"] = e.details
        return jsonify(body), 400

    @app.errorhandler(ConflictError)
    def handle_conflict(e: ConflictError):
        current_app.logger.warning(f"Conflict: {e}")
        return jsonify({"message": _message(e)}), 400

    @app.errorhandler(NotFoundError)
    def handle_not_found(e: NotFoundError):
        current_app.logger.warning(f"Not found: {e}")
        return jsonify({"message": _message(e)}), 404

    @app.errorhandler(ForbiddenError)
    def handle_forbidden(e: ForbiddenError):
        current_app.logger.warning(f"Forbidden: {e}")
        return jsonify({"message": _message(e)}), 403

    @app.errorhandler(StorageError)
    def handle_storage(e: StorageError):
        current_app.logger.error(f"Storage error: {e}", exc_info=True)
        db.session.rollback()
        return jsonify({"message": "Storage error"}), 500

    @app.errorhandler(HTTPException)
    def handle_http(e: HTTPException):
        return jsonify({"message": e.description}), e.code

    @app.errorhandler(Exception)
    def handle_unexpected(e: Exception):
        current_app.logger.error(f"Internal error: {e}", exc_info=True)
        db.session.rollback()
        return jsonify({"message": "Internal server error"}), 500
