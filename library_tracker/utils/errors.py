"""Error taxonomy shared by services and the HTTP layer.

Services raise these; the handlers registered by ``register_error_handlers``
turn them into ``{"error": "..."}`` responses. Anything else is treated as an
infrastructure failure: rolled back, logged with its traceback and answered
with a generic 500.
"""
from flask import jsonify, request
from werkzeug.exceptions import HTTPException

from library_tracker.extensions import db


class ServiceError(ValueError):
    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(ServiceError):
    """Missing or malformed input, caught before any write."""
    status_code = 400


class NotFoundError(ServiceError):
    status_code = 404


class BusinessRuleError(ServiceError):
    status_code = 400


class InsufficientStockError(BusinessRuleError):
    pass


class NotBorrowedError(BusinessRuleError):
    pass


class OverReturnError(BusinessRuleError):
    pass


class ConflictError(BusinessRuleError):
    """Delete blocked because copies are still out on loan."""


def register_error_handlers(app):
    @app.errorhandler(ServiceError)
    def _service_error(exc: ServiceError):
        return jsonify({"error": exc.message}), exc.status_code

    @app.errorhandler(HTTPException)
    def _http_error(exc: HTTPException):
        return jsonify({"error": exc.description or exc.name}), exc.code

    @app.errorhandler(Exception)
    def _unexpected_error(exc: Exception):
        db.session.rollback()
        app.logger.exception("Unhandled error on %s %s", request.method, request.path)
        return jsonify({"error": "Internal server error"}), 500
