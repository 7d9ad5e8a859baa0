# bank_api/api/middlewares/error_handler.py
import logging

from flask import Flask, jsonify
from pydantic import ValidationError
from werkzeug.exceptions import HTTPException

from bank_api.core.exceptions import AppError, ValidationFailedError

logger = logging.getLogger(__name__)


def _pydantic_errors(err: ValidationError) -> list[str]:
    messages = []
    for item in err.errors():
        location = ".".join(str(part) for part in item.get("loc", ()))
        messages.append(f"{location}: {item.get('msg')}" if location else str(item.get("msg")))
    return messages


def register_error_handlers(app: Flask) -> None:
    @app.errorhandler(ValidationFailedError)
    def handle_validation_failed(err: ValidationFailedError):
        return jsonify({"message": str(err), "errors": err.errors}), err.status_code

    @app.errorhandler(AppError)
    def handle_app_error(err: AppError):
        return jsonify({"error": str(err)}), err.status_code

    @app.errorhandler(ValidationError)
    def handle_schema_error(err: ValidationError):
        return jsonify({"message": "Validation failed", "errors": _pydantic_errors(err)}), 400

    @app.errorhandler(HTTPException)
    def handle_http_exception(err: HTTPException):
        return jsonify({"error": err.description}), err.code

    @app.errorhandler(Exception)
    def handle_unexpected_error(err: Exception):
        logger.exception("Unhandled error")
        return jsonify({"error": "Internal server error"}), 500
