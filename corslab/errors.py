"""Application-wide error types and handlers."""

from __future__ import annotations

from typing import Any

from flask import Flask, jsonify


class APIError(Exception):
    """Base class for API-level errors."""

    status_code: int = 400

    def __init__(
        self, message: str, *, status_code: int | None = None, payload: dict[str, Any] | None = None
    ):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code
        self.payload = payload or {}


class NotFoundError(APIError):
    """Error raised when a named resource does not exist."""

    status_code = 404


DEFAULT_STATUS_MESSAGES: dict[int, str] = {
    400: "Request could not be processed.",
    404: "Resource not found.",
    422: "Submitted data is invalid.",
}


def register_error_handlers(app: Flask) -> None:
    """Attach error handlers to the Flask application."""

    @app.errorhandler(APIError)
    def handle_api_error(error: APIError):
        message = error.message or DEFAULT_STATUS_MESSAGES.get(error.status_code, "Request failed.")
        response: dict[str, Any] = {"message": message}
        response.update(error.payload)
        app.logger.info(
            "API error",
            extra={"event": "request.rejected", "status": error.status_code, "error": message},
        )
        return jsonify(response), error.status_code
