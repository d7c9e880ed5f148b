"""
JSON error responses for the HTTP API.

Service errors keep their own message and status. Werkzeug HTTP errors
are mapped to a fixed message so internals never leak to clients.
"""

from flask import Flask, jsonify
from werkzeug.exceptions import HTTPException

from bidroom.logger import get_logger
from bidroom.services.base import ServiceError

logger = get_logger(__name__)

HTTP_ERROR_MESSAGES = {
    400: 'Bad request',
    404: 'Resource not found',
    405: 'Method not allowed',
    429: 'Too many requests. Please try again later.',
    500: 'An internal error occurred',
}


def register_error_handlers(app: Flask) -> None:
    """Register the JSON error handlers with the Flask app."""

    @app.errorhandler(ServiceError)
    def handle_service_error(error: ServiceError):
        if error.status_code >= 500:
            logger.error(f"Service error: {error.message}")
        else:
            logger.warning(f"Service error ({error.status_code}): {error.message}")
        return jsonify(error.to_dict()), error.status_code

    def handle_http_error(error: HTTPException):
        code = error.code or 500
        if code >= 500:
            logger.error(f"Internal server error: {error}", exc_info=True)
        return jsonify({
            'success': False,
            'error': HTTP_ERROR_MESSAGES.get(code, error.name)
        }), code

    for code in HTTP_ERROR_MESSAGES:
        app.register_error_handler(code, handle_http_error)
