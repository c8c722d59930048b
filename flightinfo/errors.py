"""
JSON error handlers.

Every failure leaves the API as an envelope:
- pydantic ValidationError  -> 400 {success, message: 'Validation failed', errors}
- werkzeug HTTPException    -> its own status, {success, data, message}
- anything else             -> 500 {success, data, message: <exception text>}
"""

import logging

from flask import Flask, jsonify
from pydantic import ValidationError
from werkzeug.exceptions import HTTPException

from flightinfo.schemas import ApiResponse, ValidationErrorResponse

logger = logging.getLogger(__name__)


def register_error_handlers(app: Flask) -> None:
    """Install the JSON error handlers on the application."""

    @app.errorhandler(ValidationError)
    def validation_failed(e: ValidationError):
        body = ValidationErrorResponse.from_validation_error(e)
        logger.info(f'Request validation failed: {sorted(body.errors)}')
        return jsonify(body.model_dump(mode='json', by_alias=True)), 400

    @app.errorhandler(HTTPException)
    def http_error(e: HTTPException):
        body = ApiResponse(success=False, message=e.description)
        return jsonify(body.model_dump(mode='json', by_alias=True)), e.code

    @app.errorhandler(Exception)
    def server_error(e: Exception):
        logger.exception('An unhandled exception has occurred.')
        body = ApiResponse(success=False, message=str(e))
        return jsonify(body.model_dump(mode='json', by_alias=True)), 500
