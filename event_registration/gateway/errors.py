"""
JSON error responses shared by every blueprint, plus app-level handlers
for errors Flask raises itself (unknown route, wrong method, crashes).
"""

import logging
import traceback
from typing import Any, Dict, Optional, Tuple

from flask import Flask, Response, current_app, jsonify
from werkzeug.exceptions import HTTPException


def error_response(
    message: str,
    status: int,
    exc: Optional[BaseException] = None,
    include_stack: bool = False,
) -> Tuple[Response, int]:
    """
    Build a JSON error response.

    Args:
        message (str): Human-readable error for the client.
        status (int): HTTP status code.
        exc (Exception, optional): Underlying failure. Its message is added
            as `details` when EXPOSE_ERROR_DETAILS is on.
        include_stack (bool): Also add the formatted traceback as `stack`
            (only when details are exposed).

    Returns:
        tuple: (JSON response, status code)
    """
    body: Dict[str, Any] = {"error": message}

    if exc is not None and current_app.config.get("EXPOSE_ERROR_DETAILS", False):
        body["details"] = str(exc)
        if include_stack:
            body["stack"] = "".join(
                traceback.format_exception(type(exc), exc, exc.__traceback__)
            )

    return jsonify(body), status


def register_error_handlers(app: Flask) -> None:
    """Register JSON handlers for HTTP errors and uncaught exceptions."""

    @app.errorhandler(HTTPException)
    def http_error(error: HTTPException) -> Tuple[Response, int]:
        return jsonify({"error": error.description}), error.code

    @app.errorhandler(Exception)
    def internal_error(error: Exception) -> Tuple[Response, int]:
        logging.exception(f"Unhandled error: {error}")
        return jsonify({"error": "Internal Server Error"}), 500
