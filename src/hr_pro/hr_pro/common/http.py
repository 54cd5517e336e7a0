from __future__ import annotations

import logging
from functools import wraps
from typing import Any, Optional

from flask import current_app, jsonify, request

from ..core.exceptions import NotFoundError, ValidationError

logger = logging.getLogger(__name__)


def error_response(error: str, status: int, *, message: Optional[str] = None, **extra: Any):
    body: dict = {"error": error}
    if message:
        body["message"] = message
    body.update(extra)
    return jsonify(body), status


def server_error(error: str, exc: Optional[BaseException] = None):
    # The underlying message is only exposed while debugging.
    detail = str(exc) if exc is not None and current_app.config.get("DEBUG") else None
    return error_response(error, 500, message=detail)


def json_body() -> dict:
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        return {}
    return data


def handles_errors(failure_message: str):
    """Map domain exceptions raised by a view to JSON error responses.

    NotFoundError -> 404, ValidationError (incl. conflicts) -> 400,
    anything else -> 500 with ``failure_message``.
    """

    def decorator(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            try:
                return view(*args, **kwargs)
            except NotFoundError as e:
                return error_response(str(e), 404)
            except ValidationError as e:
                return error_response(str(e), 400)
            except Exception as e:
                logger.exception("%s (%s %s)", failure_message, request.method, request.path)
                return server_error(failure_message, e)

        return wrapper

    return decorator
