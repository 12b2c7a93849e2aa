from __future__ import annotations

from functools import wraps
from typing import Any

from flask import jsonify, request

from ..core.exceptions import DomainError, ValidationError
from .logging_config import get_logger

logger = get_logger("http")


def envelope(status_code: int, message: str, data: Any = None):
    body = {"statusCode": status_code, "message": message}
    if data is not None:
        body["data"] = data
    return jsonify(body), status_code


def json_body() -> dict:
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        raise ValidationError("Request body must be a JSON object")
    return data


def api_errors(view):
    """Translate domain errors to their HTTP status; anything else becomes a 500."""

    @wraps(view)
    def wrapper(*args, **kwargs):
        try:
            return view(*args, **kwargs)
        except DomainError as e:
            return envelope(e.status_code, str(e))
        except Exception:
            logger.exception(
                "Unhandled error in %s", request.endpoint, extra={"path": request.path, "method": request.method}
            )
            return envelope(500, "Internal server error")

    return wrapper
