from __future__ import annotations

import logging
from functools import wraps
from typing import Any

from flask import jsonify, request, session

from ..core.exceptions import AuthenticationError, DomainError, ValidationError
from .serialization import to_json_value

logger = logging.getLogger(__name__)


def json_body() -> dict[str, Any]:
    data = request.get_json(silent=True)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValidationError("Request body must be a JSON object")
    return data


def json_list_body() -> list[Any]:
    data = request.get_json(silent=True)
    if not isinstance(data, list):
        raise ValidationError("Request body must be a JSON array")
    return data


def ok(payload: Any, status: int = 200):
    return jsonify(to_json_value(payload)), status


def error(message: str, status: int):
    return jsonify({"success": False, "message": message}), status


def login_required(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        if "user_id" not in session:
            return error(str(AuthenticationError("Please sign in to continue")), 401)
        return view(*args, **kwargs)

    return wrapper


def api_call(view):
    """Map domain errors to JSON responses; log anything unexpected."""

    @wraps(view)
    def wrapper(*args, **kwargs):
        try:
            return view(*args, **kwargs)
        except DomainError as e:
            return error(str(e), e.status_code)
        except Exception:
            logger.exception("Unhandled error in %s %s", request.method, request.path)
            return error("Internal server error", 500)

    return wrapper
