# bank_api/api/middlewares/request_body.py
from typing import Any

from flask import request

from bank_api.core.exceptions import UnprocessableEntityError


def json_object() -> dict[str, Any]:
    """Request body as a dict; anything but a JSON object is rejected with 422."""
    payload = request.get_json(silent=True)
    if not isinstance(payload, dict):
        raise UnprocessableEntityError("Request body must be a JSON object.")
    return payload
