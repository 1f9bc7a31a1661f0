"""JSON response helpers shared by error handlers."""

from __future__ import annotations

import uuid

from flask import Response, g, jsonify


def current_request_id() -> str:
    request_id = g.get("request_id")
    if not request_id:
        request_id = str(uuid.uuid4())
        g.request_id = request_id
    return request_id


def error_response(status_code: int, error: str, detail: str) -> Response:
    """Build the JSON error body used for every failed request."""

    request_id = current_request_id()
    response = jsonify({"error": error, "detail": detail, "request_id": request_id})
    response.status_code = status_code
    response.headers.setdefault("X-Request-ID", request_id)
    return response
