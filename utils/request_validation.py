"""Utilities for validating incoming Flask requests."""

from __future__ import annotations

from typing import TypeVar

from flask import Request
from pydantic import BaseModel, ValidationError
from werkzeug.exceptions import BadRequest

PayloadT = TypeVar("PayloadT", bound=BaseModel)


def parse_json_request(
    req: Request,
    *,
    allow_empty: bool = False,
) -> dict:
    """Return the parsed JSON body or raise a 400 error."""

    if not req.is_json:
        raise BadRequest("Request content type must be application/json.")

    data = req.get_json(silent=False)
    if data is None:
        raise BadRequest("Request JSON body is required.")

    if not isinstance(data, dict):
        raise BadRequest("Request JSON payload must be an object.")

    if not data and not allow_empty:
        raise BadRequest("Request JSON body must not be empty.")

    return data


def format_validation_error(error: ValidationError) -> str:
    """Flatten pydantic errors into a single human readable sentence."""

    messages = []
    for item in error.errors():
        location = ".".join(str(part) for part in item.get("loc", ()))
        message = item.get("msg", "is invalid")
        messages.append(f"{location}: {message}" if location else message)
    return "Validation error: {}.".format("; ".join(messages))


def validate_json_request(req: Request, schema: type[PayloadT]) -> PayloadT:
    """Parse the JSON body and validate it against ``schema`` or raise a 400 error."""

    payload = parse_json_request(req, allow_empty=True)
    try:
        return schema.model_validate(payload)
    except ValidationError as exc:
        raise BadRequest(format_validation_error(exc)) from exc
