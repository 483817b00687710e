"""Utilities for validating incoming Flask requests."""

from __future__ import annotations

from datetime import date
from typing import Iterable

from flask import Request
from werkzeug.exceptions import BadRequest

from errors import CODE_INVALID, ValidationError


def parse_json_request(
    req: Request,
    *,
    required_keys: Iterable[str] | None = None,
    allow_empty: bool = False,
) -> dict:
    """Return the parsed JSON body or raise a 400 error."""

    if not req.is_json:
        raise BadRequest("Request content type must be application/json.")

    data = req.get_json(silent=True)
    if data is None:
        raise BadRequest("Request JSON body is required.")

    if not isinstance(data, dict):
        raise BadRequest("Request JSON payload must be an object.")

    if not data and not allow_empty:
        raise BadRequest("Request JSON body must not be empty.")

    if required_keys:
        missing = [key for key in required_keys if key not in data]
        if missing:
            raise BadRequest(
                "Missing required fields: {}.".format(", ".join(sorted(missing)))
            )

    return data


def bearer_token(req: Request) -> str | None:
    """Return the token from an ``Authorization: Bearer`` header, if any."""

    header = req.headers.get("Authorization", "")
    scheme, _, token = header.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        return None
    return token.strip()


def parse_date(value, field: str = "birthday") -> date | None:
    """Parse an ISO ``YYYY-MM-DD`` string; ``None`` passes through."""

    if value is None:
        return None
    if not isinstance(value, str):
        raise ValidationError(field, CODE_INVALID)
    try:
        return date.fromisoformat(value.strip()[:10])
    except ValueError as exc:
        raise ValidationError(field, CODE_INVALID) from exc
