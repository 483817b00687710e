"""Signed session tokens bound to a username subject."""

from __future__ import annotations

from flask import current_app
from flask_jwt_extended import create_access_token, decode_token
from flask_jwt_extended.exceptions import JWTExtendedException
from jwt.exceptions import PyJWTError


def issue(username: str) -> str:
    """Return a signed access token whose subject is ``username``."""

    return create_access_token(identity=username)


def check_subject(token: str | None) -> str | None:
    """Return the token subject, or ``None`` if the token cannot be trusted."""

    if not token:
        return None
    try:
        claims = decode_token(token)
    except (PyJWTError, JWTExtendedException) as exc:
        current_app.logger.info("Rejected session token: %s", exc.__class__.__name__)
        return None

    subject = claims.get(current_app.config.get("JWT_IDENTITY_CLAIM", "sub"))
    if not isinstance(subject, str) or not subject:
        return None
    return subject
