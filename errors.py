"""Service-level errors rendered as ``{code, field}`` JSON payloads."""

from __future__ import annotations

from http import HTTPStatus

# Numeric error codes shared with the frontend.
CODE_REQUIRED = 601
CODE_DUPLICATE = 602
CODE_LENGTH = 603
CODE_INVALID = 604
CODE_BAD_LOGIN = 605
CODE_INVALID_PIN = 606
CODE_NOT_FOUND = 607


class ServiceError(Exception):
    """Base class for errors raised by the account and profile services."""

    status = HTTPStatus.BAD_REQUEST

    def __init__(self, code: int, field: str, status: int | None = None):
        super().__init__(f"{code}: {field}")
        self.code = code
        self.field = field
        if status is not None:
            self.status = status

    def to_dict(self) -> dict:
        return {"code": self.code, "field": self.field}


class ValidationError(ServiceError):
    """A field failed a structural or range check."""

    def __init__(self, field: str, code: int = CODE_INVALID, status: int | None = None):
        super().__init__(code, field, status)


class DuplicateError(ServiceError):
    """A unique value (username, email, person) already exists."""

    status = HTTPStatus.CONFLICT

    def __init__(self, field: str):
        super().__init__(CODE_DUPLICATE, field)


class InvalidCredentialsError(ServiceError):
    status = HTTPStatus.UNAUTHORIZED

    def __init__(self):
        super().__init__(CODE_BAD_LOGIN, "login")


class InvalidTokenError(ServiceError):
    """The session token is invalid, expired, or names a missing user."""

    status = HTTPStatus.UNAUTHORIZED

    def __init__(self):
        super().__init__(CODE_NOT_FOUND, "user")


class InvalidPinError(ServiceError):
    status = HTTPStatus.FORBIDDEN

    def __init__(self):
        super().__init__(CODE_INVALID_PIN, "pin")


class NotFoundError(ServiceError):
    status = HTTPStatus.NOT_FOUND

    def __init__(self, entity: str, status: int | None = None):
        super().__init__(CODE_NOT_FOUND, entity, status)
