"""Field validation for users and persons.

Every check returns ``None`` when the value is acceptable, or a
:class:`errors.ValidationError` describing the first problem found. The
functions never raise and never touch the database; uniqueness checks live
in the account service.
"""

from __future__ import annotations

import math
import re
from datetime import date

from errors import CODE_INVALID, CODE_LENGTH, CODE_REQUIRED, ValidationError
from models.person import GENDERS

USERNAME_MIN_LENGTH = 3
USERNAME_MAX_LENGTH = 30
EMAIL_MAX_LENGTH = 255
PASSWORD_MIN_LENGTH = 8
PASSWORD_MAX_LENGTH = 128
NAME_MAX_LENGTH = 64

HEIGHT_RANGE = (150.0, 230.0)
WEIGHT_RANGE = (30.0, 200.0)

_USERNAME_RE = re.compile(r"^[A-Za-z0-9_.-]+$")
_EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


def _check_text(
    value, field: str, min_length: int = 1, max_length: int | None = None
) -> ValidationError | None:
    if value is None or (isinstance(value, str) and not value.strip()):
        return ValidationError(field, CODE_REQUIRED)
    if not isinstance(value, str):
        return ValidationError(field, CODE_INVALID)
    if len(value) < min_length or (max_length is not None and len(value) > max_length):
        return ValidationError(field, CODE_LENGTH)
    return None


def validate_username(username) -> ValidationError | None:
    error = _check_text(username, "username", USERNAME_MIN_LENGTH, USERNAME_MAX_LENGTH)
    if error:
        return error
    if not _USERNAME_RE.match(username):
        return ValidationError("username", CODE_INVALID)
    return None


def validate_email(email) -> ValidationError | None:
    error = _check_text(email, "email", max_length=EMAIL_MAX_LENGTH)
    if error:
        return error
    if not _EMAIL_RE.match(email):
        return ValidationError("email", CODE_INVALID)
    return None


def validate_password(password) -> ValidationError | None:
    """Require a length between the bounds and at least one letter and digit."""

    error = _check_text(password, "password", PASSWORD_MIN_LENGTH, PASSWORD_MAX_LENGTH)
    if error:
        return error
    has_letter = any(ch.isalpha() for ch in password)
    has_digit = any(ch.isdigit() for ch in password)
    if not (has_letter and has_digit):
        return ValidationError("password", CODE_INVALID)
    return None


def validate_user(username, email, password=None) -> ValidationError | None:
    """Validate user fields; ``password`` is skipped when ``None``."""

    checks = [validate_username(username), validate_email(email)]
    if password is not None:
        checks.append(validate_password(password))
    return next((error for error in checks if error), None)


def validate_name(value, field: str) -> ValidationError | None:
    return _check_text(value, field, max_length=NAME_MAX_LENGTH)


def validate_gender(gender) -> ValidationError | None:
    if gender not in GENDERS:
        return ValidationError("gender", CODE_INVALID)
    return None


def _check_range(value, field: str, bounds: tuple[float, float]) -> ValidationError | None:
    # bool is an int subclass; reject it explicitly.
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return ValidationError(field, CODE_INVALID)
    low, high = bounds
    if isinstance(value, float) and not math.isfinite(value):
        return ValidationError(field, CODE_INVALID)
    if value < low or value > high:
        return ValidationError(field, CODE_INVALID)
    return None


def validate_height(height) -> ValidationError | None:
    return _check_range(height, "height", HEIGHT_RANGE)


def validate_weight(weight) -> ValidationError | None:
    return _check_range(weight, "weight", WEIGHT_RANGE)


def validate_birthday(birthday, today: date | None = None) -> ValidationError | None:
    if birthday is None:
        return ValidationError("birthday", CODE_REQUIRED)
    if not isinstance(birthday, date):
        return ValidationError("birthday", CODE_INVALID)
    if birthday > (today or date.today()):
        return ValidationError("birthday", CODE_INVALID)
    return None


def validate_measurements(gender, height, weight) -> ValidationError | None:
    """Check the enumerated and ranged person fields."""

    return validate_gender(gender) or validate_height(height) or validate_weight(weight)


def validate_person(
    first_name, last_name, gender, birthday, height, weight
) -> ValidationError | None:
    return (
        validate_measurements(gender, height, weight)
        or validate_name(first_name, "first_name")
        or validate_name(last_name, "last_name")
        or validate_birthday(birthday)
    )
