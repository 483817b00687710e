"""Database initialization and model exports."""

from flask_sqlalchemy import SQLAlchemy


db = SQLAlchemy()

# Import models to register them with SQLAlchemy metadata.
from .user import User  # noqa: E402,F401
from .person import Person  # noqa: E402,F401
from .verification_token import VerificationToken  # noqa: E402,F401
from .password_reset_pin import PasswordResetPin  # noqa: E402,F401

__all__ = [
    "db",
    "User",
    "Person",
    "VerificationToken",
    "PasswordResetPin",
]
