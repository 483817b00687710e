"""PasswordResetPin model definition."""

import secrets
import string
from datetime import datetime, timedelta

from . import db


PIN_LENGTH = 8
PIN_ALPHABET = string.ascii_uppercase + string.digits


def generate_pin(length: int = PIN_LENGTH) -> str:
    return "".join(secrets.choice(PIN_ALPHABET) for _ in range(length))


class PasswordResetPin(db.Model):
    """One-time pin authorizing a single password change."""

    __tablename__ = "password_reset_pins"

    id = db.Column(db.Integer, primary_key=True)
    pin = db.Column(db.String(PIN_LENGTH), unique=True, nullable=False, index=True)
    expiry_date = db.Column(db.DateTime, nullable=False)
    user_id = db.Column(
        db.Integer,
        db.ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    user = db.relationship(
        "User",
        backref=db.backref(
            "reset_pins", lazy="dynamic", cascade="all, delete-orphan"
        ),
    )

    @classmethod
    def for_user(cls, user, lifetime: timedelta, now=None) -> "PasswordResetPin":
        now = now or datetime.utcnow()
        return cls(user=user, pin=generate_pin(), expiry_date=now + lifetime)

    def is_expired(self, now=None) -> bool:
        now = now or datetime.utcnow()
        return self.expiry_date < now

    def __repr__(self) -> str:
        return f"<PasswordResetPin user_id={self.user_id} expires={self.expiry_date}>"
