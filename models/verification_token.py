"""VerificationToken model definition."""

import uuid
from datetime import datetime, timedelta

from . import db


class VerificationToken(db.Model):
    """One-time token proving ownership of a newly registered email."""

    __tablename__ = "verification_tokens"

    id = db.Column(db.Integer, primary_key=True)
    token = db.Column(db.String(36), unique=True, nullable=False, index=True)
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
            "verification_tokens", lazy="dynamic", cascade="all, delete-orphan"
        ),
    )

    @classmethod
    def for_user(cls, user, lifetime: timedelta, now=None) -> "VerificationToken":
        """Build a random token for the user expiring after ``lifetime``."""

        now = now or datetime.utcnow()
        return cls(user=user, token=str(uuid.uuid4()), expiry_date=now + lifetime)

    def is_expired(self, now=None) -> bool:
        now = now or datetime.utcnow()
        return self.expiry_date < now

    def __repr__(self) -> str:
        return f"<VerificationToken user_id={self.user_id} expires={self.expiry_date}>"
