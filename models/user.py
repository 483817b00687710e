"""User model definition."""

from datetime import datetime

from services.passwords import hash_password, new_salt, verify_password

from . import db


class User(db.Model):
    """Represents an account that can log in and own a person record."""

    __tablename__ = "users"

    id = db.Column(db.Integer, primary_key=True)
    username = db.Column(db.String(30), unique=True, nullable=False)
    email = db.Column(db.String(255), unique=True, nullable=False)
    password_hash = db.Column(db.String(64), nullable=False)
    salt = db.Column(db.String(32), nullable=False)
    enabled = db.Column(
        db.Boolean,
        nullable=False,
        default=False,
        server_default=db.text("false"),
    )
    created_at = db.Column(db.DateTime, nullable=False, default=datetime.utcnow)
    person = db.relationship(
        "Person",
        back_populates="user",
        uselist=False,
        cascade="all, delete-orphan",
    )

    def set_password(self, password: str) -> None:
        """Hash the password with a fresh salt and store both."""

        self.salt = new_salt()
        self.password_hash = hash_password(password, self.salt)

    def check_password(self, password: str) -> bool:
        """Verify a password against the stored hash and salt."""

        if not self.password_hash or not self.salt:
            return False
        return verify_password(password, self.salt, self.password_hash)

    def enable(self) -> None:
        self.enabled = True

    def to_dict(self) -> dict:
        """Serialize the public fields of the user."""

        return {
            "id": self.id,
            "username": self.username,
            "email": self.email,
            "enabled": self.enabled,
        }

    def __repr__(self) -> str:  # pragma: no cover - debugging helper
        return f"<User {self.username}>"
