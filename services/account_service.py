"""Registration, login, email verification and password reset."""

from __future__ import annotations

from datetime import datetime, timedelta

from flask import current_app
from sqlalchemy import func
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from errors import (
    DuplicateError,
    InvalidCredentialsError,
    InvalidPinError,
    NotFoundError,
    ValidationError,
)
from models import PasswordResetPin, User, VerificationToken
from services import tokens
from services.notifications import NotificationDispatcher
from services.validation import validate_password, validate_user


def normalize_email(raw_email: str | None) -> str:
    """Normalize an email string by stripping whitespace and lowering case."""
    return (raw_email or "").strip().lower()


class AccountService:
    """Coordinates the account lifecycle on top of an injected session."""

    def __init__(
        self,
        session: Session,
        notifier: NotificationDispatcher,
        verification_lifetime: timedelta = timedelta(hours=24),
        pin_lifetime: timedelta = timedelta(hours=1),
    ):
        self.session = session
        self.notifier = notifier
        self.verification_lifetime = verification_lifetime
        self.pin_lifetime = pin_lifetime

    @classmethod
    def from_app(cls, session: Session) -> "AccountService":
        config = current_app.config
        return cls(
            session,
            current_app.extensions["notifications"],
            verification_lifetime=config["VERIFICATION_TOKEN_EXPIRES"],
            pin_lifetime=config["PASSWORD_RESET_PIN_EXPIRES"],
        )

    def _find_by_username(self, username: str) -> User | None:
        return self.session.query(User).filter(User.username == username).first()

    def _find_by_email(self, email: str) -> User | None:
        return (
            self.session.query(User)
            .filter(func.lower(User.email) == normalize_email(email))
            .first()
        )

    def _check_unique(self, username: str, email: str) -> None:
        if self._find_by_username(username) is not None:
            raise DuplicateError("username")
        if self._find_by_email(email) is not None:
            raise DuplicateError("email")

    def register(self, username: str, email: str, password: str) -> User:
        """Create a disabled user and queue its confirmation email."""

        error = validate_user(username, email, password)
        if error:
            raise error

        email = normalize_email(email)
        self._check_unique(username, email)

        user = User(username=username, email=email, enabled=False)
        user.set_password(password)
        token = VerificationToken.for_user(user, self.verification_lifetime)

        self.session.add(user)
        self.session.add(token)
        try:
            self.session.commit()
        except IntegrityError:
            # Lost a race against a concurrent registration.
            self.session.rollback()
            self._check_unique(username, email)
            raise

        current_app.logger.info(
            "Registered user %s, verification expires %s", user.username, token.expiry_date
        )
        self.notifier.send_confirmation(user, token)
        return user

    def login(self, username: str, password: str) -> str:
        """Return a session token for valid credentials."""

        user = self._find_by_username(username) if isinstance(username, str) else None
        valid = isinstance(password, str) and user is not None and user.check_password(password)
        if not valid:
            current_app.logger.info("Failed login for %r", username)
            raise InvalidCredentialsError()

        return tokens.issue(user.username)

    def verify(self, token_value: str, now: datetime | None = None) -> bool:
        """Enable the account owning ``token_value`` and consume the token."""

        token = (
            self.session.query(VerificationToken)
            .filter(VerificationToken.token == token_value)
            .first()
        )
        if token is None:
            return False
        if token.is_expired(now):
            current_app.logger.info(
                "Expired verification token for user_id=%s", token.user_id
            )
            return False

        user = token.user
        user.enable()
        self.session.delete(token)
        self.session.commit()
        current_app.logger.info("Verified user %s", user.username)
        return True

    def request_password_change(self, email: str) -> PasswordResetPin:
        """Issue a fresh reset pin for the account with ``email`` and mail it."""

        user = self._find_by_email(email) if isinstance(email, str) and email else None
        if user is None:
            raise NotFoundError("email", status=409)

        self.session.query(PasswordResetPin).filter(
            PasswordResetPin.user_id == user.id
        ).delete(synchronize_session=False)
        reset_pin = PasswordResetPin.for_user(user, self.pin_lifetime)
        self.session.add(reset_pin)
        self.session.commit()

        current_app.logger.info("Issued password reset pin for user %s", user.username)
        self.notifier.send_password_reset(user, reset_pin)
        return reset_pin

    def update_password(self, pin: str, new_password: str, now: datetime | None = None) -> User:
        """Replace the password of the user owning ``pin`` and consume the pin."""

        reset_pin = (
            self.session.query(PasswordResetPin)
            .filter(PasswordResetPin.pin == str(pin or "").strip().upper())
            .first()
        )
        if reset_pin is None or reset_pin.is_expired(now):
            raise InvalidPinError()

        error = validate_password(new_password)
        if error:
            raise ValidationError(error.field, error.code, status=409)

        user = reset_pin.user
        user.set_password(new_password)
        self.session.delete(reset_pin)
        self.session.commit()
        current_app.logger.info("Password updated for user %s", user.username)
        return user

    def purge_expired(self, now: datetime | None = None) -> tuple[int, int]:
        """Delete expired verification tokens and reset pins."""

        now = now or datetime.utcnow()
        token_count = (
            self.session.query(VerificationToken)
            .filter(VerificationToken.expiry_date < now)
            .delete(synchronize_session=False)
        )
        pin_count = (
            self.session.query(PasswordResetPin)
            .filter(PasswordResetPin.expiry_date < now)
            .delete(synchronize_session=False)
        )
        self.session.commit()
        return token_count, pin_count
