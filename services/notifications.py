"""Outbound mail sent from a bounded worker pool."""

from __future__ import annotations

import smtplib
from concurrent.futures import Future, ThreadPoolExecutor, wait
from dataclasses import dataclass
from email.message import EmailMessage
from threading import Lock

from flask import Flask


@dataclass(frozen=True)
class MailMessage:
    recipient: str
    subject: str
    body: str


class SmtpTransport:
    """Deliver messages through an SMTP relay."""

    def __init__(
        self,
        host: str,
        port: int,
        sender: str,
        username: str | None = None,
        password: str | None = None,
        use_tls: bool = True,
    ):
        self.host = host
        self.port = port
        self.sender = sender
        self.username = username
        self.password = password
        self.use_tls = use_tls

    @classmethod
    def from_config(cls, config) -> "SmtpTransport":
        return cls(
            host=config.get("MAIL_SERVER", "localhost"),
            port=int(config.get("MAIL_PORT", 587)),
            sender=config.get("MAIL_DEFAULT_SENDER", "no-reply@localhost"),
            username=config.get("MAIL_USERNAME"),
            password=config.get("MAIL_PASSWORD"),
            use_tls=bool(config.get("MAIL_USE_TLS", True)),
        )

    def send(self, message: MailMessage) -> None:
        email = EmailMessage()
        email["From"] = self.sender
        email["To"] = message.recipient
        email["Subject"] = message.subject
        email.set_content(message.body)

        with smtplib.SMTP(self.host, self.port, timeout=30) as server:
            if self.use_tls:
                server.starttls()
            if self.username and self.password:
                server.login(self.username, self.password)
            server.send_message(email)


class NotificationDispatcher:
    """Hand mail to a fixed-size thread pool so requests never wait on SMTP.

    Messages are rendered on the calling thread; the worker only needs the
    transport, so no application context is required in the pool. Failures
    are logged in the worker and left on the returned future.
    """

    def __init__(self, app: Flask | None = None):
        self.transport = None
        self.suppress_send = False
        self.frontend_url = ""
        self.api_base_url = ""
        self.logger = None
        self._executor: ThreadPoolExecutor | None = None
        self._pending: set[Future] = set()
        self._lock = Lock()
        if app is not None:
            self.init_app(app)

    def init_app(self, app: Flask) -> None:
        self.transport = SmtpTransport.from_config(app.config)
        self.suppress_send = bool(app.config.get("MAIL_SUPPRESS_SEND", False))
        self.frontend_url = app.config.get("FRONTEND_URL", "").rstrip("/")
        self.api_base_url = app.config.get("API_BASE_URL", "").rstrip("/")
        self.logger = app.logger
        self._executor = ThreadPoolExecutor(
            max_workers=int(app.config.get("MAIL_WORKERS", 10)),
            thread_name_prefix="mail",
        )
        app.extensions["notifications"] = self

    def send_confirmation(self, user, token) -> Future:
        """Queue the email containing the account verification link."""

        link = f"{self.api_base_url}/auth/verify/{token.token}"
        body = (
            f"Hello {user.username},\n\n"
            "please confirm your email address by opening the link below:\n\n"
            f"{link}\n\n"
            f"The link expires on {token.expiry_date:%Y-%m-%d %H:%M} UTC.\n"
        )
        return self.dispatch(MailMessage(user.email, "Confirm your account", body))

    def send_password_reset(self, user, reset_pin) -> Future:
        """Queue the email carrying a password reset pin."""

        body = (
            f"Hello {user.username},\n\n"
            f"your password reset pin is: {reset_pin.pin}\n\n"
            f"Enter it at {self.frontend_url}/reset-password before "
            f"{reset_pin.expiry_date:%Y-%m-%d %H:%M} UTC.\n"
            "If you did not request a new password, ignore this email.\n"
        )
        return self.dispatch(MailMessage(user.email, "Reset your password", body))

    def dispatch(self, message: MailMessage) -> Future:
        if self._executor is None:
            raise RuntimeError("NotificationDispatcher is not initialised.")

        future = self._executor.submit(self._deliver, message)
        with self._lock:
            self._pending.add(future)
        future.add_done_callback(self._forget)
        return future

    def join(self, timeout: float | None = None) -> None:
        """Block until every queued message has been handled."""

        with self._lock:
            pending = set(self._pending)
        if pending:
            wait(pending, timeout=timeout)

    def shutdown(self) -> None:
        if self._executor is not None:
            self._executor.shutdown(wait=True)

    def _deliver(self, message: MailMessage) -> None:
        if self.suppress_send:
            self.logger.info("Mail suppressed to %s: %s", message.recipient, message.subject)
            return
        try:
            self.transport.send(message)
        except Exception:
            self.logger.exception(
                "Failed to send '%s' to %s", message.subject, message.recipient
            )
            raise
        self.logger.info("Sent '%s' to %s", message.subject, message.recipient)

    def _forget(self, future: Future) -> None:
        with self._lock:
            self._pending.discard(future)
