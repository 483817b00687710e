"""Shared pytest fixtures for the application tests."""

from __future__ import annotations

import sys
from pathlib import Path

import pytest
from flask import Flask
from flask.testing import FlaskClient

ROOT_DIR = Path(__file__).resolve().parent.parent
if str(ROOT_DIR) not in sys.path:
    sys.path.insert(0, str(ROOT_DIR))

from app import create_app  # noqa: E402
from config import Config  # noqa: E402
from models import db  # noqa: E402


class _BaseTestConfig(Config):
    TESTING = True
    SQLALCHEMY_DATABASE_URI = "sqlite:///:memory:"
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    JWT_SECRET_KEY = "test-jwt-secret-key-with-enough-length"
    RATE_LIMIT = "1000 per minute"
    MAIL_SUPPRESS_SEND = True
    MAIL_WORKERS = 2
    FRONTEND_URL = "http://frontend.test"
    API_BASE_URL = "http://api.test"


class RecordingTransport:
    """Mail transport that keeps messages in memory."""

    def __init__(self):
        self.messages = []

    def send(self, message) -> None:
        self.messages.append(message)


@pytest.fixture()
def app() -> Flask:
    """Create a Flask application instance for tests."""

    application = create_app(_BaseTestConfig)

    with application.app_context():
        db.create_all()

    yield application

    application.extensions["notifications"].shutdown()
    with application.app_context():
        db.session.remove()
        db.drop_all()


@pytest.fixture()
def client(app: Flask) -> FlaskClient:
    """Return a test client for the Flask app."""

    return app.test_client()


@pytest.fixture()
def outbox(app: Flask) -> RecordingTransport:
    """Route outgoing mail into a list instead of SMTP."""

    dispatcher = app.extensions["notifications"]
    transport = RecordingTransport()
    dispatcher.transport = transport
    dispatcher.suppress_send = False
    return transport
