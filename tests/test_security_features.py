"""Tests covering CORS, rate limiting, request ids and error payload shapes."""

from __future__ import annotations

from flask import Flask

from app import create_app
from config import Config
from models import db


class _SecurityBaseConfig(Config):
    TESTING = True
    SQLALCHEMY_DATABASE_URI = "sqlite:///:memory:"
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    JWT_SECRET_KEY = "test-jwt-secret-key-with-enough-length"
    MAIL_SUPPRESS_SEND = True


def _build_app(**overrides) -> Flask:
    class TestConfig(_SecurityBaseConfig):
        pass

    for key, value in overrides.items():
        setattr(TestConfig, key, value)

    app = create_app(TestConfig)
    with app.app_context():
        db.create_all()
    return app


def test_frontend_origin_may_call_login():
    app = _build_app(CORS_ORIGINS=["http://localhost:4200"])
    client = app.test_client()

    response = client.post(
        "/auth/login",
        json={"username": "ghost", "password": "Secret123"},
        headers={"Origin": "http://localhost:4200"},
    )

    assert response.status_code == 401
    assert response.headers.get("Access-Control-Allow-Origin") == "http://localhost:4200"
    assert response.headers.get("Access-Control-Allow-Credentials") == "true"


def test_service_error_keeps_code_field_shape_and_request_id():
    app = _build_app()
    client = app.test_client()

    response = client.get("/person", headers={"X-Request-ID": "req-123"})

    assert response.status_code == 401
    assert response.get_json() == {"code": 607, "field": "user"}
    assert response.headers["X-Request-ID"] == "req-123"


def test_service_error_gets_generated_request_id():
    app = _build_app()
    client = app.test_client()

    response = client.post(
        "/auth/register",
        json={"username": "alice", "email": "not-an-email", "password": "Secret123"},
    )

    assert response.status_code == 400
    assert response.get_json() == {"code": 604, "field": "email"}
    assert response.headers.get("X-Request-ID")


def test_repeated_login_attempts_are_rate_limited():
    app = _build_app(RATE_LIMIT="3 per minute")
    client = app.test_client()
    credentials = {"username": "alice", "password": "Wrong1234"}

    statuses = [client.post("/auth/login", json=credentials).status_code for _ in range(4)]

    assert statuses == [401, 401, 401, 429]
    payload = client.post("/auth/login", json=credentials).get_json()
    assert payload["error"] == "Too Many Requests"
    assert "request_id" in payload


def test_non_json_register_uses_http_error_shape():
    app = _build_app()
    client = app.test_client()

    response = client.post(
        "/auth/register",
        data="not-json",
        content_type="text/plain",
        headers={"X-Request-ID": "req-456"},
    )

    assert response.status_code == 400
    payload = response.get_json()
    assert payload["error"] == "Bad Request"
    assert "Request content type" in payload["detail"]
    assert payload["request_id"] == "req-456"
