"""Tests for the password reset pin flow."""

from __future__ import annotations

from datetime import datetime, timedelta

from models import db
from models.password_reset_pin import PasswordResetPin
from models.user import User


def _create_user(username: str, email: str, password: str) -> User:
    user = User(username=username, email=email)
    user.set_password(password)
    db.session.add(user)
    db.session.commit()
    return user


def _pin_for(app, username: str) -> str:
    with app.app_context():
        user = User.query.filter_by(username=username).one()
        return user.reset_pins.one().pin


def test_request_password_change_mails_pin(app, client, outbox):
    with app.app_context():
        _create_user("alice", "a@x.com", "Secret123")

    response = client.post("/auth/requestPasswordChange", json={"email": "a@x.com"})
    assert response.status_code == 200

    app.extensions["notifications"].join(timeout=5)
    pin = _pin_for(app, "alice")
    assert len(pin) == 8
    assert len(outbox.messages) == 1
    assert pin in outbox.messages[0].body


def test_request_password_change_unknown_email(client):
    response = client.post("/auth/requestPasswordChange", json={"email": "nobody@x.com"})

    assert response.status_code == 409
    assert response.get_json() == {"code": 607, "field": "email"}


def test_new_request_replaces_previous_pin(app, client, outbox):
    with app.app_context():
        _create_user("alice", "a@x.com", "Secret123")

    client.post("/auth/requestPasswordChange", json={"email": "a@x.com"})
    first_pin = _pin_for(app, "alice")
    client.post("/auth/requestPasswordChange", json={"email": "a@x.com"})

    with app.app_context():
        assert PasswordResetPin.query.count() == 1
        assert PasswordResetPin.query.filter_by(pin=first_pin).first() is None


def test_update_password_consumes_pin(app, client, outbox):
    with app.app_context():
        _create_user("alice", "a@x.com", "Secret123")
    client.post("/auth/requestPasswordChange", json={"email": "a@x.com"})
    pin = _pin_for(app, "alice")

    response = client.post("/auth/updatePassword", json={"pin": pin, "password": "Changed456"})
    assert response.status_code == 200

    old_login = client.post("/auth/login", json={"username": "alice", "password": "Secret123"})
    new_login = client.post("/auth/login", json={"username": "alice", "password": "Changed456"})
    assert old_login.status_code == 401
    assert new_login.status_code == 200

    reused = client.post("/auth/updatePassword", json={"pin": pin, "password": "Another789"})
    assert reused.status_code == 403
    assert reused.get_json() == {"code": 606, "field": "pin"}


def test_update_password_rejects_weak_password(app, client, outbox):
    with app.app_context():
        _create_user("alice", "a@x.com", "Secret123")
    client.post("/auth/requestPasswordChange", json={"email": "a@x.com"})
    pin = _pin_for(app, "alice")

    response = client.post("/auth/updatePassword", json={"pin": pin, "password": "weak"})

    assert response.status_code == 409
    assert response.get_json() == {"code": 603, "field": "password"}
    with app.app_context():
        assert PasswordResetPin.query.filter_by(pin=pin).count() == 1


def test_update_password_rejects_expired_pin(app, client, outbox):
    with app.app_context():
        _create_user("alice", "a@x.com", "Secret123")
    client.post("/auth/requestPasswordChange", json={"email": "a@x.com"})
    pin = _pin_for(app, "alice")

    with app.app_context():
        stored = PasswordResetPin.query.filter_by(pin=pin).one()
        stored.expiry_date = datetime.utcnow() - timedelta(minutes=1)
        db.session.commit()

    response = client.post("/auth/updatePassword", json={"pin": pin, "password": "Changed456"})

    assert response.status_code == 403
    login = client.post("/auth/login", json={"username": "alice", "password": "Secret123"})
    assert login.status_code == 200
