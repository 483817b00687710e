"""Authentication blueprint: register, login, verify and password reset."""

from __future__ import annotations
from http import HTTPStatus
from urllib.parse import urlencode

from flask import Blueprint, current_app, jsonify, redirect, request

from models import db
from services.account_service import AccountService
from utils.request_validation import parse_json_request

auth_bp = Blueprint("auth", __name__)


def _service() -> AccountService:
    return AccountService.from_app(db.session)


def _text(payload: dict, key: str) -> str:
    value = payload.get(key)
    return value.strip() if isinstance(value, str) else value


@auth_bp.route("/register", methods=["POST"])
def register() -> tuple:
    """Register a new user and send the confirmation email."""
    payload = parse_json_request(request)
    user = _service().register(
        _text(payload, "username"),
        _text(payload, "email"),
        payload.get("password"),
    )
    return jsonify({"user": user.to_dict()}), HTTPStatus.CREATED


@auth_bp.route("/login", methods=["POST"])
def login() -> tuple:
    """Authenticate a user and return a session token."""
    payload = parse_json_request(request)
    token = _service().login(_text(payload, "username"), payload.get("password"))
    return jsonify({"token": token}), HTTPStatus.OK


@auth_bp.route("/verify/<string:token>", methods=["GET"])
def verify(token: str):
    """Consume a verification token and send the browser to the login page."""
    verified = _service().verify(token)
    frontend = current_app.config.get("FRONTEND_URL", "").rstrip("/")
    query = urlencode({"verified": "true" if verified else "false"})
    return redirect(f"{frontend}/login?{query}", code=HTTPStatus.TEMPORARY_REDIRECT)


@auth_bp.route("/requestPasswordChange", methods=["POST"])
def request_password_change() -> tuple:
    """Mail a reset pin to the account registered with the given email."""
    payload = parse_json_request(request)
    _service().request_password_change(_text(payload, "email"))
    return jsonify({}), HTTPStatus.OK


@auth_bp.route("/updatePassword", methods=["POST"])
def update_password() -> tuple:
    """Set a new password using a reset pin."""
    payload = parse_json_request(request)
    _service().update_password(_text(payload, "pin"), payload.get("password"))
    return jsonify({}), HTTPStatus.OK
