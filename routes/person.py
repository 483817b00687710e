"""Person blueprint for reading and editing profile details."""

from __future__ import annotations
from http import HTTPStatus

from flask import Blueprint, jsonify, request

from models import db
from services.profile_service import PERSON_FIELDS, UNSET, ProfileService
from utils.request_validation import bearer_token, parse_date, parse_json_request

person_bp = Blueprint("person", __name__)


def _optional(payload: dict, key: str):
    """Return the supplied value, or ``UNSET`` when the key is absent or null."""

    value = payload.get(key)
    if value is None:
        return UNSET
    return value


@person_bp.route("", methods=["GET"])
def get_person():
    """Return the person linked to the session token, or ``null``."""

    person = ProfileService(db.session).get_person(bearer_token(request))
    return jsonify({"person": person.to_dict() if person else None})


@person_bp.route("", methods=["POST"])
def insert_details():
    """Create the person record for the authenticated user."""

    payload = parse_json_request(request)
    person = ProfileService(db.session).insert_details(
        bearer_token(request),
        first_name=payload.get("first_name"),
        last_name=payload.get("last_name"),
        gender=payload.get("gender"),
        birthday=parse_date(payload.get("birthday")),
        height=payload.get("height"),
        weight=payload.get("weight"),
    )
    return jsonify({"person": person.to_dict()}), HTTPStatus.CREATED


@person_bp.route("", methods=["PUT", "PATCH"])
def update_details():
    """Update only the fields present in the request body."""

    payload = parse_json_request(request, allow_empty=True)
    changes = {field: _optional(payload, field) for field in PERSON_FIELDS}
    if changes["birthday"] is not UNSET:
        changes["birthday"] = parse_date(changes["birthday"])

    person = ProfileService(db.session).update_details(
        bearer_token(request),
        password=_optional(payload, "password"),
        **changes,
    )
    return jsonify({"person": person.to_dict()}), HTTPStatus.OK
