"""Person details attached to the user named by a session token."""

from __future__ import annotations

from sqlalchemy.orm import Session

from errors import DuplicateError, InvalidTokenError, NotFoundError
from models import Person, User
from services import tokens
from services.validation import (
    validate_measurements,
    validate_password,
    validate_person,
    validate_user,
)


class _Unset:
    """Marker for an optional field that was not supplied."""

    def __repr__(self) -> str:
        return "UNSET"


UNSET = _Unset()

PERSON_FIELDS = ("first_name", "last_name", "gender", "birthday", "height", "weight")


class ProfileService:
    def __init__(self, session: Session):
        self.session = session

    def resolve_user(self, session_token: str | None) -> User:
        """Return the user named by the token or raise ``InvalidTokenError``."""

        username = tokens.check_subject(session_token)
        if username is None:
            raise InvalidTokenError()
        user = self.session.query(User).filter(User.username == username).first()
        if user is None:
            raise InvalidTokenError()
        return user

    def get_person(self, session_token: str | None) -> Person | None:
        return self.resolve_user(session_token).person

    def insert_details(
        self,
        session_token: str | None,
        first_name,
        last_name,
        gender,
        birthday,
        height,
        weight,
    ) -> Person:
        """Create the person record for the token's user."""

        error = validate_measurements(gender, height, weight)
        if error:
            raise error

        user = self.resolve_user(session_token)

        error = validate_person(first_name, last_name, gender, birthday, height, weight)
        if error:
            raise error
        if user.person is not None:
            raise DuplicateError("person")

        person = Person(
            user=user,
            first_name=first_name,
            last_name=last_name,
            gender=gender,
            birthday=birthday,
            height=float(height),
            weight=float(weight),
        )
        self.session.add(person)
        self.session.commit()
        return person

    def update_details(
        self,
        session_token: str | None,
        password=UNSET,
        first_name=UNSET,
        last_name=UNSET,
        gender=UNSET,
        birthday=UNSET,
        height=UNSET,
        weight=UNSET,
    ) -> Person:
        """Apply every supplied field, validate the merged state, then commit.

        Fields left as ``UNSET`` keep their stored value. Nothing is written
        unless the merged user and person both validate.
        """

        user = self.resolve_user(session_token)
        person = user.person
        if person is None:
            raise NotFoundError("person")

        supplied = {
            "first_name": first_name,
            "last_name": last_name,
            "gender": gender,
            "birthday": birthday,
            "height": height,
            "weight": weight,
        }
        merged = {
            field: getattr(person, field) if value is UNSET else value
            for field, value in supplied.items()
        }

        error = validate_measurements(merged["gender"], merged["height"], merged["weight"])
        if error:
            raise error
        if password is not UNSET:
            error = validate_password(password)
            if error:
                raise error
        error = validate_user(user.username, user.email) or validate_person(**merged)
        if error:
            raise error

        if password is not UNSET:
            user.set_password(password)
        for field in PERSON_FIELDS:
            if supplied[field] is not UNSET:
                value = merged[field]
                if field in ("height", "weight"):
                    value = float(value)
                setattr(person, field, value)

        self.session.commit()
        return person
