"""Registration, login, and account lookup."""

from __future__ import annotations

from flask import current_app
from sqlalchemy import func
from sqlalchemy.exc import IntegrityError
from werkzeug.exceptions import BadRequest, NotFound

from models import db
from models.booking import Booking, BookingQuota
from models.user import User
from utils.errors import AlreadyExists, InvalidPassword, InvalidUsername
from utils.tokens import issue_token

PROFILE_FIELDS = ("name", "phone", "role", "photo")


def normalize_email(raw_email: str | None) -> str:
    """Normalize an email string by stripping whitespace and lowering case."""
    return (raw_email or "").strip().lower()


def find_user(email: str) -> User | None:
    return User.query.filter(func.lower(User.email) == normalize_email(email)).first()


def register_user(email: str | None, password: str | None, profile: dict | None = None) -> User:
    """Create a user, refusing emails that are already registered."""
    email = normalize_email(email)
    password = password or ""
    if not email or not password:
        raise BadRequest("Email and password are required.")

    if find_user(email) is not None:
        current_app.logger.info("Registration refused for existing email %s", email)
        raise AlreadyExists()

    profile = profile or {}
    user = User(email=email, **{field: profile.get(field) for field in PROFILE_FIELDS})
    user.set_password(password)

    db.session.add(user)
    try:
        db.session.commit()
    except IntegrityError:
        db.session.rollback()
        raise AlreadyExists() from None

    current_app.logger.info("Registered user %s", email)
    return user


def authenticate(email: str | None, password: str | None) -> tuple[str, User]:
    """Check credentials and return a fresh token with the user."""
    email = normalize_email(email)
    password = password or ""
    if not email or not password:
        raise BadRequest("Email and password are required.")

    user = find_user(email)
    if user is None:
        current_app.logger.warning("Login failed: unknown email %s", email)
        raise InvalidUsername()

    if not user.check_password(password):
        current_app.logger.warning("Login failed: wrong password for %s", email)
        raise InvalidPassword()

    return issue_token(user), user


def get_user(email: str) -> User:
    user = find_user(email)
    if user is None:
        raise NotFound("User not found.")
    return user


def delete_user(email: str) -> None:
    """Remove a user along with their bookings and booking counter."""
    user = get_user(email)
    Booking.query.filter_by(email=user.email).delete()
    BookingQuota.query.filter_by(email=user.email).delete()
    db.session.delete(user)
    db.session.commit()
    current_app.logger.info("Deleted user %s", user.email)
