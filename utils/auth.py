"""Bearer-token gate for protected views."""

from __future__ import annotations

from functools import wraps

from flask_jwt_extended import get_jwt_identity, verify_jwt_in_request

from models.user import User
from services.accounts import get_user
from utils.errors import UnauthorizedAccess


def token_required(view):
    """Reject the request with 401 unless it carries a valid bearer token.

    Missing, malformed, tampered, and expired tokens are all turned into
    ``UnauthorizedAccess`` by the loaders registered in ``create_app``.
    """

    @wraps(view)
    def wrapper(*args, **kwargs):
        verify_jwt_in_request()
        return view(*args, **kwargs)

    return wrapper


def current_email() -> str:
    """Return the email of the caller authenticated by ``token_required``."""
    email = get_jwt_identity()
    if not email:
        raise UnauthorizedAccess()
    return email


def current_user() -> User:
    """Re-fetch the caller's account; 404 once it has been deleted."""
    return get_user(current_email())
