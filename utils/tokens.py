"""Signed, time-limited identity tokens."""

from __future__ import annotations

from datetime import timedelta

from flask_jwt_extended import create_access_token, decode_token
from flask_jwt_extended.exceptions import JWTExtendedException
from jwt import ExpiredSignatureError, InvalidTokenError

from models.user import User


class TokenError(Exception):
    """Base class for token verification failures."""


class TokenExpired(TokenError):
    """The token was well formed but its expiry has passed."""


class TokenInvalid(TokenError):
    """The token was malformed or its signature did not match."""


def issue_token(user: User, expires_delta: timedelta | None = None) -> str:
    """Return a signed token identifying ``user``.

    The subject is the user's email and ``uid`` their id. Credentials and
    profile data stay server-side. ``expires_delta`` defaults to
    ``JWT_ACCESS_TOKEN_EXPIRES``.
    """
    kwargs = {}
    if expires_delta is not None:
        kwargs["expires_delta"] = expires_delta
    return create_access_token(
        identity=user.email,
        additional_claims={"uid": user.id},
        **kwargs,
    )


def verify_token(token: str) -> dict:
    """Decode ``token`` and return its claims, raising a ``TokenError``."""
    try:
        return decode_token(token)
    except ExpiredSignatureError as exc:
        raise TokenExpired("Token has expired.") from exc
    except (InvalidTokenError, JWTExtendedException) as exc:
        raise TokenInvalid("Token is invalid.") from exc
