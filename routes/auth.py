"""Authentication blueprint providing register, login, and profile endpoints."""

from __future__ import annotations
from http import HTTPStatus

from flask import Blueprint, jsonify, request

from services.accounts import PROFILE_FIELDS, authenticate, delete_user, register_user
from utils.auth import current_user, token_required
from utils.request_validation import parse_json_request

auth_bp = Blueprint("auth", __name__)


@auth_bp.route("/register", methods=["POST"])
def register() -> tuple:
    """Register a new user with an email, password, and optional profile."""
    payload = parse_json_request(request)
    profile = {field: payload.get(field) for field in PROFILE_FIELDS}
    user = register_user(payload.get("email"), payload.get("password"), profile)

    return (
        jsonify(
            {
                "message": "User registered successfully.",
                "user": user.to_dict(),
            }
        ),
        HTTPStatus.CREATED,
    )


@auth_bp.route("/login", methods=["POST"])
def login() -> tuple:
    """Authenticate a user and return a bearer token."""
    payload = parse_json_request(request)
    token, user = authenticate(payload.get("email"), payload.get("password"))
    return jsonify({"token": token, "user": user.to_dict()}), HTTPStatus.OK


@auth_bp.route("/user", methods=["GET"])
@token_required
def show_user() -> tuple:
    """Return the caller's user document."""
    return jsonify(current_user().to_dict()), HTTPStatus.OK


@auth_bp.route("/user", methods=["DELETE"])
@token_required
def delete_current_user() -> tuple:
    """Delete the caller's account and bookings."""
    email = current_user().email
    delete_user(email)
    return jsonify({"deleted": True, "email": email}), HTTPStatus.OK
