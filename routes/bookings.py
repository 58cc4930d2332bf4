"""Bookings blueprint."""

from __future__ import annotations

from flask import Blueprint, jsonify, request
from werkzeug.exceptions import BadRequest, Forbidden

from services.accounts import normalize_email
from services.bookings import list_bookings, submit_booking
from utils.auth import current_user, token_required
from utils.request_validation import coerce_number, parse_json_request

bookings_bp = Blueprint("bookings", __name__)


def _resolve_email(requested: str | None) -> str:
    """Return the caller's stored email, refusing requests made for someone else."""

    email = current_user().email
    requested = normalize_email(requested)
    if requested and requested != email:
        raise Forbidden("You can only access your own bookings.")
    return email


@bookings_bp.route("", methods=["GET"])
@token_required
def get_bookings():
    email = _resolve_email(request.args.get("email"))
    payload = list_bookings(email)
    return jsonify({"results": payload, "count": len(payload)})


@bookings_bp.route("", methods=["POST"])
@token_required
def create_booking():
    """Book a house for the caller, subject to the booking quota."""

    data = parse_json_request(request, required_keys=["house_id"])
    email = _resolve_email(data.get("email"))
    house_id = coerce_number(data, "house_id", int)
    if house_id is None:
        raise BadRequest("house_id is required")

    booking = submit_booking(email, house_id)
    return jsonify({"message": "Booking confirmed.", "booking": booking.to_dict()}), 201
