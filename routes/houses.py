"""House listings blueprint with search and owner-gated mutations."""

from __future__ import annotations

from flask import Blueprint, jsonify, request

from services.listings import create_house, delete_house, get_house, replace_house, search_houses
from utils.auth import current_user, token_required
from utils.request_validation import parse_json_request

houses_bp = Blueprint("houses", __name__)


@houses_bp.route("", methods=["GET"])
def list_houses():
    """Return houses filtered by price range, room size, and name."""

    houses = search_houses(
        price_range=request.args.get("priceRange"),
        room_size=request.args.get("roomSize"),
        search_value=request.args.get("searchValue"),
    )
    payload = [house.to_dict() for house in houses]
    return jsonify({"results": payload, "count": len(payload)})


@houses_bp.route("/<int:house_id>", methods=["GET"])
def show_house(house_id: int):
    return jsonify(get_house(house_id).to_dict())


@houses_bp.route("", methods=["POST"])
@token_required
def add_house():
    owner = current_user()
    house = create_house(parse_json_request(request), owner)
    return jsonify(house.to_dict()), 201


@houses_bp.route("/<int:house_id>", methods=["PUT"])
@token_required
def put_house(house_id: int):
    """Replace a listing's fields; creates the listing when the id is unused."""

    owner = current_user()
    house, created = replace_house(house_id, parse_json_request(request), owner)
    return jsonify(house.to_dict()), 201 if created else 200


@houses_bp.route("/<int:house_id>", methods=["DELETE"])
@token_required
def remove_house(house_id: int):
    owner = current_user()
    delete_house(house_id, owner)
    return jsonify({"deleted": True, "id": house_id})
