"""House listing search and CRUD."""

from __future__ import annotations

from flask import current_app
from werkzeug.exceptions import BadRequest, Forbidden, NotFound

from models import db
from models.house import EDITABLE_FIELDS, House
from models.user import User
from utils.request_validation import coerce_number

NUMERIC_FIELDS = {"bedrooms": int, "bathrooms": int, "rent_per_month": float}

# Largest id a 32-bit INTEGER primary key can hold.
MAX_HOUSE_ID = 2**31 - 1


def parse_price_range(raw: str | None) -> tuple[float | None, float | None]:
    """Parse ``"min-max"`` into inclusive bounds.

    ``"min"`` and ``"min-"`` give a lower bound only, ``"-max"`` an upper
    bound only. Empty input means no constraint.
    """

    text = (raw or "").strip()
    if not text:
        return None, None

    low_text, _, high_text = text.partition("-")
    bounds = []
    for part in (low_text, high_text):
        part = part.strip()
        if not part:
            bounds.append(None)
            continue
        try:
            bounds.append(float(part))
        except ValueError:
            raise BadRequest("priceRange must look like 'min-max'.") from None

    low, high = bounds
    if low is not None and high is not None and low > high:
        raise BadRequest("priceRange minimum must not exceed maximum.")
    return low, high


def search_houses(
    price_range: str | None = None,
    room_size: str | None = None,
    search_value: str | None = None,
) -> list[House]:
    """Return listings matching every supplied filter, newest first."""

    query = House.query

    if search_value:
        query = query.filter(
            db.func.lower(House.name).contains(search_value.lower(), autoescape=True)
        )

    if room_size:
        query = query.filter(
            db.func.lower(House.room_size).contains(room_size.lower(), autoescape=True)
        )

    low, high = parse_price_range(price_range)
    if low is not None:
        query = query.filter(House.rent_per_month >= low)
    if high is not None:
        query = query.filter(House.rent_per_month <= high)

    return query.order_by(House.created_at.desc(), House.id.desc()).all()


def _id_in_range(house_id: int) -> bool:
    return 1 <= house_id <= MAX_HOUSE_ID


def get_house(house_id: int) -> House:
    if not _id_in_range(house_id):
        raise NotFound("House not found.")
    return db.get_or_404(House, house_id, description="House not found.")


def _listing_values(data: dict) -> dict:
    """Build a full set of editable values; absent fields become ``None``."""

    values = {}
    for field in EDITABLE_FIELDS:
        if field in NUMERIC_FIELDS:
            values[field] = coerce_number(data, field, NUMERIC_FIELDS[field])
        else:
            value = data.get(field)
            values[field] = value.strip() if isinstance(value, str) else value

    if not values["name"]:
        raise BadRequest("name is required")
    return values


def _owner_name(data: dict, owner: User) -> str | None:
    return data.get("user_name") or owner.name


def create_house(data: dict, owner: User) -> House:
    """Create a listing owned by ``owner``."""

    house = House(
        owner_email=owner.email,
        owner_name=_owner_name(data, owner),
        **_listing_values(data),
    )
    db.session.add(house)
    db.session.commit()
    current_app.logger.info("House %s created by %s", house.id, owner.email)
    return house


def _sync_house_id_sequence() -> None:
    """Move the PostgreSQL id sequence past ids chosen by clients."""

    if db.session.get_bind().dialect.name != "postgresql":
        return
    db.session.execute(
        db.text(
            "SELECT setval(pg_get_serial_sequence('houses', 'id'), "
            "(SELECT MAX(id) FROM houses))"
        )
    )


def replace_house(house_id: int, data: dict, owner: User) -> tuple[House, bool]:
    """Replace every editable field of a listing, creating it when missing.

    Returns the listing and whether it was created.
    """

    if not _id_in_range(house_id):
        raise BadRequest(f"House id must be between 1 and {MAX_HOUSE_ID}.")

    values = _listing_values(data)
    house = db.session.get(House, house_id)
    created = house is None
    if created:
        house = House(id=house_id, owner_email=owner.email)
        db.session.add(house)
    elif not house.is_owned_by(owner.email):
        raise Forbidden("You do not have permission to update this house.")

    for field, value in values.items():
        setattr(house, field, value)
    house.owner_name = _owner_name(data, owner)

    if created:
        db.session.flush()
        _sync_house_id_sequence()
    db.session.commit()
    current_app.logger.info(
        "House %s %s by %s", house.id, "created" if created else "replaced", owner.email
    )
    return house, created


def delete_house(house_id: int, owner: User) -> None:
    house = get_house(house_id)
    if not house.is_owned_by(owner.email):
        raise Forbidden("You do not have permission to delete this house.")

    db.session.delete(house)
    db.session.commit()
    current_app.logger.info("House %s deleted by %s", house_id, owner.email)
