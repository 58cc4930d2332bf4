"""Tests for house listing search and owner-gated CRUD."""

from __future__ import annotations

from types import SimpleNamespace

import pytest
from flask.testing import FlaskClient

from models import db
from models.house import House
from models.user import User
from services.listings import _sync_house_id_sequence, parse_price_range
from utils.tokens import issue_token

HOUSE_PAYLOAD = {
    "name": "Sunny Loft",
    "address": "12 Lake Road",
    "city": "Dhaka",
    "bedrooms": 2,
    "bathrooms": "1",
    "room_size": "850 sqft",
    "availability_date": "2026-11-01",
    "rent_per_month": "750.50",
    "phone": "+8801700000001",
    "description": "Bright loft close to the market.",
    "photo": "https://img.example/loft.jpg",
    "user_name": "Olivia",
}


def _auth_header(email: str) -> dict[str, str]:
    user = User.query.filter_by(email=email).first()
    if user is None:
        user = User(email=email, name=email.split("@")[0])
        user.set_password("Secret123")
        db.session.add(user)
        db.session.commit()
    return {"Authorization": f"Bearer {issue_token(user)}"}


def _create_house(owner_email: str = "owner@example.com", **fields) -> int:
    values = {"name": "House", "rent_per_month": 500.0, "room_size": "500 sqft"}
    values.update(fields)
    house = House(owner_email=owner_email, **values)
    db.session.add(house)
    db.session.commit()
    return house.id


def _names(response) -> set[str]:
    assert response.status_code == 200
    return {house["name"] for house in response.get_json()["results"]}


@pytest.fixture()
def catalogue(db_session):
    _create_house(name="Cozy Loft", rent_per_month=450.0, room_size="Small")
    _create_house(name="Downtown LOFT", rent_per_month=500.0, room_size="Medium")
    _create_house(name="Garden Flat", rent_per_month=800.0, room_size="Large")
    _create_house(name="Penthouse", rent_per_month=1000.0, room_size="large suite")
    _create_house(name="Villa", rent_per_month=2500.0, room_size="Huge")


def test_search_without_filters_returns_everything(client: FlaskClient, catalogue):
    response = client.get("/houses")

    assert response.get_json()["count"] == 5


def test_search_by_price_range_is_inclusive(client: FlaskClient, catalogue):
    response = client.get("/houses", query_string={"priceRange": "500-1000"})

    assert _names(response) == {"Downtown LOFT", "Garden Flat", "Penthouse"}


def test_search_by_name_is_case_insensitive(client: FlaskClient, catalogue):
    response = client.get("/houses", query_string={"searchValue": "loft"})

    assert _names(response) == {"Cozy Loft", "Downtown LOFT"}


def test_search_by_room_size_is_case_insensitive(client: FlaskClient, catalogue):
    response = client.get("/houses", query_string={"roomSize": "LARGE"})

    assert _names(response) == {"Garden Flat", "Penthouse"}


def test_search_filters_are_combined(client: FlaskClient, catalogue):
    response = client.get(
        "/houses",
        query_string={"priceRange": "400-600", "searchValue": "loft", "roomSize": "med"},
    )

    assert _names(response) == {"Downtown LOFT"}


def test_search_with_lower_bound_only(client: FlaskClient, catalogue):
    response = client.get("/houses", query_string={"priceRange": "1000"})

    assert _names(response) == {"Penthouse", "Villa"}


def test_search_rejects_malformed_price_range(client: FlaskClient, catalogue):
    response = client.get("/houses", query_string={"priceRange": "cheap-dear"})

    assert response.status_code == 400


@pytest.mark.parametrize(
    "raw, expected",
    [
        (None, (None, None)),
        ("", (None, None)),
        ("500-1000", (500.0, 1000.0)),
        (" 500 - 1000 ", (500.0, 1000.0)),
        ("500", (500.0, None)),
        ("500-", (500.0, None)),
        ("-1000", (None, 1000.0)),
    ],
)
def test_parse_price_range(raw, expected):
    assert parse_price_range(raw) == expected


def test_get_house_by_id(client: FlaskClient, db_session):
    house_id = _create_house(name="Cozy Loft")

    response = client.get(f"/houses/{house_id}")

    assert response.status_code == 200
    assert response.get_json()["name"] == "Cozy Loft"


def test_get_missing_house_returns_404(client: FlaskClient, db_session):
    response = client.get("/houses/999")

    assert response.status_code == 404
    assert response.get_json()["detail"] == "House not found."


def test_create_house_requires_token(client: FlaskClient, db_session):
    response = client.post("/houses", json=HOUSE_PAYLOAD)

    assert response.status_code == 401
    assert House.query.count() == 0


def test_create_house_coerces_numbers_and_records_owner(client: FlaskClient, db_session):
    response = client.post("/houses", json=HOUSE_PAYLOAD, headers=_auth_header("owner@example.com"))

    assert response.status_code == 201
    data = response.get_json()
    assert data["bedrooms"] == 2
    assert data["bathrooms"] == 1
    assert data["rent_per_month"] == 750.5
    assert data["email"] == "owner@example.com"
    assert data["user_name"] == "Olivia"
    assert House.query.count() == 1


@pytest.mark.parametrize(
    "field, value",
    [("bedrooms", "two"), ("bathrooms", 1.5), ("rent_per_month", "NaN"), ("rent_per_month", True)],
)
def test_create_house_rejects_malformed_numbers(client: FlaskClient, db_session, field, value):
    payload = {**HOUSE_PAYLOAD, field: value}

    response = client.post("/houses", json=payload, headers=_auth_header("owner@example.com"))

    assert response.status_code == 400
    assert field in response.get_json()["detail"]


def test_create_house_requires_name(client: FlaskClient, db_session):
    payload = {key: value for key, value in HOUSE_PAYLOAD.items() if key != "name"}

    response = client.post("/houses", json=payload, headers=_auth_header("owner@example.com"))

    assert response.status_code == 400


def test_put_replaces_every_field(client: FlaskClient, db_session):
    headers = _auth_header("owner@example.com")
    house_id = client.post("/houses", json=HOUSE_PAYLOAD, headers=headers).get_json()["id"]

    response = client.put(
        f"/houses/{house_id}",
        json={"name": "Renamed Loft", "rent_per_month": 900},
        headers=headers,
    )

    assert response.status_code == 200
    data = response.get_json()
    assert data["name"] == "Renamed Loft"
    assert data["rent_per_month"] == 900.0
    assert data["city"] is None
    assert data["bedrooms"] is None
    assert data["description"] is None


def test_put_creates_missing_house(client: FlaskClient, db_session):
    response = client.put("/houses/42", json=HOUSE_PAYLOAD, headers=_auth_header("owner@example.com"))

    assert response.status_code == 201
    assert response.get_json()["id"] == 42
    assert db.session.get(House, 42).owner_email == "owner@example.com"


def test_put_by_other_user_is_forbidden(client: FlaskClient, db_session):
    house_id = _create_house(owner_email="owner@example.com", name="Original")

    response = client.put(
        f"/houses/{house_id}",
        json={"name": "Hijacked"},
        headers=_auth_header("intruder@example.com"),
    )

    assert response.status_code == 403
    db.session.expire_all()
    assert db.session.get(House, house_id).name == "Original"


def test_delete_house(client: FlaskClient, db_session):
    house_id = _create_house(owner_email="owner@example.com")

    response = client.delete(f"/houses/{house_id}", headers=_auth_header("owner@example.com"))

    assert response.status_code == 200
    assert response.get_json() == {"deleted": True, "id": house_id}
    db.session.expire_all()
    assert db.session.get(House, house_id) is None


def test_delete_house_by_other_user_is_forbidden(client: FlaskClient, db_session):
    house_id = _create_house(owner_email="owner@example.com")

    response = client.delete(f"/houses/{house_id}", headers=_auth_header("intruder@example.com"))

    assert response.status_code == 403
    assert House.query.count() == 1


def test_delete_missing_house_returns_404(client: FlaskClient, db_session):
    response = client.delete("/houses/999", headers=_auth_header("owner@example.com"))

    assert response.status_code == 404


def test_search_treats_wildcards_literally(client: FlaskClient, db_session):
    _create_house(name="50% off flat", room_size="1_0 sqm")
    _create_house(name="Cozy Loft", room_size="100 sqm")

    assert _names(client.get("/houses", query_string={"searchValue": "%"})) == {"50% off flat"}
    assert _names(client.get("/houses", query_string={"searchValue": "L_ft"})) == set()
    assert _names(client.get("/houses", query_string={"roomSize": "1_0"})) == {"50% off flat"}


def test_oversized_house_id_is_not_found(client: FlaskClient, db_session):
    huge = "99999999999999999999"

    assert client.get(f"/houses/{huge}").status_code == 404
    response = client.delete(f"/houses/{huge}", headers=_auth_header("owner@example.com"))
    assert response.status_code == 404


def test_put_with_oversized_id_is_rejected(client: FlaskClient, db_session):
    response = client.put(
        "/houses/99999999999999999999",
        json=HOUSE_PAYLOAD,
        headers=_auth_header("owner@example.com"),
    )

    assert response.status_code == 400
    assert House.query.count() == 0


def test_create_after_upsert_gets_fresh_id(client: FlaskClient, db_session):
    headers = _auth_header("owner@example.com")
    client.put("/houses/42", json=HOUSE_PAYLOAD, headers=headers)

    response = client.post("/houses", json=HOUSE_PAYLOAD, headers=headers)

    assert response.status_code == 201
    assert response.get_json()["id"] != 42
    assert House.query.count() == 2


def test_upsert_advances_postgres_id_sequence(db_session, monkeypatch):
    executed = []
    postgres = SimpleNamespace(dialect=SimpleNamespace(name="postgresql"))
    monkeypatch.setattr(db.session, "get_bind", lambda *args, **kwargs: postgres)
    monkeypatch.setattr(
        db.session, "execute", lambda statement, *args, **kwargs: executed.append(str(statement))
    )

    _sync_house_id_sequence()

    assert len(executed) == 1
    assert "setval(pg_get_serial_sequence('houses', 'id')" in executed[0]


def test_id_sequence_untouched_on_sqlite(db_session, monkeypatch):
    executed = []
    monkeypatch.setattr(
        db.session, "execute", lambda statement, *args, **kwargs: executed.append(str(statement))
    )

    _sync_house_id_sequence()

    assert executed == []
