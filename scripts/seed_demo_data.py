"""Seed demo users, houses, and a booking."""

from pathlib import Path
import sys

sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

from app import create_app
from models import db
from models.booking import Booking, BookingQuota
from models.house import House
from models.user import User


def get_or_create_user(email: str, password: str, name: str, role: str) -> User:
    user = User.query.filter_by(email=email).first()
    if user is None:
        user = User(email=email, name=name, role=role)
        user.set_password(password)
        db.session.add(user)
    else:
        user.name = name
        user.role = role
        user.set_password(password)
    return user


def main() -> None:
    app = create_app()
    with app.app_context():
        db.create_all()

        owner = get_or_create_user("owner@example.com", "OwnerPass123", "Olivia Owner", "House Owner")
        renter = get_or_create_user("renter@example.com", "RenterPass123", "Rafi Renter", "House Renter")

        db.session.flush()

        houses_data = [
            {
                "name": "Sunny Downtown Loft",
                "address": "12 Lake Road",
                "city": "Dhaka",
                "bedrooms": 2,
                "bathrooms": 1,
                "room_size": "850 sqft",
                "availability_date": "2026-11-01",
                "rent_per_month": 750.0,
                "phone": "+8801700000001",
                "description": "Bright loft close to the market.",
            },
            {
                "name": "Quiet Garden Flat",
                "address": "4 Park Lane",
                "city": "Chittagong",
                "bedrooms": 3,
                "bathrooms": 2,
                "room_size": "1200 sqft",
                "availability_date": "2026-12-01",
                "rent_per_month": 1100.0,
                "phone": "+8801700000002",
                "description": "Family flat with a shared garden.",
            },
            {
                "name": "Student Room",
                "address": "88 College Street",
                "city": "Sylhet",
                "bedrooms": 1,
                "bathrooms": 1,
                "room_size": "300 sqft",
                "availability_date": "2026-11-15",
                "rent_per_month": 300.0,
                "phone": "+8801700000003",
                "description": "Furnished room near the university.",
            },
        ]

        houses = []
        for data in houses_data:
            house = House.query.filter_by(name=data["name"], owner_email=owner.email).first()
            if house is None:
                house = House(owner_email=owner.email, owner_name=owner.name, **data)
                db.session.add(house)
            else:
                for key, value in data.items():
                    setattr(house, key, value)
            houses.append(house)

        db.session.flush()

        first_house = houses[0]
        existing_booking = Booking.query.filter_by(
            email=renter.email, house_id=first_house.id
        ).first()
        if existing_booking is None:
            db.session.add(Booking(email=renter.email, house_id=first_house.id))
            quota = db.session.get(BookingQuota, renter.email)
            if quota is None:
                db.session.add(BookingQuota(email=renter.email, booked=1))
            else:
                quota.booked += 1
        db.session.commit()

        print("Seed data inserted: owner, renter, houses, booking.")


if __name__ == "__main__":
    main()
