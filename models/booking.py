"""Booking and per-user booking quota models."""

from datetime import datetime

from sqlalchemy import UniqueConstraint

from . import db


class Booking(db.Model):
    """A renter's booking request against a house."""

    __tablename__ = "bookings"
    __table_args__ = (
        UniqueConstraint("email", "house_id", name="uq_bookings_email_house"),
    )

    id = db.Column(db.Integer, primary_key=True)
    # Plain reference; bookings outlive deleted listings.
    house_id = db.Column(db.Integer, nullable=False, index=True)
    email = db.Column(db.String(255), nullable=False, index=True)
    created_at = db.Column(db.DateTime, nullable=False, default=datetime.utcnow)

    def to_dict(self) -> dict:
        return {"house_id": self.house_id, "email": self.email}


class BookingQuota(db.Model):
    """Counter of admitted bookings for one email.

    Admission claims a slot with a conditional increment on this row, so the
    quota holds even when several requests for the same email race.
    """

    __tablename__ = "booking_quotas"

    email = db.Column(db.String(255), primary_key=True)
    booked = db.Column(db.Integer, nullable=False, default=0)
    updated_at = db.Column(
        db.DateTime, nullable=False, default=datetime.utcnow, onupdate=datetime.utcnow
    )
