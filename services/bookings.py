"""Booking admission: per-user quota and duplicate prevention."""

from __future__ import annotations

from flask import current_app
from sqlalchemy import update
from sqlalchemy.exc import IntegrityError, OperationalError

from models import db
from models.booking import Booking, BookingQuota
from services.listings import get_house
from utils.errors import DuplicateBooking, QuotaExceeded, StoreUnavailable

DEFAULT_BOOKING_QUOTA = 2


def _booking_quota() -> int:
    return int(current_app.config.get("BOOKING_QUOTA", DEFAULT_BOOKING_QUOTA))


def _ensure_quota_row(email: str) -> None:
    """Create the email's counter row, seeded from bookings already stored."""

    if db.session.get(BookingQuota, email) is not None:
        return
    existing = Booking.query.filter_by(email=email).count()
    db.session.add(BookingQuota(email=email, booked=existing))
    try:
        db.session.commit()
    except IntegrityError:
        # Another request created it first.
        db.session.rollback()


def _claim_slot(email: str, quota: int) -> bool:
    """Increment the counter only while it is below ``quota``."""

    result = db.session.execute(
        update(BookingQuota)
        .where(BookingQuota.email == email, BookingQuota.booked < quota)
        .values(booked=BookingQuota.booked + 1)
        .execution_options(synchronize_session=False)
    )
    return result.rowcount == 1


def submit_booking(email: str, house_id: int) -> Booking:
    """Admit a booking for ``email`` or raise the policy error that blocks it.

    The quota check runs before the duplicate check. The counter increment
    and the insert commit together, so a rejected or failed attempt never
    consumes a slot.
    """

    quota = _booking_quota()

    try:
        get_house(house_id)
        _ensure_quota_row(email)

        if not _claim_slot(email, quota):
            db.session.rollback()
            current_app.logger.warning(
                "Booking refused for %s on house %s: quota of %s reached",
                email,
                house_id,
                quota,
            )
            raise QuotaExceeded()

        duplicate = Booking.query.filter_by(email=email, house_id=house_id).first()
        if duplicate is not None:
            db.session.rollback()
            current_app.logger.warning(
                "Booking refused for %s: house %s already booked", email, house_id
            )
            raise DuplicateBooking()

        booking = Booking(email=email, house_id=house_id)
        db.session.add(booking)
        db.session.flush()
        booking_id = booking.id
        db.session.commit()
    except IntegrityError:
        db.session.rollback()
        raise DuplicateBooking() from None
    except OperationalError as exc:
        db.session.rollback()
        current_app.logger.error("Booking store failure for %s: %s", email, exc)
        raise StoreUnavailable() from exc

    current_app.logger.info("Booking %s admitted: %s -> house %s", booking_id, email, house_id)
    return booking


def list_bookings(email: str) -> list[dict]:
    """Return the bookings of ``email`` projected to house_id and email."""

    bookings = Booking.query.filter_by(email=email).order_by(Booking.created_at, Booking.id).all()
    return [booking.to_dict() for booking in bookings]
