"""HTTP errors raised by the account, listing, and booking flows.

Each error carries a ``reason`` slug that the JSON error handler includes in
the response body so clients can tell failures with the same status apart.
"""

from __future__ import annotations

from werkzeug.exceptions import Conflict, ServiceUnavailable, Unauthorized


class AlreadyExists(Conflict):
    reason = "already_exists"
    description = "User already exists"


class InvalidUsername(Unauthorized):
    reason = "invalid_username"
    description = "Invalid username"


class InvalidPassword(Unauthorized):
    reason = "invalid_password"
    description = "Invalid password"


class UnauthorizedAccess(Unauthorized):
    reason = "unauthorized"
    description = "Unauthorized access"


class QuotaExceeded(Conflict):
    reason = "quota_exceeded"
    description = "Booking limit reached for this account."


class DuplicateBooking(Conflict):
    reason = "duplicate_booking"
    description = "You have already booked this house."


class StoreUnavailable(ServiceUnavailable):
    reason = "store_unavailable"
    description = "The booking store is temporarily unavailable. Please retry."
