"""Utilities for validating incoming Flask requests."""

from __future__ import annotations

import math
from typing import Iterable

from flask import Request
from werkzeug.exceptions import BadRequest


def parse_json_request(
    req: Request,
    *,
    required_keys: Iterable[str] | None = None,
    allow_empty: bool = False,
) -> dict:
    """Return the parsed JSON body or raise a 400 error."""

    if not req.is_json:
        raise BadRequest("Request content type must be application/json.")

    data = req.get_json(silent=False)
    if data is None:
        raise BadRequest("Request JSON body is required.")

    if not isinstance(data, dict):
        raise BadRequest("Request JSON payload must be an object.")

    if not data and not allow_empty:
        raise BadRequest("Request JSON body must not be empty.")

    if required_keys:
        missing = [key for key in required_keys if not data.get(key)]
        if missing:
            raise BadRequest(
                "Missing required fields: {}.".format(
                    ", ".join(sorted(missing))
                )
            )

    return data


def coerce_number(data: dict, field: str, kind: type = int) -> int | float | None:
    """Return ``data[field]`` converted with ``kind`` or raise a 400 error.

    Missing and empty values map to ``None``. Booleans are rejected.
    """

    value = data.get(field)
    if value is None or (isinstance(value, str) and not value.strip()):
        return None
    if isinstance(value, bool):
        raise BadRequest(f"{field} must be numeric.")
    try:
        number = float(value)
    except (TypeError, ValueError):
        raise BadRequest(f"{field} must be numeric.") from None
    if not math.isfinite(number) or (kind is int and not number.is_integer()):
        raise BadRequest(f"{field} must be a finite {kind.__name__}.")
    return kind(number)
