"""
Input validation for school records.

Everything here is pure: untrusted values in, normalized values out, or a
`ValidationError` whose message is shown to the client verbatim. Rules run in
a fixed order and stop at the first failure.
"""

from __future__ import annotations

import math
import re
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from core.errors import ValidationError


NAME_MAX_LENGTH = 255
ADDRESS_MAX_LENGTH = 500
LATITUDE_RANGE = (-90.0, 90.0)
LONGITUDE_RANGE = (-180.0, 180.0)

# Upper bound of the SERIAL id column.
MAX_SCHOOL_ID = 2**31 - 1

MSG_BODY_NOT_OBJECT = "Request body must be a JSON object"
MSG_REQUIRED = "All fields (name, address, latitude, longitude) are required"
MSG_NOT_STRINGS = "Name and address must be strings"
MSG_NOT_NUMBERS = "Latitude and longitude must be valid numbers"
MSG_LATITUDE_RANGE = "Latitude must be between -90 and 90"
MSG_LONGITUDE_RANGE = "Longitude must be between -180 and 180"
MSG_NAME_LENGTH = "School name cannot be empty and must be less than 255 characters"
MSG_ADDRESS_LENGTH = "Address cannot be empty and must be less than 500 characters"
MSG_LOCATION_REQUIRED = "User latitude and longitude are required as query parameters"
MSG_INVALID_COORDINATES = "Invalid coordinate values"
MSG_INVALID_ID = "Invalid school ID"

_ID_PATTERN = re.compile(r"[0-9]+")
# Plain ASCII decimal or exponent notation; no digit separators or non-ASCII digits.
_NUMBER_PATTERN = re.compile(r"[+-]?([0-9]+\.?[0-9]*|\.[0-9]+)([eE][+-]?[0-9]+)?")


@dataclass(frozen=True)
class SchoolFields:
    name: str
    address: str
    latitude: float
    longitude: float


@dataclass(frozen=True)
class Location:
    latitude: float
    longitude: float


def parse_coordinate(value: Any) -> float | None:
    """
    Parse a JSON number or numeric string into a finite float.

    Returns None when the value is not usable as a coordinate.
    """
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        try:
            number = float(value)
        except OverflowError:
            return None
    elif isinstance(value, str):
        text = value.strip()
        if not _NUMBER_PATTERN.fullmatch(text):
            return None
        number = float(text)
    else:
        return None

    if not math.isfinite(number):
        return None
    return number


def _in_range(value: float, bounds: tuple[float, float]) -> bool:
    low, high = bounds
    return low <= value <= high


def validate_school(payload: Any) -> SchoolFields:
    if not isinstance(payload, Mapping):
        raise ValidationError(MSG_BODY_NOT_OBJECT)

    name = payload.get("name")
    address = payload.get("address")
    if not name or not address or "latitude" not in payload or "longitude" not in payload:
        raise ValidationError(MSG_REQUIRED)

    if not isinstance(name, str) or not isinstance(address, str):
        raise ValidationError(MSG_NOT_STRINGS)

    latitude = parse_coordinate(payload["latitude"])
    longitude = parse_coordinate(payload["longitude"])
    if latitude is None or longitude is None:
        raise ValidationError(MSG_NOT_NUMBERS)

    if not _in_range(latitude, LATITUDE_RANGE):
        raise ValidationError(MSG_LATITUDE_RANGE)
    if not _in_range(longitude, LONGITUDE_RANGE):
        raise ValidationError(MSG_LONGITUDE_RANGE)

    name = name.strip()
    if not 1 <= len(name) <= NAME_MAX_LENGTH:
        raise ValidationError(MSG_NAME_LENGTH)

    address = address.strip()
    if not 1 <= len(address) <= ADDRESS_MAX_LENGTH:
        raise ValidationError(MSG_ADDRESS_LENGTH)

    return SchoolFields(name=name, address=address, latitude=latitude, longitude=longitude)


def parse_user_location(latitude: str | None, longitude: str | None) -> Location:
    """
    Validate the caller's position taken from the query string.
    """
    if not latitude or not longitude:
        raise ValidationError(MSG_LOCATION_REQUIRED)

    user_latitude = parse_coordinate(latitude)
    user_longitude = parse_coordinate(longitude)
    if user_latitude is None or user_longitude is None:
        raise ValidationError(MSG_NOT_NUMBERS)

    if not _in_range(user_latitude, LATITUDE_RANGE) or not _in_range(user_longitude, LONGITUDE_RANGE):
        raise ValidationError(MSG_INVALID_COORDINATES)

    return Location(latitude=user_latitude, longitude=user_longitude)


def parse_school_id(raw: str) -> int:
    raw = (raw or "").strip()
    if not _ID_PATTERN.fullmatch(raw):
        raise ValidationError(MSG_INVALID_ID)

    school_id = int(raw)
    if not 1 <= school_id <= MAX_SCHOOL_ID:
        raise ValidationError(MSG_INVALID_ID)
    return school_id
