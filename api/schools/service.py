"""
School business logic.

Scope:
- validate input before any storage call
- map repository rows to response schemas
- rank listings by distance from the caller
"""

from __future__ import annotations

from typing import Any

from core.errors import NotFoundError

from . import proximity, schemas, validation
from .repository import SchoolRepository


MSG_NOT_FOUND = "School not found"


def _to_school(row: dict[str, Any]) -> schemas.School:
    return schemas.School(
        id=int(row["id"]),
        name=str(row["name"]),
        address=str(row["address"]),
        latitude=float(row["latitude"]),
        longitude=float(row["longitude"]),
        created_at=row.get("created_at"),
    )


async def add_school(payload: Any, *, repository: SchoolRepository) -> schemas.School:
    fields = validation.validate_school(payload)
    row = await repository.insert(fields)
    return _to_school(row)


async def list_schools(
    latitude: str | None,
    longitude: str | None,
    *,
    repository: SchoolRepository,
) -> tuple[schemas.UserLocation, list[schemas.RankedSchool]]:
    location = validation.parse_user_location(latitude, longitude)
    rows = await repository.list_all()
    ranked = proximity.rank_by_distance(
        location.latitude,
        location.longitude,
        [_to_school(row) for row in rows],
    )
    return schemas.UserLocation(latitude=location.latitude, longitude=location.longitude), ranked


async def get_school(raw_id: str, *, repository: SchoolRepository) -> schemas.School:
    school_id = validation.parse_school_id(raw_id)
    row = await repository.get_by_id(school_id)
    if row is None:
        raise NotFoundError(MSG_NOT_FOUND)
    return _to_school(row)


async def update_school(raw_id: str, payload: Any, *, repository: SchoolRepository) -> schemas.School:
    # Full replacement only: all four fields go through the same checks as create.
    school_id = validation.parse_school_id(raw_id)
    fields = validation.validate_school(payload)
    row = await repository.update(school_id, fields)
    if row is None:
        raise NotFoundError(MSG_NOT_FOUND)
    return _to_school(row)


async def delete_school(raw_id: str, *, repository: SchoolRepository) -> schemas.School:
    school_id = validation.parse_school_id(raw_id)
    row = await repository.delete(school_id)
    if row is None:
        raise NotFoundError(MSG_NOT_FOUND)
    return _to_school(row)
