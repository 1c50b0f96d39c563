"""
School API endpoints.
"""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Depends, Query, status

from . import service
from .dependencies import get_json_body, get_repository
from .repository import SchoolRepository

router = APIRouter()


@router.post("/addSchool", status_code=status.HTTP_201_CREATED)
async def add_school(
    payload: Any = Depends(get_json_body),
    repository: SchoolRepository = Depends(get_repository),
) -> dict:
    school = await service.add_school(payload, repository=repository)
    return {"success": True, "message": "School added successfully", "data": school}


@router.get("/listSchools")
async def list_schools(
    latitude: str | None = Query(default=None),
    longitude: str | None = Query(default=None),
    repository: SchoolRepository = Depends(get_repository),
) -> dict:
    location, schools = await service.list_schools(latitude, longitude, repository=repository)
    return {
        "success": True,
        "message": "Schools retrieved and sorted by proximity",
        "userLocation": location,
        "count": len(schools),
        "data": schools,
    }


@router.get("/school/{school_id}")
async def get_school(
    school_id: str,
    repository: SchoolRepository = Depends(get_repository),
) -> dict:
    school = await service.get_school(school_id, repository=repository)
    return {"success": True, "message": "School retrieved successfully", "data": school}


@router.put("/school/{school_id}")
async def update_school(
    school_id: str,
    payload: Any = Depends(get_json_body),
    repository: SchoolRepository = Depends(get_repository),
) -> dict:
    school = await service.update_school(school_id, payload, repository=repository)
    return {"success": True, "message": "School updated successfully", "data": school}


@router.delete("/school/{school_id}")
async def delete_school(
    school_id: str,
    repository: SchoolRepository = Depends(get_repository),
) -> dict:
    school = await service.delete_school(school_id, repository=repository)
    return {"success": True, "message": "School deleted successfully", "data": school}
