"""
Pydantic schemas for school responses.
"""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field


class School(BaseModel):
    id: int
    name: str
    address: str
    latitude: float
    longitude: float
    created_at: datetime | None = None


class RankedSchool(School):
    distance: float = Field(..., ge=0.0)


class UserLocation(BaseModel):
    latitude: float
    longitude: float
