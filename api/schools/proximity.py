"""
Distance ranking for school listings.

Distances are great-circle (haversine) kilometres on a spherical Earth. The
ranker trusts its inputs; coordinates are validated before it is called.
"""

from __future__ import annotations

from collections.abc import Iterable
from math import atan2, cos, radians, sin, sqrt

from . import schemas


EARTH_RADIUS_KM = 6371.0
DISTANCE_DECIMALS = 2


def haversine_km(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """
    Calculate great-circle distance between two points in kilometers.
    """
    lat1, lon1, lat2, lon2 = map(radians, [lat1, lon1, lat2, lon2])
    dlat = lat2 - lat1
    dlon = lon2 - lon1
    a = sin(dlat / 2) ** 2 + cos(lat1) * cos(lat2) * sin(dlon / 2) ** 2
    # Rounding near antipodal points can push `a` just past 1.
    a = min(a, 1.0)
    return EARTH_RADIUS_KM * 2 * atan2(sqrt(a), sqrt(1 - a))


def rank_by_distance(
    latitude: float,
    longitude: float,
    schools: Iterable[schemas.School],
) -> list[schemas.RankedSchool]:
    ranked = [
        schemas.RankedSchool(
            **school.model_dump(),
            distance=round(haversine_km(latitude, longitude, school.latitude, school.longitude), DISTANCE_DECIMALS),
        )
        for school in schools
    ]
    # sorted() is stable: equal distances keep the storage order.
    return sorted(ranked, key=lambda school: school.distance)
