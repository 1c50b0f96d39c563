"""
Tests for haversine distance and distance ranking.
"""

import pytest

from schools.proximity import haversine_km, rank_by_distance
from schools.schemas import School


def _school(school_id: int, latitude: float, longitude: float) -> School:
    return School(
        id=school_id,
        name=f"School {school_id}",
        address=f"{school_id} Test Ave",
        latitude=latitude,
        longitude=longitude,
    )


class TestHaversineKm:
    def test_same_point_is_zero(self):
        assert haversine_km(42.36, -71.06, 42.36, -71.06) == pytest.approx(0.0, abs=1e-9)

    def test_one_degree_along_equator(self):
        assert haversine_km(0, 0, 0, 1) == pytest.approx(111.19, abs=0.01)

    def test_one_degree_along_meridian(self):
        assert haversine_km(0, 0, 1, 0) == pytest.approx(111.19, abs=0.01)

    def test_known_distance(self):
        # Boston City Hall to Fenway Park ~3.7 km
        dist = haversine_km(42.3601, -71.0589, 42.3467, -71.0972)
        assert 3.0 < dist < 4.5

    @pytest.mark.parametrize(
        "a,b",
        [((0, 0), (10, 10)), ((42.36, -71.06), (-33.87, 151.21)), ((89.9, 0), (-89.9, 179.9))],
    )
    def test_symmetric(self, a, b):
        assert haversine_km(*a, *b) == pytest.approx(haversine_km(*b, *a))

    def test_antipodal_points(self):
        assert haversine_km(0, 0, 0, 180) == pytest.approx(6371.0 * 3.141592653589793, rel=1e-9)


class TestRankByDistance:
    def test_identical_coordinates_rank_zero(self):
        ranked = rank_by_distance(10.0, 20.0, [_school(1, 10.0, 20.0)])
        assert ranked[0].distance == 0.0

    def test_sorted_ascending(self):
        schools = [_school(1, 0, 10), _school(2, 0, 1), _school(3, 0, 5)]
        ranked = rank_by_distance(0, 0, schools)
        assert [s.id for s in ranked] == [2, 3, 1]
        distances = [s.distance for s in ranked]
        assert distances == sorted(distances)

    def test_distance_rounded_to_two_decimals(self):
        ranked = rank_by_distance(0, 0, [_school(1, 0, 1)])
        assert ranked[0].distance == 111.19

    def test_origin_example(self):
        schools = [_school(1, 0, 1), _school(2, 1, 0), _school(3, 0, 0)]
        ranked = rank_by_distance(0, 0, schools)
        assert ranked[0].id == 3
        assert ranked[0].distance == 0.0
        assert {s.id for s in ranked[1:]} == {1, 2}
        assert [s.distance for s in ranked[1:]] == [111.19, 111.19]

    def test_ties_keep_input_order(self):
        schools = [_school(7, 1, 0), _school(4, 0, 1), _school(9, -1, 0)]
        ranked = rank_by_distance(0, 0, schools)
        assert [s.id for s in ranked] == [7, 4, 9]

    def test_keeps_school_fields(self):
        ranked = rank_by_distance(0, 0, [_school(5, 1.5, 2.5)])
        school = ranked[0]
        assert (school.id, school.name, school.address) == (5, "School 5", "5 Test Ave")
        assert (school.latitude, school.longitude) == (1.5, 2.5)

    def test_empty_input(self):
        assert rank_by_distance(0, 0, []) == []
