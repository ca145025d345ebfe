from __future__ import annotations

import math

import pytest

from tripplanner.geo.distance import EARTH_RADIUS_KM, Coordinate, haversine_km


@pytest.mark.parametrize(
    "lat, lon",
    [(0.0, 0.0), (13.05, 80.2824), (-33.8688, 151.2093), (89.9, -179.9)],
)
def test_same_point_is_zero(lat, lon):
    assert haversine_km(lat, lon, lat, lon) == 0.0


def test_symmetric():
    chennai = Coordinate(13.0500, 80.2824)
    madurai = Coordinate(9.9195, 78.1193)
    there = haversine_km(chennai.lat, chennai.lon, madurai.lat, madurai.lon)
    back = haversine_km(madurai.lat, madurai.lon, chennai.lat, chennai.lon)
    assert there == pytest.approx(back)


def test_one_degree_of_longitude_at_equator():
    assert haversine_km(0, 0, 0, 1) == pytest.approx(EARTH_RADIUS_KM * math.pi / 180)


def test_antipodal_points_are_half_the_circumference():
    assert haversine_km(0, 0, 0, 180) == pytest.approx(EARTH_RADIUS_KM * math.pi)


def test_chennai_to_madurai_is_roughly_400_km():
    assert 380 < haversine_km(13.0500, 80.2824, 9.9195, 78.1193) < 440


def test_out_of_range_input_is_not_rejected():
    result = haversine_km(100.0, 0.0, 0.0, 400.0)
    assert math.isfinite(result)
