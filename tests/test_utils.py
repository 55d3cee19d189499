# tests/test_utils.py

import numpy as np
import pytest

from rundom.errors import InvalidArgument
from rundom.geo_point import GeoPoint
from rundom.utils import (
    batch_haversine_m, bubble_outline, destination_point, format_distance,
    haversine_m, initial_bearing_deg, millis_to_hms, wrap_longitude,
)


@pytest.mark.parametrize("lat, lon", [(91.0, 0.0), (-90.5, 0.0), (0.0, 180.1), (0.0, -181.0),
                                      (float("nan"), 0.0), (0.0, float("inf"))])
def test_geopoint_rejects_out_of_range(lat, lon):
    with pytest.raises(InvalidArgument):
        GeoPoint(lat, lon)


def test_geopoint_is_a_value():
    assert GeoPoint(1.0, 2.0) == GeoPoint(1.0, 2.0)
    assert hash(GeoPoint(1.0, 2.0)) == hash(GeoPoint(1.0, 2.0))
    with pytest.raises(AttributeError):
        GeoPoint(1.0, 2.0).latitude = 3.0


@pytest.mark.parametrize("ms, expected", [
    (0, "00:00:00"),
    (5000, "00:00:05"),
    (5999, "00:00:05"),
    (61_000, "00:01:01"),
    (3_600_000 * 23 + 59 * 60_000 + 59_000, "23:59:59"),
    (3_600_000 * 24, "00:00:00"),
])
def test_millis_to_hms(ms, expected):
    assert millis_to_hms(ms) == expected


def test_format_distance():
    assert format_distance(111.194926) == "111.19"
    assert format_distance(0) == "0.00"


def test_haversine_quarter_meridian():
    assert haversine_m(GeoPoint(0.0, 0.0), GeoPoint(90.0, 0.0)) == pytest.approx(10_007_543, rel=1e-4)


def test_batch_matches_scalar():
    ref = GeoPoint(48.85, 2.35)
    pts = [GeoPoint(48.86, 2.36), GeoPoint(51.5, -0.12), GeoPoint(-33.9, 151.2)]
    batch = batch_haversine_m(np.array([p.as_tuple() for p in pts]), ref)
    assert list(batch) == pytest.approx([haversine_m(ref, p) for p in pts], rel=1e-9)


@pytest.mark.parametrize("lon, expected", [(190.0, -170.0), (-190.0, 170.0), (180.0, 180.0),
                                           (-180.0, -180.0), (540.0, -180.0)])
def test_wrap_longitude(lon, expected):
    assert wrap_longitude(lon) == pytest.approx(expected)


def test_initial_bearing():
    origin = GeoPoint(0.0, 0.0)
    assert initial_bearing_deg(origin, GeoPoint(1.0, 0.0)) == pytest.approx(0.0)
    assert initial_bearing_deg(origin, GeoPoint(0.0, 1.0)) == pytest.approx(90.0)
    assert initial_bearing_deg(origin, GeoPoint(0.0, -1.0)) == pytest.approx(270.0)


def test_destination_point_travels_requested_distance():
    origin = GeoPoint(45.0, 9.0)
    dest = destination_point(origin, 30.0, 250.0)
    assert haversine_m(origin, dest) == pytest.approx(250.0, rel=1e-6)
    assert initial_bearing_deg(origin, dest) == pytest.approx(30.0, abs=1e-3)


def test_bubble_outline_is_round():
    center = GeoPoint(45.0, 9.0)
    ring = bubble_outline(center, 500.0)
    assert len(ring) == 50
    dists = [haversine_m(center, p) for p in ring]
    assert dists == pytest.approx([500.0] * 50, rel=0.01)
