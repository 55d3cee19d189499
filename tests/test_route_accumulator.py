# tests/test_route_accumulator.py

from datetime import datetime, timedelta

import pytest

from rundom.geo_point import GeoPoint
from rundom.route_accumulator import RouteAccumulator


def test_duplicate_point_is_recorded_once():
    route = RouteAccumulator()
    assert route.record(GeoPoint(0.0, 0.0))
    assert not route.record(GeoPoint(0.0, 0.0))
    assert len(route) == 1


def test_only_consecutive_duplicates_are_dropped():
    route = RouteAccumulator()
    for p in [(0.0, 0.0), (0.0, 0.001), (0.0, 0.001), (0.0, 0.0)]:
        route.record(GeoPoint(*p))
    assert route.points == (GeoPoint(0.0, 0.0), GeoPoint(0.0, 0.001), GeoPoint(0.0, 0.0))


def test_one_degree_of_longitude_at_equator():
    route = RouteAccumulator()
    route.record(GeoPoint(0.0, 0.0))
    route.record(GeoPoint(0.0, 1.0))
    assert route.total_distance_m() == pytest.approx(111_195, rel=0.01)


def test_distance_of_short_paths_is_zero():
    route = RouteAccumulator()
    assert route.total_distance_m() == 0.0
    route.record(GeoPoint(10.0, 10.0))
    assert route.total_distance_m() == 0.0


def test_distance_sums_segments():
    route = RouteAccumulator()
    for lon in (0.0, 0.5, 1.0):
        route.record(GeoPoint(0.0, lon))
    assert route.total_distance_m() == pytest.approx(111_195, rel=0.01)


def test_elapsed_five_seconds():
    t0 = datetime(2022, 6, 1, 9, 0, 0)
    route = RouteAccumulator()
    route.start(t0)
    assert route.elapsed(t0 + timedelta(milliseconds=5000)) == "00:00:05"
    assert route.elapsed_ms(t0 + timedelta(milliseconds=5000)) == 5000


def test_elapsed_wraps_after_a_day():
    t0 = datetime(2022, 6, 1, 9, 0, 0)
    route = RouteAccumulator()
    route.start(t0)
    assert route.elapsed(t0 + timedelta(hours=25, minutes=1, seconds=2)) == "01:01:02"


def test_first_record_starts_the_clock(clock):
    route = RouteAccumulator(clock=clock)
    assert route.elapsed() == "00:00:00"
    route.record(GeoPoint(0.0, 0.0))
    clock.advance(minutes=2, seconds=30)
    assert route.elapsed() == "00:02:30"


def test_elapsed_before_start_is_zero():
    t0 = datetime(2022, 6, 1, 9, 0, 0)
    route = RouteAccumulator()
    route.start(t0)
    assert route.elapsed(t0 - timedelta(seconds=3)) == "00:00:00"


def test_reset_clears_points_and_start(clock):
    route = RouteAccumulator(clock=clock)
    route.record(GeoPoint(0.0, 0.0))
    route.record(GeoPoint(0.0, 1.0))
    route.reset()
    assert len(route) == 0
    assert route.start_time is None
    assert route.total_distance_m() == 0.0
