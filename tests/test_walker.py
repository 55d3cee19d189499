# tests/test_walker.py

import pytest

from rundom.geo_point import GeoPoint
from rundom.utils import haversine_m
from rundom.walker import Walker


def test_walks_toward_point():
    walker = Walker(position=GeoPoint(0.0, 0.0), step_m=2.0)
    goal = GeoPoint(0.0, 0.001)
    walker.turn_toward(goal)
    assert walker.heading_deg == pytest.approx(90.0)

    before = haversine_m(walker.position, goal)
    walker.move_forward()
    assert haversine_m(walker.position, goal) == pytest.approx(before - 2.0, abs=1e-3)
    assert len(walker.path_history) == 2
    assert walker.heading_history[-1] == pytest.approx(90.0)


def test_lands_on_point_within_a_step():
    goal = GeoPoint(0.0, 0.00001)   # ~1.1 m away
    walker = Walker(position=GeoPoint(0.0, 0.0), step_m=1.5)
    walker.turn_toward(goal)
    walker.move_forward(limit=goal)
    assert walker.position == goal


def test_reset():
    walker = Walker(position=GeoPoint(10.0, 10.0))
    walker.turn_toward(GeoPoint(10.0, 11.0))
    walker.move_forward()
    walker.reset(GeoPoint(1.0, 1.0))
    assert walker.position == GeoPoint(1.0, 1.0)
    assert walker.heading_deg == 0.0
    assert walker.path_history == [GeoPoint(1.0, 1.0)]
