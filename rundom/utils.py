# rundom/utils.py

import numpy as np
from typing import List, Sequence
from rundom.geo_point import GeoPoint

EARTH_RADIUS_M = 6_371_000.0  # mean Earth radius


def wrap_longitude(lon: float) -> float:
    """
    Wrap a longitude in degrees into [-180, 180].
    """
    if -180.0 <= lon <= 180.0:
        return float(lon)
    return float((lon + 180.0) % 360.0 - 180.0)


def haversine_m(a: GeoPoint, b: GeoPoint) -> float:
    """
    Great-circle distance in meters between two points.
    """
    lat1, lon1 = np.radians(a.latitude), np.radians(a.longitude)
    lat2, lon2 = np.radians(b.latitude), np.radians(b.longitude)
    h = np.sin((lat2 - lat1) / 2) ** 2 + np.cos(lat1) * np.cos(lat2) * np.sin((lon2 - lon1) / 2) ** 2
    return float(2 * EARTH_RADIUS_M * np.arcsin(np.sqrt(min(h, 1.0))))


def batch_haversine_m(points: np.ndarray, ref: GeoPoint) -> np.ndarray:
    """
    Vectorized great-circle distance from each (lat, lon) row in `points` to `ref`.
    """
    pts = np.radians(np.asarray(points, dtype=float).reshape(-1, 2))
    lat1, lon1 = np.radians(ref.latitude), np.radians(ref.longitude)
    lat2, lon2 = pts[:, 0], pts[:, 1]
    h = np.sin((lat2 - lat1) / 2) ** 2 + np.cos(lat1) * np.cos(lat2) * np.sin((lon2 - lon1) / 2) ** 2
    return 2 * EARTH_RADIUS_M * np.arcsin(np.sqrt(np.clip(h, 0.0, 1.0)))


def path_lengths_m(points: Sequence[GeoPoint]) -> np.ndarray:
    """
    Great-circle length of every consecutive segment of a path.
    """
    if len(points) < 2:
        return np.zeros(0)
    coords = np.radians(np.array([p.as_tuple() for p in points], dtype=float))
    lat1, lon1 = coords[:-1, 0], coords[:-1, 1]
    lat2, lon2 = coords[1:, 0], coords[1:, 1]
    h = np.sin((lat2 - lat1) / 2) ** 2 + np.cos(lat1) * np.cos(lat2) * np.sin((lon2 - lon1) / 2) ** 2
    return 2 * EARTH_RADIUS_M * np.arcsin(np.sqrt(np.clip(h, 0.0, 1.0)))


def initial_bearing_deg(a: GeoPoint, b: GeoPoint) -> float:
    """
    Initial great-circle bearing from a to b.
    Returns:
        float: degrees clockwise from north, in [0, 360)
    """
    lat1, lat2 = np.radians(a.latitude), np.radians(b.latitude)
    dlon = np.radians(b.longitude - a.longitude)
    x = np.sin(dlon) * np.cos(lat2)
    y = np.cos(lat1) * np.sin(lat2) - np.sin(lat1) * np.cos(lat2) * np.cos(dlon)
    return float(np.degrees(np.arctan2(x, y)) % 360.0)


def destination_point(origin: GeoPoint, bearing_deg: float, distance_m: float) -> GeoPoint:
    """
    Point reached by travelling `distance_m` along a great circle from `origin`.
    """
    delta = distance_m / EARTH_RADIUS_M
    theta = np.radians(bearing_deg)
    lat1, lon1 = np.radians(origin.latitude), np.radians(origin.longitude)
    sin_lat2 = np.sin(lat1) * np.cos(delta) + np.cos(lat1) * np.sin(delta) * np.cos(theta)
    lat2 = np.arcsin(np.clip(sin_lat2, -1.0, 1.0))
    lon2 = lon1 + np.arctan2(
        np.sin(theta) * np.sin(delta) * np.cos(lat1),
        np.cos(delta) - np.sin(lat1) * np.sin(lat2),
    )
    return GeoPoint(float(np.degrees(lat2)), wrap_longitude(float(np.degrees(lon2))))


def bubble_outline(center: GeoPoint, radius_m: float, points: int = 50) -> List[GeoPoint]:
    """
    Polygon approximating the bubble boundary, as drawn around the play area on the map.
    Latitude and longitude radii are derived separately so the ring stays round on a
    Mercator map.
    """
    radius_lat = np.degrees(radius_m / EARTH_RADIUS_M)
    radius_lon = radius_lat / np.cos(np.radians(center.latitude))
    theta = np.arange(points) * (2 * np.pi / points)
    lats = np.clip(center.latitude + radius_lat * np.sin(theta), -90.0, 90.0)
    lons = center.longitude + radius_lon * np.cos(theta)
    return [GeoPoint(float(lat), wrap_longitude(float(lon))) for lat, lon in zip(lats, lons)]


def millis_to_hms(milliseconds: int) -> str:
    """
    Format a duration as HH:MM:SS. Hours wrap modulo 24.
    """
    s = milliseconds // 1000 % 60
    m = milliseconds // (1000 * 60) % 60
    h = milliseconds // (1000 * 60 * 60) % 24
    return f"{h:02d}:{m:02d}:{s:02d}"


def format_distance(distance_m: float) -> str:
    return f"{distance_m:.2f}"
