"""Uniform random placement of stars inside a circular bubble.

Points are drawn on a local flat-Earth approximation around the bubble center,
then checked against the true great-circle distance and redrawn when they fall
outside. The flat approximation degrades near the poles and for large radii, so
the rejection step is what guarantees every returned point is inside the bubble.
"""

import logging
import numpy as np
from typing import List, Optional, Tuple

from rundom.errors import InvalidArgument, SamplingExhausted
from rundom.geo_point import GeoPoint
from rundom.utils import haversine_m, wrap_longitude

logger = logging.getLogger(__name__)

METERS_PER_DEGREE = 111_000.0


class RegionSampler:
    """Draws areally uniform points inside a disc around a center coordinate."""

    def __init__(self, rng: Optional[np.random.Generator] = None, seed: Optional[int] = None,
                 max_attempts: int = 10_000):
        """
        Args:
            rng: Random generator to draw from. Takes precedence over `seed`.
            seed: Seed for a fresh generator when `rng` is not given
            max_attempts: Redraws allowed per sample before giving up
        """
        if max_attempts < 1:
            raise InvalidArgument(f"max_attempts must be >= 1, got {max_attempts}")
        self.rng = rng if rng is not None else np.random.default_rng(seed)
        self.max_attempts = max_attempts

    def draw(self, center: GeoPoint, radius_m: float) -> Tuple[float, float]:
        """Single candidate (lat, lon) from the flat-Earth approximation, unvalidated.

        The longitude offset is stretched by 1/cos(latitude) to undo meridian
        convergence. Longitude is wrapped, latitude may leave [-90, 90].
        """
        u, v = self.rng.random(2)
        radius_deg = radius_m / METERS_PER_DEGREE
        w = radius_deg * np.sqrt(u)
        t = 2 * np.pi * v
        dx = w * np.cos(t)
        dy = w * np.sin(t)
        lat = center.latitude + dy
        lon = center.longitude + dx / np.cos(np.radians(center.latitude))
        return float(lat), wrap_longitude(float(lon))

    def sample(self, center: GeoPoint, radius_m: float) -> GeoPoint:
        """Uniform point strictly closer than `radius_m` to `center`."""
        if not radius_m > 0:
            raise InvalidArgument(f"radius must be positive, got {radius_m}")

        for attempt in range(1, self.max_attempts + 1):
            lat, lon = self.draw(center, radius_m)
            if not -90.0 <= lat <= 90.0:
                continue
            point = GeoPoint(lat, lon)
            if haversine_m(center, point) < radius_m:
                if attempt > 1:
                    logger.debug(f"Sample accepted after {attempt} draws")
                return point

        raise SamplingExhausted(
            f"No point within {radius_m} m of {center} after {self.max_attempts} draws"
        )

    def sample_many(self, center: GeoPoint, radius_m: float, count: int) -> List[GeoPoint]:
        """Draw `count` independent points inside the same bubble."""
        if count < 1:
            raise InvalidArgument(f"count must be >= 1, got {count}")
        points = [self.sample(center, radius_m) for _ in range(count)]
        logger.debug(f"Sampled {count} points within {radius_m} m of {center}")
        return points
