# rundom/geo_point.py

import math
from dataclasses import dataclass

from rundom.errors import InvalidArgument


@dataclass(frozen=True)
class GeoPoint:
    """A latitude/longitude pair in decimal degrees."""

    latitude: float
    longitude: float

    def __post_init__(self):
        lat, lon = self.latitude, self.longitude
        if not (math.isfinite(lat) and math.isfinite(lon)):
            raise InvalidArgument(f"GeoPoint must be finite, got ({lat}, {lon})")
        if not -90.0 <= lat <= 90.0:
            raise InvalidArgument(f"latitude {lat} out of range [-90, 90]")
        if not -180.0 <= lon <= 180.0:
            raise InvalidArgument(f"longitude {lon} out of range [-180, 180]")

    def as_tuple(self):
        return self.latitude, self.longitude
