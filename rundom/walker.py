# rundom/walker.py

from dataclasses import dataclass, field
from typing import List

from rundom.geo_point import GeoPoint
from rundom.utils import destination_point, haversine_m, initial_bearing_deg


@dataclass
class Walker:
    # Current position
    position: GeoPoint = field(default_factory=lambda: GeoPoint(0.0, 0.0))

    # Heading (degrees clockwise from north)
    heading_deg: float = 0.0

    # Step length (meters)
    step_m: float = 1.5

    # History logs
    path_history: List[GeoPoint] = field(default_factory=list)
    heading_history: List[float] = field(default_factory=list)

    def __post_init__(self):
        self.log_state()

    def turn_toward(self, point: GeoPoint):
        """Face the initial great-circle bearing to `point`."""
        if point != self.position:
            self.heading_deg = initial_bearing_deg(self.position, point)

    def move_forward(self, limit: GeoPoint = None):
        """Walk one step along the heading. Lands on `limit` if it is closer than a step."""
        if limit is not None and haversine_m(self.position, limit) <= self.step_m:
            self.position = limit
        else:
            self.position = destination_point(self.position, self.heading_deg, self.step_m)
        self.log_state()

    def log_state(self):
        """Store current state to history."""
        self.path_history.append(self.position)
        self.heading_history.append(self.heading_deg)

    def reset(self, position: GeoPoint = None):
        """Reset walker to `position` (default: origin)."""
        self.position = position if position is not None else GeoPoint(0.0, 0.0)
        self.heading_deg = 0.0
        self.path_history.clear()
        self.heading_history.clear()
        self.log_state()
