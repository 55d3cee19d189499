# rundom/proximity_tracker.py

import logging
import numpy as np
from typing import List, Optional, Sequence, Tuple

from rundom.errors import InvalidArgument
from rundom.geo_point import GeoPoint
from rundom.target import Target
from rundom.utils import batch_haversine_m

logger = logging.getLogger(__name__)


class ProximityTracker:
    """Live set of targets and nearest-target lookup against an observer position.

    Targets keep their insertion order so scans and tie-breaks are deterministic.
    """

    def __init__(self):
        self._live: List[Target] = []
        self._captured: List[Target] = []

    def begin(self, points: Sequence[GeoPoint]) -> List[Target]:
        """Replace the live set. Ids follow input order."""
        if len(points) == 0:
            raise InvalidArgument("cannot begin with an empty target batch")
        self._live = [Target(id=i, position=p) for i, p in enumerate(points)]
        self._captured = []
        logger.debug(f"Tracking {len(self._live)} targets")
        return list(self._live)

    def nearest(self, observer: GeoPoint) -> Optional[Tuple[Target, float]]:
        """Closest live target and its distance in meters, or None when none are left."""
        if not self._live:
            return None
        coords = np.array([t.position.as_tuple() for t in self._live])
        dists = batch_haversine_m(coords, observer)
        # argmin returns the first minimum, i.e. the lowest insertion index on ties
        idx = int(np.argmin(dists))
        return self._live[idx], float(dists[idx])

    def update(self, observer: GeoPoint, capture_threshold_m: float) -> Optional[int]:
        """Id of the nearest live target if it is strictly closer than the threshold."""
        if capture_threshold_m < 0:
            raise InvalidArgument(f"capture threshold must be >= 0, got {capture_threshold_m}")
        found = self.nearest(observer)
        if found is None:
            return None
        target, dist = found
        if dist < capture_threshold_m:
            return target.id
        return None

    def capture(self, target_id: int) -> Optional[Target]:
        """Remove a target from play. Unknown or already captured ids are ignored."""
        for i, target in enumerate(self._live):
            if target.id == target_id:
                del self._live[i]
                target.captured = True
                self._captured.append(target)
                logger.debug(f"Captured {target.label}, {len(self._live)} left")
                return target
        return None

    def clear(self):
        self._live = []
        self._captured = []

    def remaining(self) -> int:
        return len(self._live)

    @property
    def is_complete(self) -> bool:
        return not self._live

    @property
    def targets(self) -> Tuple[Target, ...]:
        return tuple(self._live)

    @property
    def captured(self) -> Tuple[Target, ...]:
        return tuple(self._captured)

    def get(self, target_id: int) -> Optional[Target]:
        return next((t for t in self._live if t.id == target_id), None)
