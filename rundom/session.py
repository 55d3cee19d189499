"""Run lifecycle: place stars, follow the observer, collect, summarize.

A session moves through IDLE -> ACTIVE -> COMPLETE. The host feeds observer
positions with `observer_moved` and triggers `collect` when the user taps
collect; listeners receive the resulting events synchronously. All calls are
expected from one logical thread.
"""

import logging
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Callable, List, Optional, Sequence, Union

from config_loader import SessionConfig
from rundom.errors import InvalidArgument, InvalidState
from rundom.geo_point import GeoPoint
from rundom.proximity_tracker import ProximityTracker
from rundom.region_sampler import RegionSampler
from rundom.route_accumulator import RouteAccumulator
from rundom.target import Target
from rundom.utils import format_distance

logger = logging.getLogger(__name__)


class SessionState(Enum):
    IDLE = "idle"
    ACTIVE = "active"
    COMPLETE = "complete"


@dataclass(frozen=True)
class SessionSummary:
    elapsed: str          # HH:MM:SS
    distance: str         # meters, two decimals
    distance_m: float
    collected: int
    path_points: int


@dataclass(frozen=True)
class ObserverMoved:
    position: GeoPoint
    nearest_id: Optional[int]
    nearest_distance_m: Optional[float]
    capturable_id: Optional[int]


@dataclass(frozen=True)
class TargetCaptured:
    target: Target
    remaining: int


@dataclass(frozen=True)
class AllTargetsCaptured:
    summary: SessionSummary


SessionEvent = Union[ObserverMoved, TargetCaptured, AllTargetsCaptured]


class Session:
    """Owns the tracker and the route of a single run."""

    def __init__(self, config: Optional[SessionConfig] = None,
                 sampler: Optional[RegionSampler] = None,
                 clock: Callable[[], datetime] = datetime.now):
        self.config = config or SessionConfig()
        self.sampler = sampler or RegionSampler(seed=self.config.seed,
                                                max_attempts=self.config.max_attempts)
        self.clock = clock
        self.tracker = ProximityTracker()
        self.route = RouteAccumulator(clock=clock)
        self.state = SessionState.IDLE
        self.center: Optional[GeoPoint] = None
        self.radius_m: Optional[float] = None
        self.total = 0
        self.capturable_id: Optional[int] = None
        self.summary: Optional[SessionSummary] = None
        self._listeners: List[Callable[[SessionEvent], None]] = []

    def subscribe(self, listener: Callable[[SessionEvent], None]):
        self._listeners.append(listener)

    def _emit(self, event: SessionEvent):
        for listener in self._listeners:
            listener(event)

    def begin(self, center: GeoPoint, radius_m: Optional[float] = None,
              count: Optional[int] = None,
              targets: Optional[Sequence[GeoPoint]] = None) -> List[Target]:
        """Start a run around `center`.

        Args:
            center: Observer position when the run starts
            radius_m: Bubble radius, defaults to the configured one
            count: Number of stars to place, defaults to the configured one
            targets: Fixed star positions; skips random placement when given

        Returns:
            List[Target]: the placed stars
        """
        if self.state == SessionState.ACTIVE:
            raise InvalidState("a session is already active")

        radius_m = self.config.radius_m if radius_m is None else radius_m
        if not radius_m > 0:
            raise InvalidArgument(f"radius must be positive, got {radius_m}")

        if targets is None:
            count = self.config.target_count if count is None else count
            points = self.sampler.sample_many(center, radius_m, count)
        else:
            points = list(targets)

        placed = self.tracker.begin(points)
        self.route.reset()
        self.route.start(self.clock())
        self.center = center
        self.radius_m = radius_m
        self.total = len(placed)
        self.capturable_id = None
        self.summary = None
        self.state = SessionState.ACTIVE
        logger.info(f"Session started at {center} with {self.total} stars in {radius_m} m")
        return placed

    def observer_moved(self, position: GeoPoint) -> Optional[int]:
        """Feed a new observer position. Returns the id of a collectable star, if any."""
        if self.state != SessionState.ACTIVE:
            return None

        self.route.record(position)
        found = self.tracker.nearest(position)
        nearest_id, nearest_dist = (found[0].id, found[1]) if found else (None, None)
        if nearest_dist is not None and nearest_dist < self.config.capture_threshold_m:
            self.capturable_id = nearest_id
        else:
            self.capturable_id = None

        logger.debug(f"Observer at {position.as_tuple()}, nearest star {nearest_id} "
                     f"at {nearest_dist} m")
        self._emit(ObserverMoved(position, nearest_id, nearest_dist, self.capturable_id))
        return self.capturable_id

    def collect(self, target_id: Optional[int] = None) -> bool:
        """Collect a star, by default the one currently in reach.

        Returns:
            bool: True if a star was collected
        """
        if self.state != SessionState.ACTIVE:
            return False
        target_id = self.capturable_id if target_id is None else target_id
        if target_id is None:
            return False

        target = self.tracker.capture(target_id)
        if target is None:
            return False
        if self.capturable_id == target_id:
            self.capturable_id = None

        remaining = self.tracker.remaining()
        logger.info(f"Collected {target.label} ({self.bag_label})")
        self._emit(TargetCaptured(target, remaining))

        if remaining == 0:
            self._complete()
        return True

    def _complete(self):
        now = self.clock()
        distance_m = self.route.total_distance_m()
        self.summary = SessionSummary(
            elapsed=self.route.elapsed(now),
            distance=format_distance(distance_m),
            distance_m=distance_m,
            collected=len(self.tracker.captured),
            path_points=len(self.route),
        )
        logger.info(f"All stars collected: {self.summary.distance} m in {self.summary.elapsed}")
        self.state = SessionState.COMPLETE
        self.route.reset()
        self._emit(AllTargetsCaptured(self.summary))

    def end(self):
        """Abandon the run and drop every star and route point."""
        self.tracker.clear()
        self.route.reset()
        self.capturable_id = None
        self.state = SessionState.IDLE
        logger.info("Session ended")

    @property
    def collected(self) -> int:
        return len(self.tracker.captured)

    @property
    def bag_label(self) -> str:
        return f"{self.collected}/{self.total}"
