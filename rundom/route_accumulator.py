# rundom/route_accumulator.py

from datetime import datetime, timedelta
from typing import Callable, List, Optional, Tuple

from rundom.geo_point import GeoPoint
from rundom.utils import millis_to_hms, path_lengths_m


class RouteAccumulator:
    """Walked path of the observer during a run, plus its start time."""

    def __init__(self, clock: Callable[[], datetime] = datetime.now):
        self.clock = clock
        self._points: List[GeoPoint] = []
        self.start_time: Optional[datetime] = None

    def reset(self):
        """Empty the path and forget the start time."""
        self._points.clear()
        self.start_time = None

    def start(self, now: Optional[datetime] = None):
        self.start_time = now if now is not None else self.clock()

    def record(self, point: GeoPoint, now: Optional[datetime] = None) -> bool:
        """Append `point` unless it equals the last recorded one.

        Returns:
            bool: True if the point was appended
        """
        if self.start_time is None:
            self.start(now)
        if self._points and self._points[-1] == point:
            return False
        self._points.append(point)
        return True

    def total_distance_m(self) -> float:
        return float(path_lengths_m(self._points).sum())

    def elapsed_ms(self, now: Optional[datetime] = None) -> int:
        """Milliseconds since the start time, 0 when not started or when `now` is earlier."""
        if self.start_time is None:
            return 0
        now = now if now is not None else self.clock()
        delta = now - self.start_time
        return max(0, delta // timedelta(milliseconds=1))

    def elapsed(self, now: Optional[datetime] = None) -> str:
        """Elapsed time as HH:MM:SS. Durations of 24 h or more wrap around."""
        return millis_to_hms(self.elapsed_ms(now))

    @property
    def points(self) -> Tuple[GeoPoint, ...]:
        return tuple(self._points)

    def __len__(self):
        return len(self._points)
