from __future__ import annotations

from dataclasses import dataclass
from datetime import time

from src.domain.algorithms.time_utils import time_from_seconds

from .line import Line
from .segment import TravelMode
from .stop import Stop


@dataclass(frozen=True, slots=True)
class TripSegment:
    """A resolved portion of travel on one line, or one walk when ``line`` is None.

    Times are seconds since the service day's midnight.
    """

    stops: tuple[Stop, ...]
    departure_s: int
    duration_s: int
    line: Line | None = None
    distance_m: float | None = None

    @property
    def mode(self) -> TravelMode:
        return TravelMode.WALK if self.line is None else TravelMode.BUS

    @property
    def is_walk(self) -> bool:
        return self.line is None

    @property
    def first_stop(self) -> Stop:
        return self.stops[0]

    @property
    def last_stop(self) -> Stop:
        return self.stops[-1]

    @property
    def arrival_s(self) -> int:
        return self.departure_s + self.duration_s

    @property
    def departure(self) -> time:
        return time_from_seconds(self.departure_s)

    @property
    def arrival(self) -> time:
        return time_from_seconds(self.arrival_s)


@dataclass(frozen=True, slots=True)
class Itinerary:
    segments: tuple[TripSegment, ...]

    def __post_init__(self) -> None:
        if not self.segments:
            raise ValueError("An itinerary needs at least one segment")
        for a, b in zip(self.segments, self.segments[1:]):
            if a.last_stop != b.first_stop:
                raise ValueError(
                    f"Discontinuous itinerary: {a.last_stop.code} -> {b.first_stop.code}"
                )

    def __len__(self) -> int:
        return len(self.segments)

    def __iter__(self):
        return iter(self.segments)

    def __getitem__(self, index: int) -> TripSegment:
        return self.segments[index]

    @property
    def origin(self) -> Stop:
        return self.segments[0].first_stop

    @property
    def destination(self) -> Stop:
        return self.segments[-1].last_stop

    @property
    def departure_s(self) -> int:
        return self.segments[0].departure_s

    @property
    def arrival_s(self) -> int:
        return self.segments[-1].arrival_s

    @property
    def total_duration_s(self) -> int:
        # Wall clock, so waiting at transfer stops is included.
        return max(0, self.arrival_s - self.departure_s)

    @property
    def line_codes(self) -> tuple[str | None, ...]:
        return tuple(s.line.code if s.line else None for s in self.segments)

    @property
    def num_transfers(self) -> int:
        rides = [s for s in self.segments if not s.is_walk]
        return max(0, len(rides) - 1)
