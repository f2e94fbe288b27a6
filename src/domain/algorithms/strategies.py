from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Protocol

from src.domain.models.itinerary import Itinerary, TripSegment
from src.domain.models.line import Line
from src.domain.models.network import NetworkSnapshot
from src.domain.models.stop import Stop

from .schedule import earliest_feasible_run
from .segment_time import MissingSegmentPolicy


class SearchTier(str, Enum):
    DIRECT = "direct"
    TRANSFER = "transfer"
    WALK = "walk"


@dataclass(frozen=True, slots=True)
class SearchRequest:
    """Everything a strategy needs for one search call."""

    origin: Stop
    destination: Stop
    weekday: int
    not_before_s: int
    network: NetworkSnapshot
    policy: MissingSegmentPolicy = MissingSegmentPolicy.ZERO
    fallback_s: int = 0

    def resolve(
        self, line: Line, start: int, end: int, not_before_s: int
    ) -> TripSegment | None:
        return earliest_feasible_run(
            line,
            self.weekday,
            start,
            end,
            not_before_s,
            self.network.segments,
            policy=self.policy,
            fallback_s=self.fallback_s,
        )


@dataclass(slots=True)
class FirstLeg:
    """Leg from the origin to a transfer stop, resolved at most once.

    Resolution is deferred until a continuation actually needs it.
    """

    request: SearchRequest
    line: Line
    start: int
    end: int
    _resolved: bool = field(default=False, init=False, repr=False)
    _leg: TripSegment | None = field(default=None, init=False, repr=False)

    def get(self) -> TripSegment | None:
        if not self._resolved:
            self._leg = self.request.resolve(
                self.line, self.start, self.end, self.request.not_before_s
            )
            self._resolved = True
        return self._leg


class SearchStrategy(Protocol):
    tier: SearchTier

    def try_find(self, request: SearchRequest, results: list[Itinerary]) -> bool:
        """Append every itinerary found to ``results``; report whether any was."""
        ...

    def order(self, results: list[Itinerary]) -> list[Itinerary]: ...


def by_arrival(results: list[Itinerary]) -> list[Itinerary]:
    return sorted(results, key=lambda it: it.arrival_s)


def forward_range(line: Line, a: Stop, b: Stop) -> tuple[int, int] | None:
    """Indices of ``a`` and ``b`` on ``line`` when ``a`` comes strictly before ``b``."""

    i = line.index_of(a)
    j = line.index_of(b)
    if i is None or j is None or i >= j:
        return None
    return i, j
