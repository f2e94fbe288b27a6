from __future__ import annotations

import logging
from dataclasses import dataclass

from src.domain.models.itinerary import Itinerary, TripSegment
from src.domain.models.line import Line
from src.domain.models.segment import Segment

from .geo_utils import haversine_distance_m
from .strategies import FirstLeg, SearchRequest, SearchTier, by_arrival, forward_range

logger = logging.getLogger(__name__)

WALK_MARKER = "WALK"


@dataclass(frozen=True, slots=True)
class WalkingTransferStrategy:
    """Bus, walk, bus trips through a WALK segment between two lines.

    The final line may be the same as the first one. Only the first feasible
    combination is kept for each ``(A, WALK, C)`` triple.
    """

    tier: SearchTier = SearchTier.WALK

    def try_find(self, request: SearchRequest, results: list[Itinerary]) -> bool:
        logger.debug(
            "Walking transfer search %s -> %s",
            request.origin.code,
            request.destination.code,
        )
        found: set[tuple[str, str, str]] = set()
        network = request.network
        for line_a in network.lines.values():
            i_a = line_a.index_of(request.origin)
            if i_a is None:
                continue
            for j in range(i_a + 1, len(line_a.stops)):
                first = FirstLeg(request, line_a, i_a, j)
                for walk in network.walk_segments_from(line_a.stops[j]):
                    self._connect(request, line_a, first, walk, results, found)
        return bool(found)

    def _connect(
        self,
        request: SearchRequest,
        line_a: Line,
        first_leg: FirstLeg,
        walk: Segment,
        results: list[Itinerary],
        found: set[tuple[str, str, str]],
    ) -> None:
        for line_c in request.network.lines.values():
            indices = forward_range(line_c, walk.end, request.destination)
            if indices is None:
                continue
            key = (line_a.code, WALK_MARKER, line_c.code)
            if key in found:
                continue

            first = first_leg.get()
            if first is None:
                continue
            on_foot = TripSegment(
                stops=(walk.start, walk.end),
                departure_s=first.arrival_s,
                duration_s=walk.duration_s,
                line=None,
                distance_m=_walk_distance_m(walk),
            )
            last = request.resolve(line_c, *indices, on_foot.arrival_s)
            if last is None:
                continue

            logger.debug(
                "Walking transfer %s -> %s via %s-%s",
                line_a.code,
                line_c.code,
                walk.start.code,
                walk.end.code,
            )
            results.append(Itinerary(segments=(first, on_foot, last)))
            found.add(key)

    def order(self, results: list[Itinerary]) -> list[Itinerary]:
        return by_arrival(results)


def _walk_distance_m(walk: Segment) -> float | None:
    if walk.start.location is None or walk.end.location is None:
        return None
    return haversine_distance_m(walk.start.location, walk.end.location)
