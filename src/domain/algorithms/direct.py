from __future__ import annotations

import logging
from dataclasses import dataclass

from src.domain.models.itinerary import Itinerary

from .strategies import SearchRequest, SearchTier, forward_range

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class DirectStrategy:
    """Trips completed on a single line, at most one per line."""

    tier: SearchTier = SearchTier.DIRECT

    def try_find(self, request: SearchRequest, results: list[Itinerary]) -> bool:
        logger.debug(
            "Direct search %s -> %s", request.origin.code, request.destination.code
        )
        found = False
        for line in request.network.lines.values():
            indices = forward_range(line, request.origin, request.destination)
            if indices is None:
                continue
            leg = request.resolve(line, *indices, request.not_before_s)
            if leg is None:
                continue
            results.append(Itinerary(segments=(leg,)))
            found = True
        return found

    def order(self, results: list[Itinerary]) -> list[Itinerary]:
        return sorted(results, key=lambda it: it.segments[0].line.code)
