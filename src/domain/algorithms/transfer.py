from __future__ import annotations

import logging
from dataclasses import dataclass

from src.domain.models.itinerary import Itinerary
from src.domain.models.line import Line

from .strategies import FirstLeg, SearchRequest, SearchTier, by_arrival, forward_range

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class TransferStrategy:
    """Bus to bus trips with one transfer at a shared stop.

    Only the first feasible transfer stop along line A is kept for each
    ordered ``(A, B)`` line pair.
    """

    tier: SearchTier = SearchTier.TRANSFER

    def try_find(self, request: SearchRequest, results: list[Itinerary]) -> bool:
        logger.debug(
            "Transfer search %s -> %s", request.origin.code, request.destination.code
        )
        found: set[tuple[str, str]] = set()
        for line_a in request.network.lines.values():
            i_a = line_a.index_of(request.origin)
            if i_a is None:
                continue
            for j in range(i_a + 1, len(line_a.stops)):
                first = FirstLeg(request, line_a, i_a, j)
                self._connect(request, line_a, j, first, results, found)
        return bool(found)

    def _connect(
        self,
        request: SearchRequest,
        line_a: Line,
        j: int,
        first_leg: FirstLeg,
        results: list[Itinerary],
        found: set[tuple[str, str]],
    ) -> None:
        transfer_stop = line_a.stops[j]
        for line_b in request.network.lines.values():
            if line_b == line_a:
                continue
            key = (line_a.code, line_b.code)
            if key in found:
                continue
            indices = forward_range(line_b, transfer_stop, request.destination)
            if indices is None:
                continue

            first = first_leg.get()
            if first is None:
                continue
            second = request.resolve(line_b, *indices, first.arrival_s)
            if second is None:
                continue

            logger.debug(
                "Transfer %s -> %s at stop %s", line_a.code, line_b.code, transfer_stop.code
            )
            results.append(Itinerary(segments=(first, second)))
            found.add(key)

    def order(self, results: list[Itinerary]) -> list[Itinerary]:
        return by_arrival(results)
