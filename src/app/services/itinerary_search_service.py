from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime, time

from src.app.ports.output import INetworkRepository
from src.app.settings import SearchSettings
from src.domain.algorithms.direct import DirectStrategy
from src.domain.algorithms.strategies import SearchRequest, SearchStrategy
from src.domain.algorithms.time_utils import (
    format_seconds,
    parse_time_of_day,
    seconds_since_midnight,
)
from src.domain.algorithms.transfer import TransferStrategy
from src.domain.algorithms.walking_transfer import WalkingTransferStrategy
from src.domain.models import Itinerary, NetworkSnapshot, Stop

logger = logging.getLogger(__name__)

STRATEGIES: tuple[SearchStrategy, ...] = (
    DirectStrategy(),
    TransferStrategy(),
    WalkingTransferStrategy(),
)


def search(
    origin: Stop | int,
    destination: Stop | int,
    weekday: int,
    not_before: time | datetime | str,
    network: NetworkSnapshot,
    *,
    settings: SearchSettings | None = None,
) -> list[Itinerary]:
    """Itineraries from ``origin`` to ``destination`` leaving no earlier than ``not_before``.

    Tiers run in order (direct, single transfer, walking transfer) and the
    first tier that yields anything ends the search. An empty list means no
    itinerary exists on that weekday; unknown stops raise ``StopNotFound``.
    """

    settings = settings or SearchSettings()
    a = network.stop(origin)
    b = network.stop(destination)
    if a == b:
        return []

    request = SearchRequest(
        origin=a,
        destination=b,
        weekday=int(weekday),
        not_before_s=seconds_since_midnight(parse_time_of_day(not_before)),
        network=network,
        policy=settings.missing_segment_policy,
        fallback_s=settings.fallback_segment_s,
    )

    results: list[Itinerary] = []
    for strategy in STRATEGIES:
        if strategy.try_find(request, results):
            ordered = strategy.order(results)
            logger.info(
                "Search %s -> %s (day %d, from %s): %d itineraries from %s tier",
                a.code,
                b.code,
                request.weekday,
                format_seconds(request.not_before_s),
                len(ordered),
                strategy.tier.value,
            )
            return ordered

    logger.info(
        "Search %s -> %s (day %d, from %s): no itinerary",
        a.code,
        b.code,
        request.weekday,
        format_seconds(request.not_before_s),
    )
    return []


@dataclass(slots=True)
class ItinerarySearchService:
    """Application service (use case) for itinerary search.

    Loads the network through its port and delegates to ``search``.
    """

    network_repository: INetworkRepository
    settings: SearchSettings = field(default_factory=SearchSettings.from_env)

    def search(
        self,
        *,
        origin: Stop | int,
        destination: Stop | int,
        weekday: int,
        not_before: time | datetime | str,
    ) -> list[Itinerary]:
        network = self.network_repository.load_network()
        return search(
            origin,
            destination,
            weekday,
            not_before,
            network,
            settings=self.settings,
        )
