from __future__ import annotations

from datetime import time

import pytest

from src.app.services.itinerary_search_service import search
from src.domain.algorithms.strategies import SearchRequest
from src.domain.algorithms.walking_transfer import WalkingTransferStrategy
from src.domain.models import Itinerary, NetworkBuilder, NetworkSnapshot, TravelMode


def _walk_network(with_walk: bool = True) -> NetworkSnapshot:
    b = NetworkBuilder()
    b.add_stop(19, "Terminal", lat=-34.6000, lon=-58.4000)
    b.add_stop(20, "Calle 20", lat=-34.6010, lon=-58.4000)
    b.add_stop(21, "Calle 21", lat=-34.6020, lon=-58.4000)
    b.add_stop(22, "Esquina", lat=-34.6030, lon=-58.4000)
    b.add_stop(30, "Depósito", lat=-34.6030, lon=-58.4100)
    b.add_stop(31, "Frente", lat=-34.6030, lon=-58.4010)
    b.add_stop(6, "Hospital", lat=-34.6100, lon=-58.4010)
    b.add_line("L1", stop_codes=[19, 20, 21, 22])
    b.add_line("L3", stop_codes=[30, 31, 6])
    b.add_segment(19, 20, 270)
    b.add_segment(20, 21, 300)
    b.add_segment(21, 22, 270)
    b.add_segment(30, 31, 120)
    b.add_segment(31, 6, 210)
    if with_walk:
        b.add_segment(22, 31, 94, mode=TravelMode.WALK)
    b.add_schedule_entry("L1", 1, "10:40")
    b.add_schedule_entry("L3", 1, "10:50")
    b.add_schedule_entry("L3", 1, "10:58")
    return b.build()


def test_walking_transfer_builds_bus_walk_bus_itinerary() -> None:
    network = _walk_network()

    results = search(20, 6, 1, time(10, 30), network)

    assert len(results) == 1
    first, walk, last = results[0].segments

    assert first.line.code == "L1"
    assert first.departure == time(10, 44, 30)
    assert first.duration_s == 570

    assert walk.is_walk
    assert walk.line is None
    assert walk.mode is TravelMode.WALK
    assert walk.departure == time(10, 54)
    assert walk.duration_s == 94
    assert [s.code for s in walk.stops] == [22, 31]
    assert walk.distance_m == pytest.approx(91.5, abs=1.0)

    assert last.line.code == "L3"
    assert last.departure == time(11, 0)
    assert last.duration_s == 210
    assert results[0].line_codes == ("L1", None, "L3")
    assert results[0].num_transfers == 1


def test_walk_tier_may_reboard_the_same_line_once() -> None:
    b = NetworkBuilder()
    for code in (1, 2, 3, 4, 5):
        b.add_stop(code)
    b.add_line("L1", stop_codes=[1, 2, 3, 4, 5])
    b.add_segment(1, 2, 60)
    b.add_segment(2, 3, 60)
    b.add_segment(3, 4, 60)
    b.add_segment(4, 5, 60)
    b.add_segment(2, 4, 30, mode=TravelMode.WALK)
    b.add_segment(3, 2, 30, mode=TravelMode.WALK)
    b.add_schedule_entry("L1", 1, "08:00")
    network = b.build()
    request = SearchRequest(
        origin=network.stop(1),
        destination=network.stop(5),
        weekday=1,
        not_before_s=0,
        network=network,
    )
    results: list[Itinerary] = []

    assert WalkingTransferStrategy().try_find(request, results)
    assert len(results) == 1
    assert results[0].line_codes == ("L1", None, "L1")
    first, walk, last = results[0].segments
    assert [s.code for s in walk.stops] == [2, 4]
    assert walk.distance_m is None
    assert last.departure_s >= walk.arrival_s


def test_walk_tier_finds_nothing_without_walk_segments() -> None:
    network = _walk_network(with_walk=False)

    assert search(20, 6, 1, time(10, 30), network) == []
