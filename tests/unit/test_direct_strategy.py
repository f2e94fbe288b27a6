from __future__ import annotations

from datetime import time

from src.app.services.itinerary_search_service import search
from src.domain.algorithms.direct import DirectStrategy
from src.domain.algorithms.strategies import SearchRequest
from src.domain.algorithms.time_utils import seconds_since_midnight
from src.domain.models import Itinerary, NetworkBuilder, NetworkSnapshot


def _single_line_network() -> NetworkSnapshot:
    b = NetworkBuilder()
    for code in (4, 5, 6, 7, 8, 9):
        b.add_stop(code)
    b.add_line("L1", stop_codes=[4, 5, 6, 7, 8, 9])
    for a, z in ((4, 5), (5, 6), (6, 7), (7, 8), (8, 9)):
        b.add_segment(a, z, 42)
    b.add_schedule_entry("L1", 1, "10:20")
    b.add_schedule_entry("L1", 1, "10:32")
    return b.build()


def test_direct_trip_uses_earliest_feasible_run() -> None:
    network = _single_line_network()

    results = search(4, 9, 1, time(10, 30), network)

    assert len(results) == 1
    (leg,) = results[0].segments
    assert leg.line.code == "L1"
    assert leg.departure == time(10, 32)
    assert leg.duration_s == 210
    assert leg.arrival == time(10, 35, 30)
    assert [s.code for s in leg.stops] == [4, 5, 6, 7, 8, 9]


def test_direct_needs_destination_after_origin() -> None:
    network = _single_line_network()

    assert search(9, 4, 1, time(10, 30), network) == []


def test_direct_results_are_sorted_by_line_code() -> None:
    b = NetworkBuilder()
    for code in (1, 2, 3):
        b.add_stop(code)
    b.add_line("L2", stop_codes=[1, 2, 3])
    b.add_line("L1", stop_codes=[1, 3])
    b.add_segment(1, 2, 60)
    b.add_segment(2, 3, 60)
    b.add_segment(1, 3, 300)
    b.add_schedule_entry("L2", 1, "08:00")
    b.add_schedule_entry("L1", 1, "09:00")
    network = b.build()

    results = search(1, 3, 1, "07:00", network)

    assert [it.line_codes for it in results] == [("L1",), ("L2",)]


def test_try_find_appends_at_most_one_itinerary_per_line() -> None:
    network = _single_line_network()
    request = SearchRequest(
        origin=network.stop(5),
        destination=network.stop(8),
        weekday=1,
        not_before_s=seconds_since_midnight(time(10, 0)),
        network=network,
    )
    results: list[Itinerary] = []

    assert DirectStrategy().try_find(request, results)
    assert len(results) == 1
    # 10:20 run passes stop 5 at 10:20:42.
    assert results[0].departure_s == seconds_since_midnight(time(10, 20, 42))
