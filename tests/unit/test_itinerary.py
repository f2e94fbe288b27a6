from __future__ import annotations

from datetime import time

import pytest

from src.domain.models import GeoPoint, Itinerary, Line, Stop, TravelMode, TripSegment

A = Stop(code=1, address="Origen", location=GeoPoint(lat=10.0, lon=10.0))
B = Stop(code=2)
C = Stop(code=3)
L1 = Line(code="L1", name="Línea 1", stops=(A, B, C))
L2 = Line(code="L2", name="Línea 2", stops=(C, B))


def test_stop_identity_is_the_code() -> None:
    twin = Stop(code=1, address="Somewhere else")

    assert twin == A
    assert hash(twin) == hash(A)
    assert str(A) == "Stop 1: Origen"


def test_line_identity_is_the_code() -> None:
    assert Line(code="L1") == L1
    assert L1.index_of(C) == 2
    assert L2.index_of(A) is None


def test_trip_segment_derived_times() -> None:
    leg = TripSegment(stops=(A, B), departure_s=10 * 3600, duration_s=90, line=L1)

    assert leg.mode is TravelMode.BUS
    assert leg.departure == time(10, 0)
    assert leg.arrival == time(10, 1, 30)
    assert leg.arrival_s == 10 * 3600 + 90


def test_arrival_after_midnight_wraps_for_display_only() -> None:
    leg = TripSegment(
        stops=(A, B), departure_s=23 * 3600 + 59 * 60, duration_s=120, line=L1
    )

    assert leg.arrival == time(0, 1)
    assert leg.arrival_s > 24 * 3600


def test_itinerary_totals_include_waiting_time() -> None:
    ride = TripSegment(stops=(A, B), departure_s=1000, duration_s=100, line=L1)
    walk = TripSegment(stops=(B, C), departure_s=1100, duration_s=50)
    ride2 = TripSegment(stops=(C, B), departure_s=1300, duration_s=200, line=L2)

    itinerary = Itinerary(segments=(ride, walk, ride2))

    assert len(itinerary) == 3
    assert itinerary[1] is walk
    assert list(itinerary) == [ride, walk, ride2]
    assert itinerary.departure_s == 1000
    assert itinerary.arrival_s == 1500
    assert itinerary.total_duration_s == 500
    assert itinerary.line_codes == ("L1", None, "L2")
    assert itinerary.num_transfers == 1
    assert itinerary.origin == A
    assert itinerary.destination == B


def test_itinerary_must_not_be_empty() -> None:
    with pytest.raises(ValueError):
        Itinerary(segments=())


def test_itinerary_must_be_continuous() -> None:
    first = TripSegment(stops=(A, B), departure_s=0, duration_s=10, line=L1)
    gap = TripSegment(stops=(C, B), departure_s=20, duration_s=10, line=L2)

    with pytest.raises(ValueError):
        Itinerary(segments=(first, gap))
