from __future__ import annotations

import logging
from typing import Mapping

from src.domain.models.itinerary import TripSegment
from src.domain.models.line import Line
from src.domain.models.segment import Segment, SegmentKey

from .segment_time import MissingSegmentPolicy, SegmentTime, time_between
from .time_utils import SECONDS_PER_DAY

logger = logging.getLogger(__name__)


def earliest_feasible_run(
    line: Line,
    weekday: int,
    start: int,
    end: int,
    not_before_s: int,
    segments: Mapping[SegmentKey, Segment],
    *,
    policy: MissingSegmentPolicy = MissingSegmentPolicy.ZERO,
    fallback_s: int = 0,
) -> TripSegment | None:
    """Find the first scheduled run of ``line`` that passes ``stops[start]`` in time.

    A run leaves the first stop of the line at its schedule entry and reaches
    ``stops[start]`` after the accumulated bus time; it is feasible when that
    passage time is not earlier than ``not_before_s`` and still falls on the
    requested day (no rollover past midnight). Entries are scanned in stored
    order, which network assembly sorts by ``(weekday, departure)``.

    Returns the materialized ``TripSegment`` over ``stops[start..end]``, or
    None when no entry of that weekday is late enough.
    """

    lead = time_between(
        line.stops, 0, start, segments, policy=policy, fallback_s=fallback_s
    )

    for entry in line.schedule:
        if entry.weekday != weekday:
            continue
        passage_s = entry.departure_s + lead.seconds
        if passage_s < not_before_s:
            continue
        if passage_s >= SECONDS_PER_DAY:
            # Passes the boarding stop on the next day.
            continue

        ride = time_between(
            line.stops, start, end, segments, policy=policy, fallback_s=fallback_s
        )
        _warn_if_incomplete(line, lead, ride)
        return TripSegment(
            stops=tuple(line.stops[start : end + 1]),
            departure_s=passage_s,
            duration_s=ride.seconds,
            line=line,
        )

    return None


def _warn_if_incomplete(line: Line, *times: SegmentTime) -> None:
    hops = [hop for t in times for hop in t.missing_hops]
    if hops:
        logger.warning(
            "Line %s has no bus segment for hops %s; travel time may be under-counted",
            line.code,
            ", ".join(f"{a}-{b}" for a, b in hops),
        )
