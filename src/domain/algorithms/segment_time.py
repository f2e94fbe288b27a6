from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Mapping, Sequence

from src.domain.exceptions import NetworkIntegrityError
from src.domain.models.segment import Segment, SegmentKey, TravelMode, segment_key
from src.domain.models.stop import Stop

logger = logging.getLogger(__name__)


class MissingSegmentPolicy(str, Enum):
    """What a hop without a BUS segment contributes to travel time."""

    ZERO = "zero"
    FALLBACK = "fallback"
    STRICT = "strict"


@dataclass(frozen=True, slots=True)
class SegmentTime:
    """Elapsed bus time over a stop range.

    ``missing_hops`` lists consecutive stop pairs that had no BUS segment;
    their contribution follows the policy the time was computed with.
    """

    seconds: int
    missing_hops: tuple[SegmentKey, ...] = ()

    @property
    def complete(self) -> bool:
        return not self.missing_hops


def time_between(
    stops: Sequence[Stop],
    start: int,
    end: int,
    segments: Mapping[SegmentKey, Segment],
    *,
    policy: MissingSegmentPolicy = MissingSegmentPolicy.ZERO,
    fallback_s: int = 0,
) -> SegmentTime:
    """Sum BUS segment durations between ``stops[start]`` and ``stops[end]``."""

    if not 0 <= start <= end < len(stops):
        raise ValueError(
            f"Invalid stop range [{start}, {end}] for a sequence of {len(stops)} stops"
        )

    total = 0
    missing: list[SegmentKey] = []
    for a, b in zip(stops[start:end], stops[start + 1 : end + 1]):
        key = segment_key(a, b)
        seg = segments.get(key)
        if seg is not None and seg.mode is TravelMode.BUS:
            total += seg.duration_s
            continue

        missing.append(key)
        if policy is MissingSegmentPolicy.STRICT:
            raise NetworkIntegrityError(
                f"No bus segment between consecutive stops {key[0]} and {key[1]}"
            )
        if policy is MissingSegmentPolicy.FALLBACK:
            total += int(fallback_s)

    logger.debug(
        "Bus time %s..%s = %ds (missing hops: %d)",
        stops[start].code,
        stops[end].code,
        total,
        len(missing),
    )
    return SegmentTime(seconds=total, missing_hops=tuple(missing))
