from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from .stop import Stop


class TravelMode(str, Enum):
    WALK = "walk"
    BUS = "bus"


SegmentKey = tuple[int, int]


@dataclass(frozen=True, slots=True)
class Segment:
    """A directed, timed connection between two specific stops."""

    start: Stop
    end: Stop
    duration_s: int
    mode: TravelMode = TravelMode.BUS

    @property
    def key(self) -> SegmentKey:
        return segment_key(self.start, self.end)

    @property
    def is_walk(self) -> bool:
        return self.mode is TravelMode.WALK


def segment_key(start: Stop | int, end: Stop | int) -> SegmentKey:
    a = start.code if isinstance(start, Stop) else int(start)
    b = end.code if isinstance(end, Stop) else int(end)
    return (a, b)
