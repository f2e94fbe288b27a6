from __future__ import annotations

from dataclasses import dataclass, field
from datetime import time

from .stop import Stop


@dataclass(frozen=True, slots=True, order=True)
class ScheduleEntry:
    """One scheduled run leaving the first stop of a line.

    Weekdays are 1 (Monday) through 7 (Sunday).
    """

    weekday: int
    departure: time

    @property
    def departure_s(self) -> int:
        return (
            self.departure.hour * 3600
            + self.departure.minute * 60
            + self.departure.second
        )


@dataclass(frozen=True, slots=True)
class Line:
    """A bus line: an ordered, non-repeating stop sequence plus its weekly schedule."""

    code: str
    name: str = field(default="", compare=False)
    stops: tuple[Stop, ...] = field(default=(), compare=False, repr=False)
    schedule: tuple[ScheduleEntry, ...] = field(default=(), compare=False, repr=False)

    def index_of(self, stop: Stop) -> int | None:
        try:
            return self.stops.index(stop)
        except ValueError:
            return None

    def entries_for(self, weekday: int) -> tuple[ScheduleEntry, ...]:
        return tuple(e for e in self.schedule if e.weekday == weekday)
