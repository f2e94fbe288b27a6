from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace
from datetime import time

from src.domain.algorithms.geo_utils import haversine_distance_m, walk_duration_s
from src.domain.algorithms.time_utils import parse_time_of_day
from src.domain.exceptions import NetworkIntegrityError

from .geo import GeoPoint
from .line import Line, ScheduleEntry
from .network import NetworkSnapshot
from .segment import Segment, SegmentKey, TravelMode
from .stop import Stop

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class _LineRecord:
    code: str
    name: str
    stop_codes: tuple[int, ...]
    schedule: list[ScheduleEntry] = field(default_factory=list)


@dataclass(slots=True)
class _SegmentRecord:
    start: int
    end: int
    duration_s: int
    mode: TravelMode


@dataclass(slots=True)
class NetworkBuilder:
    """Assembles an immutable ``NetworkSnapshot`` from plain records.

    External loaders feed stops, lines, schedule entries and segments in any
    order; ``build`` resolves every cross reference, fills the stop
    back-references (serving lines, stops reachable on foot) and sorts each
    line's schedule by ``(weekday, departure)`` so the first feasible entry is
    also the earliest one.
    """

    walk_speed_mps: float = 1.4

    _stops: dict[int, Stop] = field(default_factory=dict, init=False, repr=False)
    _lines: dict[str, _LineRecord] = field(default_factory=dict, init=False, repr=False)
    _segments: dict[SegmentKey, _SegmentRecord] = field(
        default_factory=dict, init=False, repr=False
    )

    def add_stop(
        self,
        code: int,
        address: str = "",
        lat: float | None = None,
        lon: float | None = None,
    ) -> NetworkBuilder:
        code = int(code)
        if code in self._stops:
            raise NetworkIntegrityError(f"Duplicate stop code {code}")
        if (lat is None) != (lon is None):
            raise NetworkIntegrityError(f"Stop {code} needs both lat and lon, or neither")
        location = None if lat is None else GeoPoint(lat=lat, lon=lon)
        self._stops[code] = Stop(code=code, address=address, location=location)
        return self

    def add_line(
        self, code: str, name: str = "", stop_codes: tuple[int, ...] | list[int] = ()
    ) -> NetworkBuilder:
        if code in self._lines:
            raise NetworkIntegrityError(f"Duplicate line code {code!r}")
        codes = tuple(int(c) for c in stop_codes)
        if len(set(codes)) != len(codes):
            raise NetworkIntegrityError(f"Line {code!r} visits a stop more than once")
        self._lines[code] = _LineRecord(code=code, name=name or code, stop_codes=codes)
        return self

    def add_schedule_entry(
        self, line_code: str, weekday: int, departure: time | str
    ) -> NetworkBuilder:
        record = self._lines.get(line_code)
        if record is None:
            raise NetworkIntegrityError(
                f"Schedule entry references unknown line {line_code!r}"
            )
        if not 1 <= int(weekday) <= 7:
            raise NetworkIntegrityError(
                f"Invalid weekday {weekday} for line {line_code!r} (expected 1..7)"
            )
        record.schedule.append(
            ScheduleEntry(weekday=int(weekday), departure=parse_time_of_day(departure))
        )
        return self

    def add_segment(
        self,
        start_code: int,
        end_code: int,
        duration_s: int | None = None,
        mode: TravelMode | str = TravelMode.BUS,
    ) -> NetworkBuilder:
        mode = TravelMode(mode)
        start_code, end_code = int(start_code), int(end_code)
        if start_code == end_code:
            raise NetworkIntegrityError(f"Segment {start_code}-{end_code} is a loop")
        if duration_s is None:
            if mode is not TravelMode.WALK:
                raise NetworkIntegrityError(
                    f"Bus segment {start_code}-{end_code} needs a duration"
                )
            duration_s = self._estimate_walk_s(start_code, end_code)
        if int(duration_s) < 0:
            raise NetworkIntegrityError(
                f"Segment {start_code}-{end_code} has a negative duration"
            )

        self._segments[(start_code, end_code)] = _SegmentRecord(
            start=start_code, end=end_code, duration_s=int(duration_s), mode=mode
        )
        return self

    def add_walking_transfers(
        self, max_distance_m: float, *, walk_speed_mps: float | None = None
    ) -> int:
        """Add WALK segments between every pair of stops closer than ``max_distance_m``.

        Pairs that already have a segment in that direction are left untouched,
        and stops without a location are skipped.
        Returns the number of segments added.
        """

        speed = float(walk_speed_mps or self.walk_speed_mps)
        stops = [s for s in self._stops.values() if s.location is not None]
        added = 0
        for a in stops:
            for b in stops:
                if a.code == b.code or (a.code, b.code) in self._segments:
                    continue
                d = haversine_distance_m(a.location, b.location)
                if d > max_distance_m:
                    continue
                self._segments[(a.code, b.code)] = _SegmentRecord(
                    start=a.code,
                    end=b.code,
                    duration_s=walk_duration_s(
                        a.location, b.location, speed_mps=speed
                    ),
                    mode=TravelMode.WALK,
                )
                added += 1
        logger.debug("Added %d walking transfers within %.0fm", added, max_distance_m)
        return added

    def build(self) -> NetworkSnapshot:
        for record in self._lines.values():
            for code in record.stop_codes:
                if code not in self._stops:
                    raise NetworkIntegrityError(
                        f"Line {record.code!r} references unknown stop {code}"
                    )
        for seg in self._segments.values():
            for code in (seg.start, seg.end):
                if code not in self._stops:
                    raise NetworkIntegrityError(
                        f"Segment {seg.start}-{seg.end} references unknown stop {code}"
                    )

        line_codes: dict[int, list[str]] = {code: [] for code in self._stops}
        for record in self._lines.values():
            for code in record.stop_codes:
                line_codes[code].append(record.code)

        walkable: dict[int, list[int]] = {code: [] for code in self._stops}
        for seg in self._segments.values():
            if seg.mode is not TravelMode.WALK:
                continue
            if seg.end not in walkable[seg.start]:
                walkable[seg.start].append(seg.end)
            if seg.start not in walkable[seg.end]:
                walkable[seg.end].append(seg.start)

        stops = {
            code: replace(
                stop,
                line_codes=tuple(line_codes[code]),
                walkable_codes=tuple(walkable[code]),
            )
            for code, stop in self._stops.items()
        }

        lines = {
            record.code: Line(
                code=record.code,
                name=record.name,
                stops=tuple(stops[c] for c in record.stop_codes),
                schedule=tuple(sorted(record.schedule)),
            )
            for record in self._lines.values()
        }

        segments = {
            key: Segment(
                start=stops[rec.start],
                end=stops[rec.end],
                duration_s=rec.duration_s,
                mode=rec.mode,
            )
            for key, rec in self._segments.items()
        }

        network = NetworkSnapshot(stops=stops, lines=lines, segments=segments)
        logger.info(
            "Network assembled. Stops: %d, lines: %d, segments: %d",
            len(stops),
            len(lines),
            len(segments),
        )
        return network

    def _estimate_walk_s(self, start_code: int, end_code: int) -> int:
        try:
            a = self._stops[start_code]
            b = self._stops[end_code]
        except KeyError as exc:
            raise NetworkIntegrityError(
                f"Cannot estimate walk {start_code}-{end_code}: unknown stop {exc.args[0]}"
            ) from None
        for stop in (a, b):
            if stop.location is None:
                raise NetworkIntegrityError(
                    f"Cannot estimate walk {start_code}-{end_code}: "
                    f"stop {stop.code} has no location"
                )
        return walk_duration_s(
            a.location, b.location, speed_mps=float(self.walk_speed_mps)
        )
