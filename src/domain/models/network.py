from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping

import networkx as nx

from src.domain.exceptions import StopNotFound

from .line import Line
from .segment import Segment, SegmentKey, segment_key
from .stop import Stop


@dataclass(frozen=True, slots=True)
class NetworkSnapshot:
    """Read-only view of every stop, line and segment of the transit network.

    Segments are also indexed in a frozen ``networkx.DiGraph`` (nodes are stop
    codes, each edge carries its ``Segment``) so adjacency lookups do not need
    to scan the whole segment map.
    """

    stops: Mapping[int, Stop]
    lines: Mapping[str, Line]
    segments: Mapping[SegmentKey, Segment]
    graph: nx.DiGraph = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "stops", MappingProxyType(dict(self.stops)))
        object.__setattr__(self, "lines", MappingProxyType(dict(self.lines)))
        object.__setattr__(self, "segments", MappingProxyType(dict(self.segments)))

        graph = nx.DiGraph()
        graph.add_nodes_from(self.stops)
        for (a, b), seg in self.segments.items():
            graph.add_edge(a, b, segment=seg)
        object.__setattr__(self, "graph", nx.freeze(graph))

    def stop(self, ref: Stop | int) -> Stop:
        code = ref.code if isinstance(ref, Stop) else ref
        try:
            return self.stops[code]
        except KeyError:
            raise StopNotFound(code) from None

    def segment(self, start: Stop | int, end: Stop | int) -> Segment | None:
        return self.segments.get(segment_key(start, end))

    def walk_segments_from(self, stop: Stop | int) -> tuple[Segment, ...]:
        """WALK segments leaving ``stop``, in declaration order."""

        code = stop.code if isinstance(stop, Stop) else stop
        if code not in self.graph:
            return ()
        return tuple(
            seg
            for _, _, seg in self.graph.out_edges(code, data="segment")
            if seg.is_walk
        )

    def lines_serving(self, stop: Stop | int) -> tuple[Line, ...]:
        target = self.stop(stop)
        return tuple(line for line in self.lines.values() if target in line.stops)

    def walkable_from(self, stop: Stop | int) -> tuple[Stop, ...]:
        target = self.stop(stop)
        return tuple(self.stops[c] for c in target.walkable_codes if c in self.stops)
