from .geo import GeoPoint
from .stop import Stop
from .line import Line, ScheduleEntry
from .segment import Segment, SegmentKey, TravelMode, segment_key
from .itinerary import Itinerary, TripSegment
from .network import NetworkSnapshot
from .network_builder import NetworkBuilder

__all__ = [
    "GeoPoint",
    "Itinerary",
    "Line",
    "NetworkBuilder",
    "NetworkSnapshot",
    "ScheduleEntry",
    "Segment",
    "SegmentKey",
    "Stop",
    "TravelMode",
    "TripSegment",
    "segment_key",
]
