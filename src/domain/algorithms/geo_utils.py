from __future__ import annotations

import math

from src.domain.models.geo import GeoPoint

EARTH_RADIUS_M = 6371000.0


def haversine_distance_m(a: GeoPoint, b: GeoPoint) -> float:
    """Great-circle distance in meters."""

    lat1 = math.radians(a.lat)
    lon1 = math.radians(a.lon)
    lat2 = math.radians(b.lat)
    lon2 = math.radians(b.lon)

    dlat = lat2 - lat1
    dlon = lon2 - lon1

    s = (
        math.sin(dlat / 2.0) ** 2
        + math.cos(lat1) * math.cos(lat2) * math.sin(dlon / 2.0) ** 2
    )
    return 2.0 * EARTH_RADIUS_M * math.asin(math.sqrt(s))


def walk_duration_s(a: GeoPoint, b: GeoPoint, *, speed_mps: float) -> int:
    """Whole seconds needed to walk the straight line between two points."""

    if speed_mps <= 0:
        raise ValueError(f"Walking speed must be positive, got {speed_mps}")
    return int(math.ceil(haversine_distance_m(a, b) / float(speed_mps)))
