"""Great-circle distance along polylines, in kilometres."""

import math
from collections.abc import Sequence

# Mean Earth radius, as used by web map Earth CRSs
EARTH_RADIUS_KM = 6371.0


def haversine_km(a: Sequence[float], b: Sequence[float]) -> float:
    """Return the great-circle distance between two (lon, lat) positions."""
    lon1, lat1 = a[0], a[1]
    lon2, lat2 = b[0], b[1]
    phi1 = math.radians(lat1)
    phi2 = math.radians(lat2)
    dphi = math.radians(lat2 - lat1)
    dlambda = math.radians(lon2 - lon1)
    h = math.sin(dphi / 2) ** 2 + math.cos(phi1) * math.cos(phi2) * math.sin(dlambda / 2) ** 2
    return 2 * EARTH_RADIUS_KM * math.atan2(math.sqrt(h), math.sqrt(1 - h))


def cumulative_distances(points: Sequence[Sequence[float]]) -> list[float]:
    """Cumulative distance at each vertex, starting at 0.0."""
    cumulative = [0.0] if points else []
    for i in range(1, len(points)):
        cumulative.append(cumulative[-1] + haversine_km(points[i - 1], points[i]))
    return cumulative


def line_length(points: Sequence[Sequence[float]]) -> float:
    """Total length of a polyline in kilometres."""
    length = 0.0
    for i in range(len(points) - 1):
        length += haversine_km(points[i], points[i + 1])
    return length


def index_for_distance(points: Sequence[Sequence[float]], target_km: float) -> int:
    """Return the index of the vertex that starts the edge reaching ``target_km``.

    This is the first ``i`` whose cumulative distance to vertex ``i + 1`` is at
    least ``target_km``. Targets past the end clamp to ``len(points) - 2``.
    """
    cumulative = 0.0
    for i in range(len(points) - 1):
        cumulative += haversine_km(points[i], points[i + 1])
        if cumulative >= target_km:
            return i
    return len(points) - 2
