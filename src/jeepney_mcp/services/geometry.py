"""Geometric primitives over jeepney route stop sequences.

All distances are great-circle distances in meters. Routes are treated as
polylines through their stops; no road network is involved.
"""

import math
from dataclasses import dataclass

from jeepney_mcp.models.routes import GeoPoint, JeepneyRoute

# Earth's radius in meters for haversine calculation
EARTH_RADIUS_METERS = 6_371_000


@dataclass
class StopProjection:
    """Nearest stop on a route to some query point."""

    route: JeepneyRoute
    stop_index: int
    distance_meters: float  # Walk from the query point to the stop

    @property
    def stop(self) -> GeoPoint:
        return self.route.stops[self.stop_index]


@dataclass
class TransferPoint:
    """Closest pair of stops between two routes."""

    route1: JeepneyRoute
    route1_stop_index: int
    route2: JeepneyRoute
    route2_stop_index: int
    distance_meters: float  # Walk between the two stops


def haversine_distance(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Calculate the great-circle distance between two points in meters.

    Args:
        lat1, lon1: First point coordinates in degrees.
        lat2, lon2: Second point coordinates in degrees.

    Returns:
        Distance in meters.
    """
    lat1_rad = math.radians(lat1)
    lat2_rad = math.radians(lat2)
    delta_lat = math.radians(lat2 - lat1)
    delta_lon = math.radians(lon2 - lon1)

    a = (
        math.sin(delta_lat / 2) ** 2
        + math.cos(lat1_rad) * math.cos(lat2_rad) * math.sin(delta_lon / 2) ** 2
    )
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))

    return EARTH_RADIUS_METERS * c


def point_distance(a: GeoPoint, b: GeoPoint) -> float:
    """Haversine distance between two GeoPoints in meters."""
    return haversine_distance(a.lat, a.lng, b.lat, b.lng)


def find_nearest_stop(point: GeoPoint, route: JeepneyRoute) -> StopProjection | None:
    """Project a point onto the nearest stop of a route.

    Ties go to the lowest stop index.

    Returns:
        StopProjection, or None if the route has no stops.
    """
    best: StopProjection | None = None
    for index, stop in enumerate(route.stops):
        distance = point_distance(point, stop)
        if best is None or distance < best.distance_meters:
            best = StopProjection(route=route, stop_index=index, distance_meters=distance)
    return best


def path_distance(route: JeepneyRoute, start_index: int, end_index: int) -> float:
    """Along-route distance between two stop indices.

    Sums consecutive segment lengths between the lower and higher index, so
    riding "backward" through the stop list costs the same as riding forward.
    """
    low, high = sorted((start_index, end_index))
    stops = route.stops
    return sum(point_distance(stops[i], stops[i + 1]) for i in range(low, high))


def route_length(route: JeepneyRoute) -> float:
    """Length of the full stop sequence in meters."""
    return path_distance(route, 0, len(route.stops) - 1) if route.stops else 0.0


def find_transfer_point(route1: JeepneyRoute, route2: JeepneyRoute) -> TransferPoint | None:
    """Find the pair of stops (one per route) with the shortest walk between them.

    Exhaustive over all stop pairs, which is fine for small catalogs.

    Returns:
        TransferPoint, or None if either route has no stops.
    """
    best: TransferPoint | None = None
    for i, stop1 in enumerate(route1.stops):
        for j, stop2 in enumerate(route2.stops):
            distance = point_distance(stop1, stop2)
            if best is None or distance < best.distance_meters:
                best = TransferPoint(
                    route1=route1,
                    route1_stop_index=i,
                    route2=route2,
                    route2_stop_index=j,
                    distance_meters=distance,
                )
    return best


def decode_polyline(encoded: str | None) -> list[GeoPoint]:
    """Decode a Google encoded polyline into points (1e5 precision)."""
    if not encoded:
        return []

    points: list[GeoPoint] = []
    index = 0
    lat = 0
    lng = 0
    length = len(encoded)

    while index < length:
        deltas = []
        for _ in range(2):
            shift = 0
            result = 0
            while True:
                b = ord(encoded[index]) - 63
                index += 1
                result |= (b & 0x1F) << shift
                shift += 5
                if b < 0x20:
                    break
            deltas.append(~(result >> 1) if result & 1 else result >> 1)
        lat += deltas[0]
        lng += deltas[1]
        points.append(GeoPoint(lat=lat / 1e5, lng=lng / 1e5))

    return points


def is_within_bounds(
    point: GeoPoint, min_lat: float, max_lat: float, min_lng: float, max_lng: float
) -> bool:
    """Check if a point lies inside an inclusive lat/lng box."""
    return min_lat <= point.lat <= max_lat and min_lng <= point.lng <= max_lng
