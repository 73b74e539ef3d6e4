"""Assemble Journey responses from matched candidates."""

import re

from jeepney_mcp.models.responses import (
    Journey,
    JourneySegment,
    JourneySource,
    SegmentType,
)
from jeepney_mcp.models.routes import GeoPoint, JeepneyRoute
from jeepney_mcp.services.local_matcher import MultiRideCandidate, SingleRideCandidate

HTML_TAG_PATTERN = re.compile(r"<[^>]*>")

# Walks shorter than this are not worth a segment (e.g., origin exactly at a stop)
MIN_WALK_METERS = 1.0


def strip_html(text: str) -> str:
    """Remove HTML tags from provider instruction text."""
    return HTML_TAG_PATTERN.sub("", text)


def format_distance(meters: float) -> str:
    """Format meters as '850m' or '2.3km'."""
    if meters < 1000:
        return f"{round(meters)}m"
    return f"{meters / 1000:.1f}km"


def format_duration(seconds: float) -> str:
    """Format seconds as '25m' or '1h 5m'."""
    hours = int(seconds // 3600)
    minutes = int((seconds % 3600) // 60)
    if hours > 0:
        return f"{hours}h {minutes}m"
    return f"{minutes}m"


def build_summary(segments: list[JourneySegment], total_distance: float, total_duration: float) -> str:
    """One-line summary, e.g. 'Total: 3.2km • 14m • 1 jeepney ride • 2 walks'."""
    summary = f"Total: {format_distance(total_distance)} • {format_duration(total_duration)}"

    rides = sum(1 for s in segments if s.type == SegmentType.JEEPNEY)
    walks = sum(1 for s in segments if s.type == SegmentType.WALKING)
    if rides:
        summary += f" • {rides} jeepney ride{'s' if rides > 1 else ''}"
    if walks:
        summary += f" • {walks} walk{'s' if walks > 1 else ''}"
    return summary


def make_journey(
    segments: list[JourneySegment],
    source: JourneySource,
    polyline: str | None = None,
    total_distance: float | None = None,
) -> Journey:
    """Sum segment totals and attach the summary.

    Local journeys pass the matched candidate's distance as `total_distance`
    so it stays the value that was compared, even when tiny walks are omitted.
    """
    if total_distance is None:
        total_distance = sum(s.distance_meters for s in segments)
    total_duration = sum(s.duration_seconds for s in segments)
    return Journey(
        segments=segments,
        total_distance=total_distance,
        total_duration=total_duration,
        source=source,
        polyline=polyline,
        summary=build_summary(segments, total_distance, total_duration),
    )


def walk_description(meters: float) -> str:
    return f"Walk {round(meters / 1000, 2)}km"


def _walk(
    start: GeoPoint, end: GeoPoint, meters: float, walking_speed: float
) -> JourneySegment | None:
    if meters < MIN_WALK_METERS:
        return None
    return JourneySegment(
        type=SegmentType.WALKING,
        from_point=start,
        to_point=end,
        distance_meters=meters,
        duration_seconds=meters / walking_speed * 60,
        description=walk_description(meters),
    )


def _ride(
    route: JeepneyRoute,
    from_index: int,
    to_index: int,
    meters: float,
    jeepney_speed: float,
) -> JourneySegment:
    name = f" ({route.name})" if route.name else ""
    return JourneySegment(
        type=SegmentType.JEEPNEY,
        code=route.code,
        from_point=route.stops[from_index],
        to_point=route.stops[to_index],
        distance_meters=meters,
        duration_seconds=meters / jeepney_speed * 60,
        description=(
            f"Take jeepney {route.code}{name} from stop {from_index + 1} to stop {to_index + 1}"
        ),
    )


def journey_from_single_ride(
    candidate: SingleRideCandidate,
    origin: GeoPoint,
    destination: GeoPoint,
    walking_speed: float,
    jeepney_speed: float,
) -> Journey:
    """Build walk -> ride -> walk segments for a direct ride.

    Speeds are in meters per minute.
    """
    board = candidate.from_projection
    alight = candidate.to_projection

    segments = [
        _walk(origin, board.stop, board.distance_meters, walking_speed),
        _ride(
            candidate.route,
            board.stop_index,
            alight.stop_index,
            candidate.ride_distance,
            jeepney_speed,
        ),
        _walk(alight.stop, destination, alight.distance_meters, walking_speed),
    ]
    return make_journey(
        [s for s in segments if s is not None],
        JourneySource.LOCAL_SINGLE_RIDE,
        total_distance=candidate.total_distance,
    )


def journey_from_multi_ride(
    candidate: MultiRideCandidate,
    origin: GeoPoint,
    destination: GeoPoint,
    walking_speed: float,
    jeepney_speed: float,
) -> Journey:
    """Build walk -> ride -> walk -> ride -> walk segments for a one-transfer journey."""
    board = candidate.from_projection
    alight = candidate.to_projection
    transfer = candidate.transfer_point
    legs = candidate.leg_distances
    transfer_off = candidate.route1.stops[transfer.route1_stop_index]
    transfer_on = candidate.route2.stops[transfer.route2_stop_index]

    segments = [
        _walk(origin, board.stop, legs.walk_to_route1, walking_speed),
        _ride(
            candidate.route1,
            board.stop_index,
            transfer.route1_stop_index,
            legs.route1_ride,
            jeepney_speed,
        ),
        _walk(transfer_off, transfer_on, legs.walk_between_routes, walking_speed),
        _ride(
            candidate.route2,
            transfer.route2_stop_index,
            alight.stop_index,
            legs.route2_ride,
            jeepney_speed,
        ),
        _walk(alight.stop, destination, legs.walk_from_route2, walking_speed),
    ]
    return make_journey(
        [s for s in segments if s is not None],
        JourneySource.LOCAL_MULTI_RIDE,
        total_distance=candidate.total_distance,
    )
