"""Extract jeepney rides from a Google transit itinerary.

Google has no jeepney vehicle category; jeepneys show up as buses, as lines
named after their route code, or as lines with a short code. The test in
`is_jeepney_line` is deliberately permissive and is the most fragile rule in
the planner, so it lives in one pure function.
"""

import logging
import re

from jeepney_mcp.models.directions import (
    DirectionsResponse,
    DirectionsRoute,
    DirectionsStep,
    TransitLine,
)
from jeepney_mcp.models.responses import (
    Journey,
    JourneySegment,
    JourneySource,
    SegmentType,
)
from jeepney_mcp.services.journey_builder import make_journey, walk_description

logger = logging.getLogger(__name__)

# Cebu route codes: 1-3 digits plus optional letter ("4", "12C", "62B")
ROUTE_CODE_PATTERN = re.compile(r"^\d{1,3}[A-Za-z]?$")

# Short names at or below this length are taken as route codes
MAX_SHORT_CODE_LENGTH = 4

TRAVEL_MODE_WALKING = "WALKING"
TRAVEL_MODE_TRANSIT = "TRANSIT"


def is_jeepney_line(line: TransitLine | None) -> bool:
    """Decide whether a transit line is (probably) a jeepney.

    Any one of these is enough:
    - vehicle type is BUS
    - name contains "jeepney" (case-insensitive)
    - short name looks like a route code (e.g. "12C")
    - name looks like a route code
    - short name is at most MAX_SHORT_CODE_LENGTH characters
    """
    if line is None:
        return False

    name = (line.name or "").strip()
    short_name = (line.short_name or "").strip()
    vehicle_type = (line.vehicle.type or "").upper() if line.vehicle else ""

    return (
        vehicle_type == "BUS"
        or "jeepney" in name.lower()
        or bool(ROUTE_CODE_PATTERN.match(short_name))
        or bool(ROUTE_CODE_PATTERN.match(name))
        or 0 < len(short_name) <= MAX_SHORT_CODE_LENGTH
    )


def jeepney_code(line: TransitLine) -> str:
    """Code shown to riders: short name, else name, else 'Unknown'."""
    return (line.short_name or line.name or "Unknown").strip()


def _step_distance(step: DirectionsStep) -> float:
    return step.distance.value if step.distance else 0.0


def _step_duration(step: DirectionsStep) -> float:
    return step.duration.value if step.duration else 0.0


def _classify_step(step: DirectionsStep) -> JourneySegment | None:
    """Turn one step into a segment, or None if it is neither walking nor jeepney."""
    if step.travel_mode == TRAVEL_MODE_WALKING:
        distance = _step_distance(step)
        return JourneySegment(
            type=SegmentType.WALKING,
            from_point=step.start_location,
            to_point=step.end_location,
            distance_meters=distance,
            duration_seconds=_step_duration(step),
            description=walk_description(distance),
        )

    if step.travel_mode != TRAVEL_MODE_TRANSIT or step.transit_details is None:
        logger.debug(f"Dropping {step.travel_mode} step")
        return None

    details = step.transit_details
    line = details.line
    if not is_jeepney_line(line):
        logger.debug(f"Transit step not recognized as jeepney: {line}")
        return None

    code = jeepney_code(line)
    description = f"Take jeepney {code}"
    if details.departure_stop and details.departure_stop.name:
        description += f" from {details.departure_stop.name}"
    if details.arrival_stop and details.arrival_stop.name:
        description += f" to {details.arrival_stop.name}"

    return JourneySegment(
        type=SegmentType.JEEPNEY,
        code=code,
        from_point=step.start_location,
        to_point=step.end_location,
        distance_meters=_step_distance(step),
        duration_seconds=_step_duration(step),
        description=description,
    )


def classify_route(route: DirectionsRoute) -> Journey | None:
    """Classify the steps of one provider route into a jeepney journey.

    Steps across all legs are kept in order. Walking passes through, jeepney
    rides are kept, anything else is dropped.

    Returns:
        Journey tagged external_transit, or None if no step is a jeepney ride.
    """
    segments: list[JourneySegment] = []
    for leg in route.legs:
        for step in leg.steps:
            segment = _classify_step(step)
            if segment is not None:
                segments.append(segment)

    if not any(s.type == SegmentType.JEEPNEY for s in segments):
        logger.debug("No jeepney segments found in transit itinerary")
        return None

    polyline = route.overview_polyline.points if route.overview_polyline else None
    return make_journey(segments, JourneySource.EXTERNAL_TRANSIT, polyline=polyline)


def classify_itinerary(response: DirectionsResponse) -> Journey | None:
    """Classify the provider's first (best) route.

    Returns:
        Journey, or None if the response has no routes or no jeepney ride.
    """
    if not response.routes:
        return None
    return classify_route(response.routes[0])
