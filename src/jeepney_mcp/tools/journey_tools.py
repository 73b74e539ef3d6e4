import logging

from jeepney_mcp.app import mcp
from jeepney_mcp.exceptions import InvalidInputError
from jeepney_mcp.models.responses import PlanJourneyResponse
from jeepney_mcp.services.journey_planner import normalize_location, plan_journey

logger = logging.getLogger(__name__)


@mcp.tool()
async def plan_jeepney_journey(
    origin_lat: float,
    origin_lng: float,
    destination_lat: float,
    destination_lng: float,
) -> PlanJourneyResponse:
    """Plan a jeepney journey between two points in Cebu.

    Tries Google transit directions first and keeps only jeepney rides and
    walks. If that fails, matches against the local jeepney route catalog
    (one ride, or two rides with one transfer).

    Args:
        origin_lat: Origin latitude (e.g., 10.2936)
        origin_lng: Origin longitude (e.g., 123.9019)
        destination_lat: Destination latitude
        destination_lng: Destination longitude

    Returns:
        PlanJourneyResponse with the journey, or success=False when no
        jeepney option exists (walk instead).
    """
    try:
        origin = normalize_location({"lat": origin_lat, "lng": origin_lng})
        destination = normalize_location({"lat": destination_lat, "lng": destination_lng})
    except InvalidInputError as e:
        return PlanJourneyResponse(success=False, error=str(e))

    journey = await plan_journey(origin, destination)

    return PlanJourneyResponse(
        origin=origin,
        destination=destination,
        journey=journey,
        success=journey is not None,
        error=None if journey else "No jeepney route found",
    )
