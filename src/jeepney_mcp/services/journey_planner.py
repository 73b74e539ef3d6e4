"""Plan a jeepney journey between two points.

The external directions gateway is tried first. If it fails, or its
itinerary has no jeepney ride, the local route catalog is searched for a
single ride and a one-transfer ride, and the shorter of the two is returned.
A None result means no jeepney option; callers should fall back to walking
directions.
"""

import logging
from collections.abc import Mapping, Sequence
from pathlib import Path
from typing import Any

import aiosqlite

from jeepney_mcp.data.config import get_planner_config
from jeepney_mcp.exceptions import GatewayUnavailableError, InvalidInputError
from jeepney_mcp.models.responses import Journey
from jeepney_mcp.models.routes import GeoPoint, JeepneyRoute
from jeepney_mcp.services.directions_service import request_transit_itinerary
from jeepney_mcp.services.journey_builder import (
    journey_from_multi_ride,
    journey_from_single_ride,
)
from jeepney_mcp.services.local_matcher import find_multi_ride, find_single_ride
from jeepney_mcp.services.route_catalog import RouteCatalog
from jeepney_mcp.services.transit_classifier import classify_itinerary

logger = logging.getLogger(__name__)


def _coerce_coordinate(value: Any, name: str) -> float:
    # bool is an int subclass but never a coordinate
    if value is None or isinstance(value, bool):
        raise InvalidInputError(f"Missing {name} coordinate")
    try:
        return float(value)
    except (TypeError, ValueError) as e:
        raise InvalidInputError(f"Unparseable {name} coordinate: {value!r}") from e


def normalize_location(value: Any) -> GeoPoint:
    """Normalize a location given in any of the accepted shapes.

    Accepts a GeoPoint, a flat mapping (`{"lat": .., "lng": ..}`, `lon` is an
    alias for `lng`), or a mapping with a nested `location` of that shape.
    Coordinates may be numbers or numeric strings.

    Raises:
        InvalidInputError: If no usable coordinates are present.
    """
    if isinstance(value, GeoPoint):
        return value
    if not isinstance(value, Mapping):
        raise InvalidInputError(f"Expected a location object, got {type(value).__name__}")

    if "lat" in value or "lng" in value or "lon" in value:
        source: Mapping = value
    elif isinstance(value.get("location"), Mapping):
        source = value["location"]
    elif isinstance(value.get("location"), GeoPoint):
        return value["location"]
    else:
        raise InvalidInputError("Location has neither lat/lng nor a nested location")

    lat = _coerce_coordinate(source.get("lat"), "lat")
    lng = _coerce_coordinate(source.get("lng", source.get("lon")), "lng")
    if not (-90 <= lat <= 90 and -180 <= lng <= 180):
        raise InvalidInputError(f"Coordinates out of range: {lat}, {lng}")
    return GeoPoint(lat=lat, lng=lng)


async def _plan_external(origin: GeoPoint, destination: GeoPoint) -> Journey | None:
    """Ask the gateway and classify its answer; None on any gateway failure."""
    try:
        response = await request_transit_itinerary(origin, destination)
    except GatewayUnavailableError as e:
        logger.warning(f"Directions gateway unavailable, using local routes: {e}")
        return None

    journey = classify_itinerary(response)
    if journey is None:
        logger.info("Transit itinerary has no jeepney ride, using local routes")
    return journey


def plan_local(
    origin: GeoPoint,
    destination: GeoPoint,
    routes: Sequence[JeepneyRoute],
) -> Journey | None:
    """Pick the shorter of the best single ride and the best one-transfer ride.

    The single ride wins ties.

    Returns:
        Journey tagged local_single_ride or local_multi_ride, or None.
    """
    config = get_planner_config()
    single = find_single_ride(origin, destination, routes)
    multi = find_multi_ride(origin, destination, routes)

    if single is not None and (multi is None or single.total_distance <= multi.total_distance):
        logger.debug(
            f"Local single ride on {single.route.code}: {single.total_distance:.0f}m"
        )
        return journey_from_single_ride(
            single,
            origin,
            destination,
            config.walking_meters_per_minute,
            config.jeepney_meters_per_minute,
        )

    if multi is not None:
        logger.debug(
            f"Local multi ride {multi.route1.code} -> {multi.route2.code}: "
            f"{multi.total_distance:.0f}m"
        )
        return journey_from_multi_ride(
            multi,
            origin,
            destination,
            config.walking_meters_per_minute,
            config.jeepney_meters_per_minute,
        )

    return None


async def _get_routes(db_path: Path | None) -> tuple[JeepneyRoute, ...]:
    """Current catalog snapshot; empty if the route database is unavailable."""
    try:
        catalog = await RouteCatalog.get_instance(db_path)
    except (FileNotFoundError, aiosqlite.Error) as e:
        logger.warning(f"Route catalog unavailable: {e}")
        return ()
    return catalog.routes


async def plan_journey(
    origin: Any,
    destination: Any,
    routes: Sequence[JeepneyRoute] | None = None,
    db_path: Path | None = None,
) -> Journey | None:
    """Plan a jeepney journey from origin to destination.

    Args:
        origin: Origin location (GeoPoint or mapping, see normalize_location)
        destination: Destination location, flat or with a nested `location`
        routes: Route snapshot to match against (default: shared catalog)
        db_path: Optional database path override for the shared catalog

    Returns:
        Journey, or None if no jeepney option was found.

    Raises:
        InvalidInputError: If origin or destination has no usable coordinates.
            Raised before any external request.
    """
    origin_point = normalize_location(origin)
    destination_point = normalize_location(destination)

    journey = await _plan_external(origin_point, destination_point)
    if journey is not None:
        return journey

    if routes is None:
        routes = await _get_routes(db_path)

    journey = plan_local(origin_point, destination_point, routes)
    if journey is None:
        logger.info("No jeepney route found")
    return journey
