"""External directions gateway.

Wraps the Google Directions client with the checks that decide whether a
request is made at all: API key present, both points inside the service
area, and daily quota left. Every failure surfaces as GatewayUnavailableError
so callers have a single exception to fall back on.
"""

import logging

import httpx

from jeepney_mcp.data.config import PlannerConfig, get_planner_config
from jeepney_mcp.data.directions_client import DirectionsClient
from jeepney_mcp.data.quota import DailyQuota
from jeepney_mcp.exceptions import GatewayUnavailableError
from jeepney_mcp.models.directions import DirectionsResponse
from jeepney_mcp.models.routes import GeoPoint
from jeepney_mcp.services.geometry import is_within_bounds

logger = logging.getLogger(__name__)

# Module-level state (lazy-initialized)
_config: PlannerConfig | None = None
_quota: DailyQuota | None = None


def _get_config() -> PlannerConfig:
    """Get or create the planner config singleton."""
    global _config
    if _config is None:
        _config = get_planner_config()
    return _config


def _get_quota() -> DailyQuota:
    """Get or create the directions quota singleton."""
    global _quota
    if _quota is None:
        _quota = DailyQuota(limit=_get_config().directions_daily_limit)
    return _quota


def is_directions_available() -> bool:
    """Check if the directions gateway can be used (API key configured)."""
    return _get_config().api_key is not None


def is_in_service_area(point: GeoPoint) -> bool:
    """Check if a point lies inside the configured service area."""
    config = _get_config()
    return is_within_bounds(point, config.min_lat, config.max_lat, config.min_lng, config.max_lng)


async def request_transit_itinerary(origin: GeoPoint, destination: GeoPoint) -> DirectionsResponse:
    """Request a transit itinerary from the external directions provider.

    Returns:
        DirectionsResponse (possibly with no routes).

    Raises:
        GatewayUnavailableError: If the request was not made or failed.
    """
    config = _get_config()
    if config.api_key is None:
        raise GatewayUnavailableError("No GOOGLE_MAPS_API_KEY configured")

    if not (is_in_service_area(origin) and is_in_service_area(destination)):
        raise GatewayUnavailableError("Origin or destination outside the service area")

    if not await _get_quota().try_acquire():
        raise GatewayUnavailableError("Daily directions limit reached")

    try:
        async with DirectionsClient(config) as client:
            response = await client.fetch_transit_directions(origin, destination)
    except httpx.HTTPError as e:
        raise GatewayUnavailableError(f"Directions request failed: {e}") from e
    except ValueError as e:
        # Non-JSON body or a payload that does not fit the response models
        raise GatewayUnavailableError(f"Malformed directions response: {e}") from e

    logger.debug(f"Directions returned {response.status} with {len(response.routes)} routes")
    return response


def reset_service() -> None:
    """Reset the service state completely.

    Clears the quota and resets config. Useful for testing.
    """
    global _config, _quota
    _config = None
    _quota = None
    # Clear the lru_cache on get_planner_config so it re-reads .env/environment
    # (hasattr check handles case where function is mocked in tests)
    if hasattr(get_planner_config, "cache_clear"):
        get_planner_config.cache_clear()
