import httpx

from jeepney_mcp.data.config import PlannerConfig
from jeepney_mcp.exceptions import GatewayUnavailableError
from jeepney_mcp.models.directions import DirectionsResponse
from jeepney_mcp.models.routes import GeoPoint

# Statuses that mean "answered, nothing found" rather than "failed"
EMPTY_STATUSES = frozenset({"ZERO_RESULTS", "NOT_FOUND"})


def format_latlng(point: GeoPoint) -> str:
    """Format a point the way the Directions API expects ('lat,lng')."""
    return f"{point.lat},{point.lng}"


class DirectionsClient:
    """Async HTTP client for Google Directions API transit requests.

    Usage:
        async with DirectionsClient(config) as client:
            response = await client.fetch_transit_directions(origin, destination)
    """

    def __init__(self, config: PlannerConfig):
        """Initialize the client.

        Args:
            config: Configuration with API key, URL, and timeout.
        """
        self._config = config
        self._client: httpx.AsyncClient | None = None

    async def __aenter__(self) -> "DirectionsClient":
        """Enter async context - create HTTP client."""
        self._client = httpx.AsyncClient(timeout=self._config.directions_timeout_seconds)
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        """Exit async context - close HTTP client."""
        if self._client:
            await self._client.aclose()
            self._client = None

    async def fetch_transit_directions(
        self, origin: GeoPoint, destination: GeoPoint
    ) -> DirectionsResponse:
        """Request transit directions between two points.

        Returns:
            DirectionsResponse with status OK or an empty-result status.

        Raises:
            RuntimeError: If client not initialized.
            httpx.HTTPError: If the HTTP request fails.
            GatewayUnavailableError: If the API rejects the request
                (REQUEST_DENIED, OVER_QUERY_LIMIT, ...).
            ValueError: If the body is not JSON or does not match the
                response models (pydantic ValidationError).
        """
        if not self._client:
            raise RuntimeError("Client not initialized - use 'async with'")

        params = {
            "origin": format_latlng(origin),
            "destination": format_latlng(destination),
            "mode": "transit",
        }
        if self._config.api_key:
            params["key"] = self._config.api_key

        response = await self._client.get(self._config.directions_url, params=params)
        response.raise_for_status()

        data = DirectionsResponse.model_validate(response.json())
        if data.status != "OK" and data.status not in EMPTY_STATUSES:
            detail = f": {data.error_message}" if data.error_message else ""
            raise GatewayUnavailableError(f"Directions API returned {data.status}{detail}")
        return data
