"""Tests for the Google Directions API client."""

from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from jeepney_mcp.data.config import PlannerConfig
from jeepney_mcp.data.directions_client import DirectionsClient, format_latlng
from jeepney_mcp.exceptions import GatewayUnavailableError
from jeepney_mcp.models.routes import GeoPoint

ORIGIN = GeoPoint(lat=10.3181, lng=123.9051)
DESTINATION = GeoPoint(lat=10.2969, lng=123.9011)


def create_directions_response(status: str = "OK") -> dict:
    """Create a sample transit directions response for testing."""
    if status != "OK":
        return {"status": status, "routes": [], "error_message": "The provided API key is invalid."}
    return {
        "status": "OK",
        "geocoded_waypoints": [{"geocoder_status": "OK"}],
        "routes": [
            {
                "summary": "",
                "overview_polyline": {"points": "ib_{@mxlyV"},
                "legs": [
                    {
                        "distance": {"text": "3.1 km", "value": 3100},
                        "duration": {"text": "18 mins", "value": 1080},
                        "steps": [
                            {
                                "travel_mode": "TRANSIT",
                                "html_instructions": "Bus towards Colon",
                                "start_location": {"lat": 10.3181, "lng": 123.9051},
                                "end_location": {"lat": 10.2969, "lng": 123.9011},
                                "distance": {"text": "3.1 km", "value": 3100},
                                "duration": {"text": "18 mins", "value": 1080},
                                "transit_details": {
                                    "line": {
                                        "short_name": "12C",
                                        "vehicle": {"type": "BUS", "name": "Bus"},
                                    },
                                    "departure_stop": {"name": "Ayala Center"},
                                    "arrival_stop": {"name": "Colon"},
                                    "num_stops": 9,
                                },
                            }
                        ],
                    }
                ],
            }
        ],
    }


@pytest.fixture
def config() -> PlannerConfig:
    """Create a test config."""
    return PlannerConfig(
        GOOGLE_MAPS_API_KEY="test_api_key",
        directions_url="https://example.com/directions/json",
    )


def mock_http(response_data: dict):
    mock_response = MagicMock()
    mock_response.json.return_value = response_data
    mock_client = AsyncMock()
    mock_client.get = AsyncMock(return_value=mock_response)
    return mock_client


def test_format_latlng():
    """Points are formatted as 'lat,lng'."""
    assert format_latlng(ORIGIN) == "10.3181,123.9051"


@pytest.mark.asyncio
async def test_fetch_transit_directions_parses_json(config: PlannerConfig):
    """Test parsing a transit itinerary from JSON."""
    mock_client = mock_http(create_directions_response())

    with patch("httpx.AsyncClient") as mock_client_class:
        mock_client_class.return_value = mock_client

        async with DirectionsClient(config) as client:
            data = await client.fetch_transit_directions(ORIGIN, DESTINATION)

    assert data.status == "OK"
    assert len(data.routes) == 1
    step = data.routes[0].legs[0].steps[0]
    assert step.travel_mode == "TRANSIT"
    assert step.transit_details.line.short_name == "12C"
    assert step.transit_details.line.vehicle.type == "BUS"
    assert step.distance.value == 3100
    assert data.routes[0].overview_polyline.points == "ib_{@mxlyV"


@pytest.mark.asyncio
async def test_fetch_transit_directions_sends_transit_params(config: PlannerConfig):
    """The request asks for transit mode and carries the API key."""
    mock_client = mock_http(create_directions_response())

    with patch("httpx.AsyncClient") as mock_client_class:
        mock_client_class.return_value = mock_client

        async with DirectionsClient(config) as client:
            await client.fetch_transit_directions(ORIGIN, DESTINATION)

    call_args = mock_client.get.call_args
    assert call_args.args[0] == "https://example.com/directions/json"
    params = call_args.kwargs["params"]
    assert params["origin"] == "10.3181,123.9051"
    assert params["destination"] == "10.2969,123.9011"
    assert params["mode"] == "transit"
    assert params["key"] == "test_api_key"


@pytest.mark.asyncio
async def test_client_uses_configured_timeout():
    """The HTTP client is created with the configured timeout."""
    config = PlannerConfig(GOOGLE_MAPS_API_KEY="k", JEEPNEY_DIRECTIONS_TIMEOUT=5)

    with patch("httpx.AsyncClient") as mock_client_class:
        mock_client_class.return_value = AsyncMock()
        async with DirectionsClient(config):
            pass

    mock_client_class.assert_called_once_with(timeout=5.0)


@pytest.mark.asyncio
async def test_zero_results_is_not_an_error(config: PlannerConfig):
    """ZERO_RESULTS is an answer with no routes, not a failure."""
    mock_client = mock_http({"status": "ZERO_RESULTS", "routes": []})

    with patch("httpx.AsyncClient") as mock_client_class:
        mock_client_class.return_value = mock_client

        async with DirectionsClient(config) as client:
            data = await client.fetch_transit_directions(ORIGIN, DESTINATION)

    assert data.status == "ZERO_RESULTS"
    assert data.routes == []


@pytest.mark.asyncio
async def test_request_denied_raises(config: PlannerConfig):
    """Error statuses surface as GatewayUnavailableError."""
    mock_client = mock_http(create_directions_response("REQUEST_DENIED"))

    with patch("httpx.AsyncClient") as mock_client_class:
        mock_client_class.return_value = mock_client

        async with DirectionsClient(config) as client:
            with pytest.raises(GatewayUnavailableError, match="REQUEST_DENIED"):
                await client.fetch_transit_directions(ORIGIN, DESTINATION)


@pytest.mark.asyncio
async def test_client_not_initialized_raises(config: PlannerConfig):
    """Should raise RuntimeError if used outside async context."""
    client = DirectionsClient(config)

    with pytest.raises(RuntimeError, match="not initialized"):
        await client.fetch_transit_directions(ORIGIN, DESTINATION)
