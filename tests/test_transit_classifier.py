"""Tests for extracting jeepney rides from transit itineraries."""

from typing import Any

from jeepney_mcp.models.directions import DirectionsResponse, TransitLine
from jeepney_mcp.models.responses import JourneySource, SegmentType
from jeepney_mcp.services.transit_classifier import (
    classify_itinerary,
    is_jeepney_line,
    jeepney_code,
)


def walking_step(meters: float = 200, seconds: float = 150) -> dict[str, Any]:
    return {
        "travel_mode": "WALKING",
        "html_instructions": "Walk to <b>Ayala Center</b>",
        "start_location": {"lat": 10.3180, "lng": 123.9050},
        "end_location": {"lat": 10.3175, "lng": 123.9045},
        "distance": {"text": f"{meters} m", "value": meters},
        "duration": {"text": "3 mins", "value": seconds},
    }


def transit_step(
    short_name: str | None = None,
    name: str | None = None,
    vehicle_type: str = "BUS",
    meters: float = 3000,
    seconds: float = 900,
    departure: str | None = "Ayala Center",
    arrival: str | None = "Colon",
) -> dict[str, Any]:
    line: dict[str, Any] = {"vehicle": {"type": vehicle_type, "name": vehicle_type.title()}}
    if short_name is not None:
        line["short_name"] = short_name
    if name is not None:
        line["name"] = name
    details: dict[str, Any] = {"line": line}
    if departure:
        details["departure_stop"] = {"name": departure, "location": {"lat": 10.3175, "lng": 123.9045}}
    if arrival:
        details["arrival_stop"] = {"name": arrival, "location": {"lat": 10.2960, "lng": 123.9010}}
    return {
        "travel_mode": "TRANSIT",
        "start_location": {"lat": 10.3175, "lng": 123.9045},
        "end_location": {"lat": 10.2960, "lng": 123.9010},
        "distance": {"text": "3.0 km", "value": meters},
        "duration": {"text": "15 mins", "value": seconds},
        "transit_details": details,
    }


def make_response(*legs: list[dict[str, Any]], polyline: str = "abc") -> DirectionsResponse:
    return DirectionsResponse.model_validate(
        {
            "status": "OK",
            "routes": [
                {
                    "legs": [{"steps": steps} for steps in legs],
                    "overview_polyline": {"points": polyline},
                }
            ],
        }
    )


def make_line(**kwargs: Any) -> TransitLine:
    vehicle_type = kwargs.pop("vehicle_type", None)
    data: dict[str, Any] = dict(kwargs)
    if vehicle_type:
        data["vehicle"] = {"type": vehicle_type}
    return TransitLine.model_validate(data)


class TestIsJeepneyLine:
    def test_bus_with_route_code(self) -> None:
        assert is_jeepney_line(make_line(short_name="12C", vehicle_type="BUS"))

    def test_subway_without_short_name_rejected(self) -> None:
        assert not is_jeepney_line(make_line(name="MRT Line 3", vehicle_type="SUBWAY"))

    def test_name_mentions_jeepney(self) -> None:
        line = make_line(name="Modern Jeepney Talamban", short_name="TALAMBAN", vehicle_type="SHARE_TAXI")
        assert is_jeepney_line(line)

    def test_name_is_route_code(self) -> None:
        assert is_jeepney_line(make_line(name="62B", vehicle_type="SHARE_TAXI"))

    def test_short_code_of_any_vehicle(self) -> None:
        assert is_jeepney_line(make_line(short_name="MRT", vehicle_type="RAIL"))

    def test_long_non_bus_line_rejected(self) -> None:
        line = make_line(name="Cebu V-Hire Express", short_name="V-HIRE", vehicle_type="SHARE_TAXI")
        assert not is_jeepney_line(line)

    def test_missing_line(self) -> None:
        assert not is_jeepney_line(None)


class TestJeepneyCode:
    def test_prefers_short_name(self) -> None:
        assert jeepney_code(make_line(short_name="12C", name="Ayala - Colon")) == "12C"

    def test_falls_back_to_name(self) -> None:
        assert jeepney_code(make_line(name="62B")) == "62B"

    def test_unknown(self) -> None:
        assert jeepney_code(make_line()) == "Unknown"


class TestClassifyItinerary:
    def test_walk_ride_walk(self) -> None:
        response = make_response(
            [walking_step(200, 150), transit_step(short_name="12C"), walking_step(100, 80)],
            polyline="_p~iF~ps|U",
        )

        journey = classify_itinerary(response)

        assert journey is not None
        assert journey.source == JourneySource.EXTERNAL_TRANSIT
        assert [s.type for s in journey.segments] == [
            SegmentType.WALKING,
            SegmentType.JEEPNEY,
            SegmentType.WALKING,
        ]
        assert journey.jeepney_codes == ["12C"]
        assert journey.segments[1].description == "Take jeepney 12C from Ayala Center to Colon"
        assert journey.segments[0].description == "Walk 0.2km"
        assert journey.total_distance == 3300
        assert journey.total_duration == 1130
        assert journey.polyline == "_p~iF~ps|U"

    def test_description_without_stop_names(self) -> None:
        response = make_response([transit_step(short_name="04L", departure=None, arrival=None)])

        journey = classify_itinerary(response)

        assert journey is not None
        assert journey.segments[0].description == "Take jeepney 04L"

    def test_non_jeepney_transit_dropped(self) -> None:
        response = make_response(
            [
                walking_step(),
                transit_step(name="MRT Line 3", vehicle_type="SUBWAY", meters=5000, seconds=600),
                transit_step(short_name="12C"),
                walking_step(),
            ]
        )

        journey = classify_itinerary(response)

        assert journey is not None
        assert len(journey.segments) == 3
        assert journey.jeepney_codes == ["12C"]
        # Totals cover kept segments only
        assert journey.total_distance == 3400

    def test_other_travel_modes_dropped(self) -> None:
        driving = walking_step()
        driving["travel_mode"] = "DRIVING"
        response = make_response([driving, transit_step(short_name="12C")])

        journey = classify_itinerary(response)

        assert journey is not None
        assert [s.type for s in journey.segments] == [SegmentType.JEEPNEY]

    def test_steps_across_legs_kept_in_order(self) -> None:
        response = make_response(
            [walking_step(), transit_step(short_name="12C")],
            [transit_step(short_name="04B"), walking_step()],
        )

        journey = classify_itinerary(response)

        assert journey is not None
        assert journey.jeepney_codes == ["12C", "04B"]
        assert len(journey.segments) == 4

    def test_no_jeepney_returns_none(self) -> None:
        response = make_response(
            [
                walking_step(),
                transit_step(name="MRT Line 3", vehicle_type="SUBWAY"),
                walking_step(),
            ]
        )

        assert classify_itinerary(response) is None

    def test_walking_only_returns_none(self) -> None:
        assert classify_itinerary(make_response([walking_step()])) is None

    def test_no_routes(self) -> None:
        response = DirectionsResponse.model_validate({"status": "ZERO_RESULTS", "routes": []})
        assert classify_itinerary(response) is None

    def test_summary_counts(self) -> None:
        response = make_response(
            [walking_step(200, 150), transit_step(short_name="12C"), walking_step(100, 80)]
        )

        journey = classify_itinerary(response)

        assert journey is not None
        assert journey.summary == "Total: 3.3km • 18m • 1 jeepney ride • 2 walks"
