"""Pydantic models for Google Directions API (transit mode) responses.

Field names mirror the JSON returned by the API. Only the fields used for
jeepney classification are modelled; everything else is ignored.
"""

from pydantic import BaseModel, ConfigDict

from jeepney_mcp.models.routes import GeoPoint


class TextValue(BaseModel):
    """A `{text, value}` pair used for distances (meters) and durations (seconds)."""

    model_config = ConfigDict(extra="ignore")

    text: str | None = None
    value: float = 0


class EncodedPolyline(BaseModel):
    model_config = ConfigDict(extra="ignore")

    points: str | None = None


class TransitVehicle(BaseModel):
    model_config = ConfigDict(extra="ignore")

    type: str | None = None  # BUS, SUBWAY, SHARE_TAXI, ...
    name: str | None = None


class TransitLine(BaseModel):
    """Line metadata attached to a transit step."""

    model_config = ConfigDict(extra="ignore")

    name: str | None = None
    short_name: str | None = None
    vehicle: TransitVehicle | None = None


class TransitStop(BaseModel):
    model_config = ConfigDict(extra="ignore")

    name: str | None = None
    location: GeoPoint | None = None


class TransitDetails(BaseModel):
    model_config = ConfigDict(extra="ignore")

    line: TransitLine | None = None
    departure_stop: TransitStop | None = None
    arrival_stop: TransitStop | None = None


class DirectionsStep(BaseModel):
    """One step of a leg: a walk or a single transit ride."""

    model_config = ConfigDict(extra="ignore")

    travel_mode: str
    html_instructions: str | None = None
    start_location: GeoPoint
    end_location: GeoPoint
    distance: TextValue | None = None
    duration: TextValue | None = None
    polyline: EncodedPolyline | None = None
    transit_details: TransitDetails | None = None


class DirectionsLeg(BaseModel):
    model_config = ConfigDict(extra="ignore")

    steps: list[DirectionsStep] = []
    distance: TextValue | None = None
    duration: TextValue | None = None


class DirectionsRoute(BaseModel):
    model_config = ConfigDict(extra="ignore")

    legs: list[DirectionsLeg] = []
    overview_polyline: EncodedPolyline | None = None
    summary: str | None = None


class DirectionsResponse(BaseModel):
    """Top-level Directions API response."""

    model_config = ConfigDict(extra="ignore")

    status: str
    routes: list[DirectionsRoute] = []
    error_message: str | None = None
