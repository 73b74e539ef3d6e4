from enum import Enum

from pydantic import BaseModel, Field

from jeepney_mcp.models.routes import GeoPoint


class SegmentType(str, Enum):
    """Kind of movement in a journey segment."""

    JEEPNEY = "jeepney"
    WALKING = "walking"


class JourneySource(str, Enum):
    """Which planning path produced a journey."""

    EXTERNAL_TRANSIT = "external_transit"
    LOCAL_SINGLE_RIDE = "local_single_ride"
    LOCAL_MULTI_RIDE = "local_multi_ride"


class JourneySegment(BaseModel):
    """One walk or one jeepney ride."""

    type: SegmentType
    code: str | None = Field(default=None, description="Jeepney route code (jeepney segments only)")
    from_point: GeoPoint
    to_point: GeoPoint
    distance_meters: float
    duration_seconds: float
    description: str


class Journey(BaseModel):
    """Complete journey from origin to destination."""

    segments: list[JourneySegment] = Field(description="Ordered list of segments")
    total_distance: float = Field(description="Meters")
    total_duration: float = Field(description="Seconds")
    source: JourneySource
    polyline: str | None = Field(
        default=None, description="Encoded overview polyline (external transit only)"
    )
    summary: str = Field(default="", description="Human-readable one-line summary")

    @property
    def jeepney_codes(self) -> list[str]:
        """Route codes ridden, in order."""
        return [s.code or "" for s in self.segments if s.type == SegmentType.JEEPNEY]


class PlanJourneyResponse(BaseModel):
    """Response from plan_jeepney_journey tool."""

    origin: GeoPoint | None = None
    destination: GeoPoint | None = None
    journey: Journey | None = None
    success: bool
    error: str | None = None


class RouteSummary(BaseModel):
    code: str
    name: str | None = None
    color: str | None = None
    num_stops: int
    length_meters: float = Field(description="Length of the full stop sequence")


class ListRoutesResponse(BaseModel):
    """Response from list_jeepney_routes tool."""

    routes: list[RouteSummary]
    count: int = Field(description="Number of routes in the catalog")
