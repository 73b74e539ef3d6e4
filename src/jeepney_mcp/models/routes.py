"""Pydantic models for coordinates and jeepney route geometry."""

from pydantic import BaseModel, ConfigDict, Field


class GeoPoint(BaseModel):
    """A WGS84 coordinate."""

    model_config = ConfigDict(frozen=True)

    lat: float
    lng: float


class JeepneyRoute(BaseModel):
    """A jeepney line with its ordered stop sequence.

    Stop order follows the recorded path of the line.
    """

    model_config = ConfigDict(frozen=True)

    code: str = Field(description="Route code painted on the jeepney (e.g., '12C')")
    name: str | None = None
    color: str | None = Field(default=None, description="Display color, e.g. '#ff0000'")
    stops: tuple[GeoPoint, ...] = Field(description="Ordered stop/point sequence")
