from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class PlannerConfig(BaseSettings):
    """Configuration for the directions gateway and local planner.

    Automatically loads from environment variables and .env file.
    """

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    api_key: str | None = Field(default=None, alias="GOOGLE_MAPS_API_KEY")
    directions_url: str = "https://maps.googleapis.com/maps/api/directions/json"
    directions_timeout_seconds: float = Field(default=30.0, alias="JEEPNEY_DIRECTIONS_TIMEOUT")
    directions_daily_limit: int = Field(default=100, alias="JEEPNEY_DIRECTIONS_DAILY_LIMIT")

    # Service area (Cebu); the gateway is only asked about points inside it
    min_lat: float = 10.0
    max_lat: float = 11.0
    min_lng: float = 123.5
    max_lng: float = 124.5

    # Speeds used to estimate durations of locally matched journeys
    walking_meters_per_minute: float = 80.0
    jeepney_meters_per_minute: float = 500.0


@lru_cache
def get_planner_config() -> PlannerConfig:
    """Get planner configuration (cached singleton).

    Returns:
        PlannerConfig with values from .env file or environment variables.
    """
    return PlannerConfig()
