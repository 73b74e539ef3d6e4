from enum import Enum

from pydantic import BaseModel, Field


class MatchConfidence(str, Enum):
    """Confidence level for a match.

    - EXACT: route code match
    - HIGH: score >= 85 (fuzzy matches only)
    - MEDIUM: score >= 70
    - LOW: score >= 60
    """

    EXACT = "exact"
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class MatchType(str, Enum):
    """Type of match found."""

    CODE_EXACT = "code_exact"  # Route code match ("12C", "route 12c")
    FUZZY_NAME = "fuzzy_name"  # Fuzzy route name match


def confidence_from_score(score: float, match_type: MatchType) -> MatchConfidence:
    """Determine confidence level from score and match type.

    Code matches always return EXACT confidence.
    Fuzzy matches use score thresholds.
    """
    if match_type == MatchType.CODE_EXACT:
        return MatchConfidence.EXACT

    if score >= 85:
        return MatchConfidence.HIGH
    if score >= 70:
        return MatchConfidence.MEDIUM
    return MatchConfidence.LOW


class RouteMatch(BaseModel):
    """A matched jeepney route with confidence information."""

    code: str = Field(description="Route code")
    name: str | None = Field(default=None, description="Route name")
    color: str | None = None
    num_stops: int
    score: float = Field(description="Match score (0-100)")
    confidence: MatchConfidence = Field(description="Confidence level of the match")
    match_type: MatchType = Field(description="Type of match")


class RouteResolutionResponse(BaseModel):
    """Response from resolve_jeepney_route tool."""

    query: str = Field(description="Original query string")
    matches: list[RouteMatch] = Field(description="Matched routes, ordered by score")
    best_match: RouteMatch | None = Field(
        default=None, description="Best match (always set to top match when matches exist)"
    )
    resolved: bool = Field(
        description="True if best_match has EXACT or HIGH confidence (safe to auto-use)"
    )
