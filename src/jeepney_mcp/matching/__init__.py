"""Route lookup by code or fuzzy name."""

from jeepney_mcp.matching.models import (
    MatchConfidence,
    MatchType,
    RouteMatch,
    RouteResolutionResponse,
)
from jeepney_mcp.matching.normalizers import (
    extract_route_code,
    normalize_route_code,
    normalize_text,
    remove_accents,
)
from jeepney_mcp.matching.route_matcher import resolve_route

__all__ = [
    # Matchers
    "resolve_route",
    # Models
    "MatchConfidence",
    "MatchType",
    "RouteMatch",
    "RouteResolutionResponse",
    # Normalizers
    "normalize_text",
    "remove_accents",
    "normalize_route_code",
    "extract_route_code",
]
