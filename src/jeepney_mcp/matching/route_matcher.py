from pathlib import Path

from rapidfuzz import fuzz

from jeepney_mcp.matching.models import (
    MatchConfidence,
    MatchType,
    RouteMatch,
    RouteResolutionResponse,
    confidence_from_score,
)
from jeepney_mcp.matching.normalizers import extract_route_code, normalize_text
from jeepney_mcp.models.routes import JeepneyRoute
from jeepney_mcp.services.route_catalog import RouteCatalog


def _compute_fuzzy_score(query_normalized: str, target_normalized: str) -> float:
    """Compute fuzzy match score for route names."""
    token_score = fuzz.token_set_ratio(query_normalized, target_normalized)
    partial_score = fuzz.partial_ratio(query_normalized, target_normalized)
    return token_score * 0.7 + partial_score * 0.3


def _route_to_match(route: JeepneyRoute, score: float, match_type: MatchType) -> RouteMatch:
    """Convert JeepneyRoute to RouteMatch with computed confidence."""
    return RouteMatch(
        code=route.code,
        name=route.name,
        color=route.color,
        num_stops=len(route.stops),
        score=score,
        confidence=confidence_from_score(score, match_type),
        match_type=match_type,
    )


async def resolve_route(
    query: str,
    limit: int = 5,
    min_score: float = 60.0,
    catalog: RouteCatalog | None = None,
    db_path: Path | None = None,
) -> RouteResolutionResponse:
    """Resolve a query to matching jeepney routes.

    Resolution strategy (priority order):
    1. Route code match ("12c", "route 12C" -> 12C) -> score=100, confidence=EXACT
    2. Fuzzy name match on route name -> score from rapidfuzz

    Args:
        query: Search query (route code or route name)
        limit: Maximum number of results to return
        min_score: Minimum score threshold (0-100)
        catalog: Catalog to search (default: shared catalog)
        db_path: Optional database path for catalog loading

    Returns:
        RouteResolutionResponse with matches and resolution status
    """
    query = query.strip()
    if not query:
        return RouteResolutionResponse(query=query, matches=[], best_match=None, resolved=False)

    if catalog is None:
        catalog = await RouteCatalog.get_instance(db_path)

    matches: list[RouteMatch] = []
    matched: set[int] = set()  # id() of routes already matched by code

    # 1. Route code match (a code can cover several routes, e.g. both directions)
    code = extract_route_code(query)
    if code:
        for route in catalog.routes_by_code.get(code, []):
            matches.append(_route_to_match(route, 100.0, MatchType.CODE_EXACT))
            matched.add(id(route))

    # 2. Fuzzy name matching
    query_normalized = normalize_text(query)
    for route in catalog.routes:
        if id(route) in matched or not route.name:
            continue
        score = _compute_fuzzy_score(query_normalized, normalize_text(route.name))
        if score >= min_score:
            matches.append(_route_to_match(route, score, MatchType.FUZZY_NAME))

    # Sort by score descending, then by code for stability
    matches.sort(key=lambda m: (-m.score, m.code))
    matches = matches[:limit]

    best_match = matches[0] if matches else None
    resolved = best_match is not None and best_match.confidence in (
        MatchConfidence.EXACT,
        MatchConfidence.HIGH,
    )

    return RouteResolutionResponse(
        query=query,
        matches=matches,
        best_match=best_match,
        resolved=resolved,
    )
