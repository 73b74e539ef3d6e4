from jeepney_mcp.app import mcp
from jeepney_mcp.matching.models import RouteResolutionResponse
from jeepney_mcp.matching.route_matcher import resolve_route
from jeepney_mcp.models.responses import ListRoutesResponse, RouteSummary
from jeepney_mcp.services.geometry import route_length
from jeepney_mcp.services.route_catalog import RouteCatalog


@mcp.tool()
async def resolve_jeepney_route(query: str, limit: int = 5) -> RouteResolutionResponse:
    """Look up a jeepney route by code or name.

    Examples:
        resolve_jeepney_route(query="12C")  # By code
        resolve_jeepney_route(query="route 04b")  # Code with prefix
        resolve_jeepney_route(query="Talamban Carbon")  # Fuzzy name

    Args:
        query: Route code or route name.
        limit: Maximum number of matches (1-10, default 5).

    Returns:
        RouteResolutionResponse with matches ordered by score.
    """
    # Clamp limit
    limit = max(1, min(limit, 10))
    return await resolve_route(query=query, limit=limit)


@mcp.tool()
async def list_jeepney_routes() -> ListRoutesResponse:
    """List every jeepney route known to the planner, in catalog order."""
    catalog = await RouteCatalog.get_instance()
    routes = [
        RouteSummary(
            code=route.code,
            name=route.name,
            color=route.color,
            num_stops=len(route.stops),
            length_meters=route_length(route),
        )
        for route in catalog.routes
    ]
    return ListRoutesResponse(routes=routes, count=len(routes))
