"""In-memory, read-only catalog of jeepney routes."""

import asyncio
import logging
from pathlib import Path

import aiosqlite

from jeepney_mcp.data.database import get_db
from jeepney_mcp.models.routes import GeoPoint, JeepneyRoute

logger = logging.getLogger(__name__)


class RouteCatalog:
    """Lazy-loaded singleton snapshot of all jeepney routes.

    Routes are loaded once into an immutable tuple. Planning calls read
    `routes` without locking; the lock only guards the initial load.

    Usage:
        catalog = await RouteCatalog.get_instance()
        # Use catalog.routes

    After route ingestion:
        await RouteCatalog.invalidate()  # Clear cached instance
    """

    _instance: "RouteCatalog | None" = None
    _lock: asyncio.Lock = asyncio.Lock()

    def __init__(self, routes: tuple[JeepneyRoute, ...] = ()) -> None:
        """Initialize a catalog. Use get_instance() for the shared one."""
        self.routes: tuple[JeepneyRoute, ...] = routes
        self.routes_by_code: dict[str, list[JeepneyRoute]] = {}  # code -> routes
        for route in routes:
            self.routes_by_code.setdefault(route.code.upper(), []).append(route)

    def __len__(self) -> int:
        return len(self.routes)

    @classmethod
    async def get_instance(cls, db_path: Path | None = None) -> "RouteCatalog":
        """Get or create the singleton catalog instance.

        Args:
            db_path: Optional database path. Uses default if not provided.

        Returns:
            The loaded RouteCatalog singleton.
        """
        async with cls._lock:
            if cls._instance is None:
                cls._instance = await cls.load(db_path)
            return cls._instance

    @classmethod
    async def invalidate(cls) -> None:
        """Invalidate the cached catalog. Call after route ingestion."""
        async with cls._lock:
            cls._instance = None
            logger.info("RouteCatalog invalidated")

    @classmethod
    async def reload(cls, db_path: Path | None = None) -> "RouteCatalog":
        """Force reload the catalog from database."""
        await cls.invalidate()
        return await cls.get_instance(db_path)

    @classmethod
    async def load(cls, db_path: Path | None = None) -> "RouteCatalog":
        """Read all routes and stops from the database."""
        async with get_db(db_path) as db:
            routes = await _load_routes(db)
        logger.info(f"RouteCatalog loaded: {len(routes)} routes")
        return cls(tuple(routes))


async def _load_routes(db: aiosqlite.Connection) -> list[JeepneyRoute]:
    stops_by_route: dict[int, list[GeoPoint]] = {}
    query = "SELECT route_id, lat, lng FROM route_stops ORDER BY route_id, stop_sequence"
    async with db.execute(query) as cursor:
        async for row in cursor:
            stops_by_route.setdefault(row["route_id"], []).append(
                GeoPoint(lat=float(row["lat"]), lng=float(row["lng"]))
            )

    routes: list[JeepneyRoute] = []
    async with db.execute("SELECT route_id, code, name, color FROM routes ORDER BY route_id") as cursor:
        async for row in cursor:
            routes.append(
                JeepneyRoute(
                    code=row["code"],
                    name=row["name"],
                    color=row["color"],
                    stops=tuple(stops_by_route.get(row["route_id"], [])),
                )
            )
    return routes
