"""Route geometry loader for ingesting jeepney routes into SQLite."""

import json
import logging
from pathlib import Path
from typing import Any

import aiosqlite

from jeepney_mcp.exceptions import RouteDataError

logger = logging.getLogger(__name__)

SCHEMA_SQL = """
-- routes (route_id preserves the input order)
CREATE TABLE routes (
    route_id INTEGER PRIMARY KEY,
    code TEXT NOT NULL,
    name TEXT,
    color TEXT
);

-- route_stops
CREATE TABLE route_stops (
    route_id INTEGER NOT NULL,
    stop_sequence INTEGER NOT NULL,
    lat REAL NOT NULL,
    lng REAL NOT NULL,
    PRIMARY KEY (route_id, stop_sequence)
);
"""

INDEX_SQL = """
CREATE INDEX idx_routes_code ON routes(code);
"""

# Routes need at least this many stops to be ridden anywhere
MIN_STOPS = 2


def _parse_point(raw: Any) -> tuple[float, float]:
    """Parse {lat, lng} / {lat, lon} mappings or [lat, lng] pairs."""
    if isinstance(raw, dict):
        lng = raw.get("lng", raw.get("lon"))
        return float(raw["lat"]), float(lng)
    if isinstance(raw, (list, tuple)) and len(raw) >= 2:
        return float(raw[0]), float(raw[1])
    raise ValueError(f"Unrecognized point: {raw!r}")


def _extract_points(record: dict[str, Any]) -> list[Any]:
    """Find the stop list of a route record.

    Accepts `stops`, `points`, or a LineString `geometry` whose coordinates are
    stored as [lat, lng] pairs.
    """
    for key in ("stops", "points"):
        if isinstance(record.get(key), list):
            return record[key]
    geometry = record.get("geometry")
    if isinstance(geometry, dict) and isinstance(geometry.get("coordinates"), list):
        return geometry["coordinates"]
    return []


def parse_route_records(data: Any) -> list[dict[str, Any]]:
    """Normalize raw JSON into route dicts with `code`, `name`, `color`, `stops`.

    Routes without a code or with fewer than MIN_STOPS valid stops are skipped.

    Raises:
        RouteDataError: If the top-level structure is not a list of routes.
    """
    if isinstance(data, dict) and "routes" in data:
        data = data["routes"]
    if not isinstance(data, list):
        raise RouteDataError("Route file must contain a list of routes")

    routes: list[dict[str, Any]] = []
    for position, record in enumerate(data):
        if not isinstance(record, dict) or not record.get("code"):
            logger.warning(f"Skipping route #{position}: missing code")
            continue

        code = str(record["code"]).strip()
        try:
            stops = [_parse_point(p) for p in _extract_points(record)]
        except (KeyError, TypeError, ValueError) as e:
            logger.warning(f"Skipping route {code}: invalid stop ({e})")
            continue

        if len(stops) < MIN_STOPS:
            logger.warning(f"Skipping route {code}: only {len(stops)} stops")
            continue

        routes.append(
            {
                "code": code,
                "name": record.get("name"),
                "color": record.get("color"),
                "stops": stops,
            }
        )
    return routes


class RouteLoader:
    """Loader for ingesting jeepney route geometry into SQLite."""

    def __init__(self, db_path: Path):
        """Initialize the loader.

        Args:
            db_path: Path where the SQLite database will be created.
        """
        self.db_path = Path(db_path)

    async def ingest(self, routes_path: Path) -> dict[str, int]:
        """Ingest routes from a JSON file into SQLite.

        Uses atomic swap: loads into temp DB, then replaces the target DB.

        Args:
            routes_path: Path to the routes JSON file.

        Returns:
            Dictionary with row counts per table.

        Raises:
            FileNotFoundError: If the routes file doesn't exist.
            RouteDataError: If the file holds no usable routes.
        """
        routes_path = Path(routes_path)
        if not routes_path.exists():
            raise FileNotFoundError(f"Routes file not found: {routes_path}")

        with open(routes_path, encoding="utf-8-sig") as f:
            try:
                raw = json.load(f)
            except json.JSONDecodeError as e:
                raise RouteDataError(f"{routes_path.name} is not valid JSON: {e}") from e

        routes = parse_route_records(raw)
        if not routes:
            raise RouteDataError("No routes loaded - check route data")

        # Ensure parent directory exists
        self.db_path.parent.mkdir(parents=True, exist_ok=True)

        temp_db = self.db_path.with_suffix(".tmp.db")

        try:
            # Remove temp db if it exists from a previous failed run
            temp_db.unlink(missing_ok=True)

            async with aiosqlite.connect(temp_db) as db:
                await db.executescript(SCHEMA_SQL)
                row_counts = await self._load_routes(db, routes)
                await db.executescript(INDEX_SQL)
                await db.commit()

            # atomic swap
            if self.db_path.exists():
                self.db_path.unlink()
            temp_db.rename(self.db_path)

            logger.info(f"Route ingestion complete: {self.db_path}")
            return row_counts

        except Exception:
            temp_db.unlink(missing_ok=True)
            raise

    async def _load_routes(
        self, db: aiosqlite.Connection, routes: list[dict[str, Any]]
    ) -> dict[str, int]:
        """Insert routes and their stops, keeping input order."""
        route_rows = []
        stop_rows = []
        for route_id, route in enumerate(routes):
            route_rows.append((route_id, route["code"], route["name"], route["color"]))
            for seq, (lat, lng) in enumerate(route["stops"]):
                stop_rows.append((route_id, seq, lat, lng))

        await db.executemany(
            "INSERT INTO routes (route_id, code, name, color) VALUES (?, ?, ?, ?)", route_rows
        )
        await db.executemany(
            "INSERT INTO route_stops (route_id, stop_sequence, lat, lng) VALUES (?, ?, ?, ?)",
            stop_rows,
        )
        logger.info(f"  Loaded {len(route_rows):,} routes with {len(stop_rows):,} stops")
        return {"routes": len(route_rows), "route_stops": len(stop_rows)}
