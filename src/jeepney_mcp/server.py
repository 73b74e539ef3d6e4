import argparse
import asyncio
import logging
import os
from datetime import UTC, datetime
from pathlib import Path

from pydantic import BaseModel

from jeepney_mcp.app import mcp


class HealthResponse(BaseModel):
    """Health check response."""

    status: str
    version: str
    timestamp: str


@mcp.tool()
def health() -> HealthResponse:
    """Check if the jeepney planner MCP server is running and healthy.

    Returns the server status, version, and current timestamp.
    """
    from jeepney_mcp import __version__

    return HealthResponse(
        status="ok",
        version=__version__,
        timestamp=datetime.now(UTC).isoformat(),
    )


async def run_ingest(routes_path: Path, db_path: Path) -> None:
    """Run route ingestion."""
    from jeepney_mcp.data.route_loader import RouteLoader
    from jeepney_mcp.services.route_catalog import RouteCatalog

    loader = RouteLoader(db_path)
    row_counts = await loader.ingest(routes_path)
    await RouteCatalog.invalidate()

    print("\nIngestion complete. Row counts:")
    for table, count in row_counts.items():
        print(f"  {table}: {count:,}")


def main() -> None:
    parser = argparse.ArgumentParser(
        prog="jeepney-mcp",
        description="Jeepney Planner MCP Server",
    )
    subparsers = parser.add_subparsers(dest="command")

    # ingest command
    ingest_parser = subparsers.add_parser(
        "ingest",
        help="Ingest jeepney route geometry into SQLite database",
    )
    ingest_parser.add_argument(
        "routes_path",
        type=Path,
        help="Path to routes JSON file",
    )
    ingest_parser.add_argument(
        "--db",
        type=Path,
        default=Path(os.environ.get("JEEPNEY_DB_PATH", "data/routes.db")),
        help="SQLite database path (default: data/routes.db or JEEPNEY_DB_PATH env var)",
    )
    ingest_parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable verbose logging",
    )

    args = parser.parse_args()

    if args.command == "ingest":
        # Configure logging
        log_level = logging.DEBUG if args.verbose else logging.INFO
        logging.basicConfig(
            level=log_level,
            format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        )

        asyncio.run(run_ingest(args.routes_path, args.db))
    else:
        # Register tools, then run MCP server
        import jeepney_mcp.tools.journey_tools  # noqa: F401
        import jeepney_mcp.tools.route_tools  # noqa: F401

        mcp.run()


if __name__ == "__main__":
    main()
