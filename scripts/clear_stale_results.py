#!/usr/bin/env python3
"""
Clear cached result rows tied to one location.

Deletes every row in --table whose location_id equals --location-id. This is
the only invalidation path for per-location result tables; no route calls it.

Usage:
    python3 scripts/clear_stale_results.py --table weathers --location-id 7
    python3 scripts/clear_stale_results.py --table trails --location-id 7 --database-url postgresql://...

Exits 0 on success (prints the deleted row count), 1 on failure.
"""

import argparse
import asyncio
import logging
import os
import sys

import asyncpg

# ---------------------------------------------------------------------------
# Ensure services.explorer is importable
# ---------------------------------------------------------------------------
_repo_root = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
if _repo_root not in sys.path:
    sys.path.insert(0, _repo_root)

from services.explorer.errors import ExplorerError  # noqa: E402
from services.explorer.locations.store import PostgresLocationStore  # noqa: E402

logger = logging.getLogger("clear_stale_results")


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__.split("\n\n")[0])
    parser.add_argument("--table", required=True, help="Table holding location_id rows")
    parser.add_argument("--location-id", type=int, required=True, help="locations.id to clear")
    parser.add_argument(
        "--database-url",
        default=os.environ.get("DATABASE_URL", ""),
        help="PostgreSQL DSN (defaults to $DATABASE_URL)",
    )
    return parser.parse_args(argv)


async def run(table: str, location_id: int, database_url: str) -> int:
    conn = await asyncpg.connect(database_url)
    try:
        store = PostgresLocationStore(conn)
        return await store.delete_by_location(table, location_id)
    finally:
        await conn.close()


def main(argv: list[str] | None = None) -> int:
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(message)s")
    args = parse_args(argv)
    if not args.database_url:
        logger.error("No database URL: pass --database-url or set DATABASE_URL")
        return 1

    try:
        deleted = asyncio.run(run(args.table, args.location_id, args.database_url))
    except (ExplorerError, ValueError, OSError, asyncpg.PostgresError) as exc:
        logger.error("Clearing %s for location_id=%s failed: %s", args.table, args.location_id, exc)
        return 1

    print(f"Deleted {deleted} row(s) from {args.table} for location_id={args.location_id}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
