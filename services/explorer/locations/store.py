"""
Location storage: asyncpg access to the locations table.

LocationStorage is the interface the cache depends on; PostgresLocationStore
is the production implementation over a shared asyncpg pool. Every statement
runs on its own (no transaction spans more than one).

Duplicate protection is the table's UNIQUE(search_query) plus
ON CONFLICT DO NOTHING: a losing concurrent insert returns no row instead of
raising or overwriting.
"""

from __future__ import annotations

import logging
import re
from decimal import Decimal
from typing import Any, Protocol

import asyncpg

from services.explorer.errors import PersistenceError
from services.explorer.locations.schema import LOCATIONS_TABLE, SCHEMA_SQL
from services.explorer.records import LocationRecord

logger = logging.getLogger(__name__)

_IDENTIFIER_RE = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")

_DB_ERRORS = (asyncpg.PostgresError, asyncpg.InterfaceError, OSError)

_LOOKUP_SQL = f"""
SELECT id, search_query, formatted_query, latitude, longitude, created_at
FROM {LOCATIONS_TABLE}
WHERE search_query = $1
LIMIT 1
"""

_INSERT_SQL = f"""
INSERT INTO {LOCATIONS_TABLE} (search_query, formatted_query, latitude, longitude, created_at)
VALUES ($1, $2, $3, $4, $5)
ON CONFLICT (search_query) DO NOTHING
RETURNING id
"""


class LocationStorage(Protocol):
    async def lookup_by_search_query(self, search_query: str) -> LocationRecord | None: ...

    async def insert_if_absent(self, record: LocationRecord) -> int | None: ...

    async def delete_by_location(self, table: str, location_id: int) -> int: ...


def quote_identifier(name: str) -> str:
    """Quote a table name for interpolation; only plain identifiers are allowed."""
    if not _IDENTIFIER_RE.match(name):
        raise ValueError(f"invalid table name: {name!r}")
    return f'"{name}"'


def _as_float(value: Any) -> float | None:
    # NUMERIC columns come back as Decimal
    return float(value) if value is not None else None


def _as_numeric(value: float | None) -> Decimal | None:
    return Decimal(str(value)) if value is not None else None


def _record_from_row(row: Any) -> LocationRecord:
    return LocationRecord(
        id=row["id"],
        search_query=row["search_query"],
        formatted_query=row["formatted_query"],
        latitude=_as_float(row["latitude"]),
        longitude=_as_float(row["longitude"]),
        created_at=row["created_at"],
    )


def _deleted_count(status: str | None) -> int:
    """asyncpg returns the command tag, e.g. 'DELETE 3'."""
    if not status:
        return 0
    try:
        return int(status.rsplit(" ", 1)[-1])
    except ValueError:
        return 0


class PostgresLocationStore:
    """
    LocationStorage over an asyncpg pool.

    Usage:
        store = PostgresLocationStore(pool)
        await store.ensure_schema()
        record = await store.lookup_by_search_query("seattle")
    """

    def __init__(self, pool: Any) -> None:
        """
        Args:
            pool: asyncpg pool (or anything exposing fetchrow/execute).
        """
        self._pool = pool

    async def ensure_schema(self) -> None:
        try:
            await self._pool.execute(SCHEMA_SQL)
        except _DB_ERRORS as exc:
            raise PersistenceError(f"schema setup failed: {exc}") from exc

    async def lookup_by_search_query(self, search_query: str) -> LocationRecord | None:
        try:
            row = await self._pool.fetchrow(_LOOKUP_SQL, search_query)
        except _DB_ERRORS as exc:
            raise PersistenceError(f"location lookup failed: {exc}") from exc
        return _record_from_row(row) if row else None

    async def insert_if_absent(self, record: LocationRecord) -> int | None:
        """Insert the record; return its new id, or None if the search_query already existed."""
        try:
            row = await self._pool.fetchrow(
                _INSERT_SQL,
                record.search_query,
                record.formatted_query,
                _as_numeric(record.latitude),
                _as_numeric(record.longitude),
                record.created_at,
            )
        except _DB_ERRORS as exc:
            raise PersistenceError(f"location insert failed: {exc}") from exc
        return row["id"] if row else None

    async def delete_by_location(self, table: str, location_id: int) -> int:
        """Delete every row in ``table`` whose location_id matches; return the count."""
        sql = f"DELETE FROM {quote_identifier(table)} WHERE location_id = $1"
        try:
            status = await self._pool.execute(sql, location_id)
        except _DB_ERRORS as exc:
            raise PersistenceError(f"delete from {table} failed: {exc}") from exc
        deleted = _deleted_count(status)
        logger.info("Deleted %d row(s) from %s for location_id=%s", deleted, table, location_id)
        return deleted
