"""
Location cache: geocoding results persisted per search query.

Flow for get_or_fetch(query):
  - lookup by exact, case-sensitive search_query
  - Found:    return the stored row, no upstream call
  - NotFound: geocode upstream, insert-if-absent, attach the new id

Insert race: two requests can miss on the same query at once. Both call the
geocoder; only one insert lands. The loser gets no id back from
ON CONFLICT DO NOTHING and re-reads the row the winner wrote.

With no store configured (no DATABASE_URL) every call is a plain geocode and
the returned record has no id.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from services.explorer.locations.store import LocationStorage
from services.explorer.normalizers import location_from_geocode
from services.explorer.records import LocationRecord
from services.explorer.upstream.client import UpstreamClient

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Found:
    record: LocationRecord


@dataclass(frozen=True)
class NotFound:
    pass


LookupResult = Found | NotFound

NOT_FOUND = NotFound()


class LocationCache:
    """
    Lookup-or-create for LocationRecord.

    Usage:
        cache = LocationCache(upstream, store=PostgresLocationStore(pool))
        record = await cache.get_or_fetch("seattle")
    """

    def __init__(self, upstream: UpstreamClient, store: LocationStorage | None = None) -> None:
        self._upstream = upstream
        self._store = store

    @property
    def enabled(self) -> bool:
        return self._store is not None

    async def lookup(self, search_query: str) -> LookupResult:
        if self._store is None:
            return NOT_FOUND
        record = await self._store.lookup_by_search_query(search_query)
        if record is None:
            return NOT_FOUND
        return Found(record)

    async def _geocode(self, search_query: str) -> LocationRecord:
        body = await self._upstream.get_json("geocode", {"address": search_query})
        # created_at defaults to now (UTC)
        return location_from_geocode(search_query, body)

    async def get_or_fetch(self, search_query: str) -> LocationRecord:
        """
        Return the cached location for search_query, geocoding and storing it on a miss.

        Upstream and storage errors propagate unchanged; a failed geocode
        never reaches the insert.
        """
        result = await self.lookup(search_query)
        if isinstance(result, Found):
            logger.debug("Location cache hit: %r", search_query)
            return result.record

        logger.debug("Location cache miss: %r", search_query)
        record = await self._geocode(search_query)
        if self._store is None:
            return record

        new_id = await self._store.insert_if_absent(record)
        if new_id is not None:
            logger.info("Cached location %r as id=%d", search_query, new_id)
            return record.with_id(new_id)

        # Lost the insert race: another request stored this query first
        winner = await self._store.lookup_by_search_query(search_query)
        if winner is None:
            logger.warning("Location insert skipped but no row found for %r", search_query)
            return record
        logger.info("Location %r already cached by a concurrent request (id=%s)", search_query, winner.id)
        return winner

    async def delete_stale(self, table: str, location_id: int) -> int:
        """Remove cached rows in ``table`` tied to location_id. Not called by any route."""
        if self._store is None:
            raise RuntimeError("location cache has no store configured")
        return await self._store.delete_by_location(table, location_id)
