"""
In-memory fakes for the location cache tests.

FakeLocationStore mirrors the locations table semantics that matter:
  - exact, case-sensitive search_query match
  - insert-if-absent (second insert of the same key returns None, no overwrite)
  - sequential ids
  - delete_by_location over arbitrary named tables of dict rows

FakeUpstream records every get_json call and answers from a canned map.
"""

from __future__ import annotations

from dataclasses import replace
from typing import Any

from services.explorer.errors import UpstreamError
from services.explorer.records import LocationRecord


def geocode_body(
    formatted_address: str = "Seattle, WA, USA",
    lat: float = 47.6062095,
    lng: float = -122.3320708,
) -> dict:
    """Minimal Google Geocoding response with one result."""
    return {
        "status": "OK",
        "results": [
            {
                "formatted_address": formatted_address,
                "geometry": {"location": {"lat": lat, "lng": lng}},
            }
        ],
    }


class FakeLocationStore:
    def __init__(self) -> None:
        self.rows: dict[str, LocationRecord] = {}
        self.tables: dict[str, list[dict[str, Any]]] = {}
        self.insert_calls = 0
        self.lookup_calls = 0
        self._next_id = 1

    async def lookup_by_search_query(self, search_query: str) -> LocationRecord | None:
        self.lookup_calls += 1
        return self.rows.get(search_query)

    async def insert_if_absent(self, record: LocationRecord) -> int | None:
        self.insert_calls += 1
        if record.search_query in self.rows:
            return None
        new_id = self._next_id
        self._next_id += 1
        self.rows[record.search_query] = replace(record, id=new_id)
        return new_id

    async def delete_by_location(self, table: str, location_id: int) -> int:
        rows = self.tables.get(table, [])
        kept = [r for r in rows if r.get("location_id") != location_id]
        self.tables[table] = kept
        return len(rows) - len(kept)


class FakeUpstream:
    def __init__(self, responses: dict[str, dict] | None = None) -> None:
        self.responses = responses or {}
        self.calls: list[tuple[str, dict | None, dict | None]] = []
        self.fail_with: Exception | None = None

    async def get_json(self, api: str, params: dict | None = None, path: dict | None = None) -> dict:
        self.calls.append((api, params, path))
        if self.fail_with is not None:
            raise self.fail_with
        if api not in self.responses:
            raise UpstreamError(api, "no canned response")
        return self.responses[api]

    def calls_for(self, api: str) -> list[tuple[str, dict | None, dict | None]]:
        return [c for c in self.calls if c[0] == api]
