"""
Immutable result shapes returned by the API.

LocationRecord is the only persisted one (locations table). The others are
per-request views built 1:1 from a single upstream item and thrown away once
the response is written.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, field, replace
from datetime import datetime, timezone
from typing import Any, Optional


@dataclass(frozen=True)
class LocationRecord:
    search_query: str
    formatted_query: Optional[str]
    latitude: Optional[float]
    longitude: Optional[float]
    id: Optional[int] = None
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def with_id(self, record_id: int) -> "LocationRecord":
        return replace(self, id=record_id)

    def to_payload(self) -> dict[str, Any]:
        """Response body for /location. created_at stays server-side."""
        payload: dict[str, Any] = {
            "search_query": self.search_query,
            "formatted_query": self.formatted_query,
            "latitude": self.latitude,
            "longitude": self.longitude,
        }
        if self.id is not None:
            payload["id"] = self.id
        return payload


@dataclass(frozen=True)
class WeatherDay:
    time: Optional[str]
    forecast: Optional[str]


@dataclass(frozen=True)
class Business:
    name: Optional[str]
    image_url: Optional[str]
    price: Optional[str]
    rating: Optional[float]
    url: Optional[str]


@dataclass(frozen=True)
class Movie:
    title: Optional[str]
    overview: Optional[str]
    average_votes: Optional[float]
    total_votes: Optional[int]
    image_url: Optional[str]
    popularity: Optional[float]
    released_on: Optional[str]


@dataclass(frozen=True)
class Trail:
    name: Optional[str]
    location: Optional[str]
    length: Optional[float]
    stars: Optional[float]
    star_votes: Optional[int]
    summary: Optional[str]
    trail_url: Optional[str]
    conditions: Optional[str]
    condition_date: Optional[str]
    condition_time: Optional[str]


def to_payload(view: WeatherDay | Business | Movie | Trail) -> dict[str, Any]:
    return asdict(view)
