"""
Upstream item -> response record transforms.

One pure function per upstream kind. Optional fields are read with .get(), so
a missing or null value simply comes through as None; nothing here validates
or raises. The geocode transform is the exception: without a first result
there is no location to build.

Dark Sky daily item:
  {"time": 1500000000, "summary": "Partly cloudy until afternoon.", ...}

Hiking Project trail:
  {"name": ..., "starVotes": 12, "url": ..., "conditionStatus": "All Clear",
   "conditionDate": "2018-07-21 20:48:49", ...}
"""

from __future__ import annotations

from datetime import datetime, timezone
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Any

from services.explorer.errors import UpstreamError
from services.explorer.records import Business, LocationRecord, Movie, Trail, WeatherDay

# Decimal places kept for latitude/longitude, matching the locations table columns
COORDINATE_PLACES = 7

_COORDINATE_QUANTUM = Decimal(1).scaleb(-COORDINATE_PLACES)

TMDB_IMAGE_BASE = "https://image.tmdb.org/t/p/w500"

# "Fri Jul 14 2017": weekday, month, day, year; always 15 characters
_WEATHER_DATE_FORMAT = "%a %b %d %Y"


def _weather_date(unix_seconds: Any) -> str | None:
    if unix_seconds is None:
        return None
    stamp = datetime.fromtimestamp(int(unix_seconds), tz=timezone.utc)
    return stamp.strftime(_WEATHER_DATE_FORMAT)


def normalize_weather(item: dict[str, Any]) -> WeatherDay:
    return WeatherDay(
        time=_weather_date(item.get("time")),
        forecast=item.get("summary"),
    )


def normalize_business(item: dict[str, Any]) -> Business:
    return Business(
        name=item.get("name"),
        image_url=item.get("image_url"),
        price=item.get("price"),
        rating=item.get("rating"),
        url=item.get("url"),
    )


def normalize_movie(item: dict[str, Any]) -> Movie:
    poster_path = item.get("poster_path")
    return Movie(
        title=item.get("title"),
        overview=item.get("overview"),
        average_votes=item.get("vote_average"),
        total_votes=item.get("vote_count"),
        image_url=f"{TMDB_IMAGE_BASE}{poster_path}" if poster_path else None,
        popularity=item.get("popularity"),
        released_on=item.get("release_date"),
    )


def _split_condition_date(value: str | None) -> tuple[str | None, str | None]:
    """'2018-07-21 20:48:49' -> ('2018-07-21', '20:48:49')."""
    if not value:
        return None, None
    date_part, _, time_part = value.partition(" ")
    return date_part or None, time_part or None


def normalize_trail(item: dict[str, Any]) -> Trail:
    condition_date, condition_time = _split_condition_date(item.get("conditionDate"))
    return Trail(
        name=item.get("name"),
        location=item.get("location"),
        length=item.get("length"),
        stars=item.get("stars"),
        star_votes=item.get("starVotes"),
        summary=item.get("summary"),
        trail_url=item.get("url"),
        conditions=item.get("conditionStatus"),
        condition_date=condition_date,
        condition_time=condition_time,
    )


def round_coordinate(value: Any) -> float | None:
    """Round a coordinate the way a NUMERIC(10, 7) column stores it."""
    if value is None:
        return None
    try:
        return float(Decimal(str(value)).quantize(_COORDINATE_QUANTUM, rounding=ROUND_HALF_UP))
    except InvalidOperation as exc:
        raise UpstreamError("geocode", f"non-numeric coordinate {value!r}") from exc


def location_from_geocode(search_query: str, body: dict[str, Any]) -> LocationRecord:
    """
    Build an unsaved LocationRecord from a Google Geocoding response.

    Raises:
        UpstreamError: the response carries no results (e.g. status ZERO_RESULTS).
    """
    results = body.get("results") or []
    if not results:
        raise UpstreamError("geocode", f"no results (status={body.get('status')!r})")

    first = results[0]
    coords = (first.get("geometry") or {}).get("location") or {}
    return LocationRecord(
        search_query=search_query,
        formatted_query=first.get("formatted_address"),
        latitude=round_coordinate(coords.get("lat")),
        longitude=round_coordinate(coords.get("lng")),
    )
