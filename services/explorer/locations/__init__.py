"""
Location cache package.

Geocoding results are stored once per search query in PostgreSQL; repeat
queries are answered from the table without calling the geocoder.
"""

from services.explorer.locations.cache import NOT_FOUND, Found, LocationCache, LookupResult, NotFound
from services.explorer.locations.store import LocationStorage, PostgresLocationStore

__all__ = [
    "Found",
    "NotFound",
    "NOT_FOUND",
    "LookupResult",
    "LocationCache",
    "LocationStorage",
    "PostgresLocationStore",
]
