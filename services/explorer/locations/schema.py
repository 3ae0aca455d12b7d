"""Schema for the geocoding cache table."""

from services.explorer.normalizers import COORDINATE_PLACES

LOCATIONS_TABLE = "locations"

SCHEMA_SQL = f"""
CREATE TABLE IF NOT EXISTS {LOCATIONS_TABLE} (
    id SERIAL PRIMARY KEY,
    search_query VARCHAR(255) NOT NULL UNIQUE,
    formatted_query VARCHAR(255),
    latitude NUMERIC(10, {COORDINATE_PLACES}),
    longitude NUMERIC(10, {COORDINATE_PLACES}),
    created_at TIMESTAMPTZ NOT NULL DEFAULT NOW()
);
"""
