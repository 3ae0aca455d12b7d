"""
Shared test fixtures for the City Explorer API test suite.

Provides:
- async FastAPI test client (no network, no database, no Redis)
- in-memory location store and canned upstream client on app.state
- canned upstream payloads for every API kind
"""

import os

import pytest
from httpx import ASGITransport, AsyncClient

# Ensure test env vars before any app imports
os.environ.setdefault("ENVIRONMENT", "development")
os.environ.setdefault("DATABASE_URL", "")
os.environ.setdefault("REDIS_URL", "")
os.environ.setdefault("SENTRY_DSN", "")

from services.explorer.tests.helpers.fakes import (  # noqa: E402
    FakeLocationStore,
    FakeUpstream,
    geocode_body,
)


# ---------------------------------------------------------------------------
# Canned upstream payloads
# ---------------------------------------------------------------------------

@pytest.fixture
def weather_body() -> dict:
    return {
        "latitude": 47.6062095,
        "longitude": -122.3320708,
        "daily": {
            "data": [
                {"time": 1500000000, "summary": "Partly cloudy until afternoon."},
                {"time": 1500086400, "summary": "Light rain in the morning."},
            ]
        },
    }


@pytest.fixture
def yelp_body() -> dict:
    return {
        "businesses": [
            {
                "name": "Pike Place Chowder",
                "image_url": "https://s3-media.fl.yelpcdn.com/bphoto/abc/o.jpg",
                "price": "$$",
                "rating": 4.5,
                "url": "https://www.yelp.com/biz/pike-place-chowder-seattle",
                "review_count": 7000,
            }
        ],
        "total": 1,
    }


@pytest.fixture
def movies_body() -> dict:
    return {
        "page": 1,
        "results": [
            {
                "title": "Sleepless in Seattle",
                "overview": "A recently widowed man's son calls a radio talk-show.",
                "vote_average": 6.6,
                "vote_count": 1200,
                "poster_path": "/abc.jpg",
                "popularity": 11.2,
                "release_date": "1993-06-24",
            }
        ],
    }


@pytest.fixture
def trails_body() -> dict:
    return {
        "trails": [
            {
                "name": "Rattlesnake Ledge",
                "location": "North Bend, Washington",
                "length": 4.3,
                "stars": 4.4,
                "starVotes": 85,
                "summary": "A popular hike to a rocky ledge.",
                "url": "https://www.hikingproject.com/trail/7021679/rattlesnake-ledge",
                "conditionStatus": "All Clear",
                "conditionDate": "2018-07-21 20:48:49",
            }
        ],
        "success": 1,
    }


# ---------------------------------------------------------------------------
# FastAPI test client: fake upstream + in-memory store on app.state
# ---------------------------------------------------------------------------

@pytest.fixture
def fake_store() -> FakeLocationStore:
    return FakeLocationStore()


@pytest.fixture
def fake_upstream(weather_body, yelp_body, movies_body, trails_body) -> FakeUpstream:
    return FakeUpstream(
        {
            "geocode": geocode_body(),
            "weather": weather_body,
            "yelp": yelp_body,
            "movies": movies_body,
            "trails": trails_body,
        }
    )


@pytest.fixture
async def app(fake_store, fake_upstream):
    """Create a test FastAPI app with fake dependencies (lifespan is not run)."""
    from services.explorer.config import settings
    from services.explorer.locations.cache import LocationCache
    from services.explorer.main import app as _app

    _app.state.settings = settings
    _app.state.redis = None
    _app.state.db = None
    _app.state.upstream = fake_upstream
    _app.state.location_cache = LocationCache(fake_upstream, store=fake_store)
    return _app


@pytest.fixture
async def client(app):
    """Async HTTP client bound to the test app."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
