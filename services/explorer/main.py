"""
City Explorer FastAPI service: location, weather, business, movie and trail lookups.

Entrypoint: uvicorn services.explorer.main:app --host 0.0.0.0 --port 3000
"""

import logging
import uuid
from contextlib import asynccontextmanager

import asyncpg
import redis.asyncio as aioredis
import uvicorn
from fastapi import FastAPI, Request, Response

from services.explorer.config import settings
from services.explorer.errors import (
    ExplorerError,
    PersistenceError,
    explorer_error_handler,
    report_error,
)
from services.explorer.locations import LocationCache, PostgresLocationStore
from services.explorer.middleware.cors import setup_cors
from services.explorer.middleware.rate_limit import RateLimitMiddleware
from services.explorer.middleware.sentry import setup_sentry
from services.explorer.routers import health, location, movies, trails, weather, yelp
from services.explorer.upstream import UpstreamClient

logging.basicConfig(
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    level=logging.DEBUG if settings.debug else logging.INFO,
)
logger = logging.getLogger(__name__)


# Shared redis reference: set during lifespan, read by rate limiter
_redis_holder: dict = {"client": None}


async def _connect_store() -> tuple[asyncpg.Pool | None, PostgresLocationStore | None]:
    """Open the asyncpg pool. Without one the location cache runs stateless."""
    if not settings.database_url:
        logger.info("DATABASE_URL not set; location cache disabled")
        return None, None

    try:
        db_pool = await asyncpg.create_pool(
            settings.database_url,
            min_size=settings.db_pool_min_size,
            max_size=settings.db_pool_max_size,
            command_timeout=30,
        )
    except (OSError, asyncpg.PostgresError) as e:
        logger.warning(f"DB pool failed to connect, location cache disabled: {e}")
        return None, None

    store = PostgresLocationStore(db_pool)
    if settings.db_init_schema:
        try:
            await store.ensure_schema()
        except PersistenceError as e:
            logger.warning(f"Schema setup failed, location cache disabled: {e}")
            await db_pool.close()
            return None, None
    return db_pool, store


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    setup_sentry()

    # Redis for rate limiting
    redis_client = None
    if settings.redis_url:
        try:
            redis_client = aioredis.from_url(
                settings.redis_url,
                decode_responses=True,
                socket_connect_timeout=5,
            )
            await redis_client.ping()
        except Exception:
            # No Redis: requests pass through unlimited
            logger.warning("Redis unavailable; rate limiting disabled", exc_info=True)
            redis_client = None

    _redis_holder["client"] = redis_client
    app.state.redis = redis_client
    app.state.settings = settings

    db_pool, store = await _connect_store()
    app.state.db = db_pool

    upstream = UpstreamClient(settings)
    app.state.upstream = upstream
    app.state.location_cache = LocationCache(upstream, store=store)

    yield

    await upstream.close()
    if db_pool:
        await db_pool.close()
    if redis_client:
        await redis_client.aclose()


app = FastAPI(
    title="City Explorer API",
    version=settings.app_version,
    docs_url="/docs" if settings.environment == "development" else None,
    redoc_url=None,
    lifespan=lifespan,
)

app.include_router(health.router)
app.include_router(location.router)
app.include_router(weather.router)
app.include_router(yelp.router)
app.include_router(movies.router)
app.include_router(trails.router)

# -- Middleware (order matters: last added = outermost in Starlette) --


@app.middleware("http")
async def request_id_middleware(request: Request, call_next) -> Response:
    request_id = request.headers.get("x-request-id", str(uuid.uuid4()))
    request.state.request_id = request_id

    try:
        response = await call_next(request)
    except Exception as exc:
        # ExplorerError is answered inside the router stack; anything else lands here
        response = report_error(exc, request)
    response.headers["X-Request-ID"] = request_id
    return response


# Rate limiting: uses lazy redis reference from lifespan
class _LazyRateLimitMiddleware(RateLimitMiddleware):
    """Rate limiter that picks up Redis client after lifespan init."""

    def __init__(self, app):
        super().__init__(app, redis_client=None)

    async def dispatch(self, request, call_next):
        self.redis = _redis_holder.get("client")
        return await super().dispatch(request, call_next)


app.add_middleware(_LazyRateLimitMiddleware)

# CORS outermost: preflight is answered before rate limiting, and every
# response (429 and 500 included) carries the allow-origin header
setup_cors(app)


# -- Exception Handlers --
# Every failure kind answers with the same plain-text 500.

app.add_exception_handler(ExplorerError, explorer_error_handler)


@app.exception_handler(500)
async def internal_error_handler(request: Request, exc: Exception) -> Response:
    return report_error(exc, request)


if __name__ == "__main__":
    uvicorn.run(app, host=settings.host, port=settings.port)
