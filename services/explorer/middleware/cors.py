"""
CORS middleware configuration.
The browser client is served from a different origin; allowed origins come from settings.
"""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from services.explorer.config import settings


def setup_cors(app: FastAPI) -> None:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials="*" not in settings.cors_origins,
        allow_methods=["GET", "OPTIONS"],
        allow_headers=["Content-Type", "X-Request-ID"],
        expose_headers=["X-Request-ID"],
        max_age=600,
    )
