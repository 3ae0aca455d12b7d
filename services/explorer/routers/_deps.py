"""
Shared helpers for the lookup routers.

The browser client serialises nested query objects jQuery-style
(``data[latitude]=47.6``); dotted keys (``data.latitude``) are accepted too.
A missing parameter is not a 422 here: it raises MissingParameterError and
goes through the same generic 500 as every other failure.
"""

from __future__ import annotations

from typing import Any

from fastapi import Request

from services.explorer.errors import MissingParameterError, UpstreamError
from services.explorer.locations.cache import LocationCache
from services.explorer.upstream.client import UpstreamClient


def get_upstream(request: Request) -> UpstreamClient:
    return request.app.state.upstream


def get_location_cache(request: Request) -> LocationCache:
    return request.app.state.location_cache


def query_param(request: Request, name: str | None = None) -> str:
    """Read ``data`` (no name) or ``data[name]`` / ``data.name`` from the query string."""
    params = request.query_params
    if not name:
        candidates = ["data"]
    else:
        candidates = [f"data[{name}]", f"data.{name}"]

    for key in candidates:
        value = params.get(key)
        if value:
            return value
    raise MissingParameterError(candidates[0])


def upstream_items(body: dict[str, Any], api: str, *path: str) -> list[dict[str, Any]]:
    """Walk ``path`` into an upstream body and return the item list found there."""
    node: Any = body
    for key in path:
        if not isinstance(node, dict) or key not in node:
            raise UpstreamError(api, f"response missing {'.'.join(path)!r}")
        node = node[key]
    if not isinstance(node, list):
        raise UpstreamError(api, f"{'.'.join(path)!r} is not a list")
    return node
