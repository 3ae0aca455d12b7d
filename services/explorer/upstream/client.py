"""
UpstreamClient: one GET per call against a registered third-party API.

Each upstream is described once in UPSTREAMS: its URL (path placeholders are
filled from the ``path`` argument, ``{api_key}`` from settings) and where its
credential goes: query parameter, path segment, or bearer header.

No retries, no response caching, no per-call timeout: the shared
httpx.AsyncClient's transport defaults apply.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

import httpx

from services.explorer.config import Settings
from services.explorer.errors import UpstreamError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Upstream:
    """How to reach one third-party API."""
    name: str
    url: str
    key_setting: str               # Settings attribute holding the credential
    key_param: str | None = None   # query parameter carrying the key
    bearer: bool = False           # send key as "Authorization: Bearer <key>"


UPSTREAMS: dict[str, Upstream] = {
    "geocode": Upstream(
        name="geocode",
        url="https://maps.googleapis.com/maps/api/geocode/json",
        key_setting="google_api_key",
        key_param="key",
    ),
    "weather": Upstream(
        name="weather",
        url="https://api.darksky.net/forecast/{api_key}/{latitude},{longitude}",
        key_setting="dark_sky_api_key",
    ),
    "yelp": Upstream(
        name="yelp",
        url="https://api.yelp.com/v3/businesses/search",
        key_setting="yelp_api_key",
        bearer=True,
    ),
    "movies": Upstream(
        name="movies",
        url="https://api.themoviedb.org/3/search/movie",
        key_setting="tmdb_apiv3_key",
        key_param="api_key",
    ),
    "trails": Upstream(
        name="trails",
        url="https://www.hikingproject.com/data/get-trails",
        key_setting="trail_api_key",
        key_param="key",
    ),
}


class UpstreamClient:
    """
    Shared outbound client.

    Usage:
        client = UpstreamClient(settings)
        body = await client.get_json("movies", {"query": "Seattle"})
        await client.close()
    """

    def __init__(self, settings: Settings, http: httpx.AsyncClient | None = None) -> None:
        """
        Args:
            settings: Source of the per-upstream API keys.
            http:     Injected httpx client (tests). When omitted the client
                      owns one and closes it in close().
        """
        self._settings = settings
        self._owns_http = http is None
        self._http = http or httpx.AsyncClient()

    async def close(self) -> None:
        if self._owns_http:
            await self._http.aclose()

    def _credential(self, upstream: Upstream) -> str:
        key = getattr(self._settings, upstream.key_setting, "")
        if not key:
            raise UpstreamError(upstream.name, f"{upstream.key_setting.upper()} is not configured")
        return key

    async def get_json(
        self,
        api: str,
        params: dict[str, Any] | None = None,
        path: dict[str, Any] | None = None,
    ) -> dict[str, Any]:
        """
        Perform exactly one GET against the named upstream and return its JSON body.

        Raises:
            UpstreamError: unknown api, missing key, transport failure,
                           non-2xx status, or a body that is not a JSON object.
        """
        upstream = UPSTREAMS.get(api)
        if upstream is None:
            raise UpstreamError(api, "unknown upstream")

        key = self._credential(upstream)
        query = dict(params or {})
        headers: dict[str, str] = {}
        if upstream.key_param:
            query[upstream.key_param] = key
        if upstream.bearer:
            headers["Authorization"] = f"Bearer {key}"

        try:
            url = upstream.url.format(api_key=key, **(path or {}))
        except KeyError as exc:
            raise UpstreamError(api, f"missing path value {exc.args[0]!r}") from exc

        try:
            resp = await self._http.get(url, params=query, headers=headers)
            resp.raise_for_status()
        except httpx.HTTPStatusError as exc:
            raise UpstreamError(
                api,
                exc.response.text[:200],
                status_code=exc.response.status_code,
            ) from exc
        except httpx.HTTPError as exc:
            raise UpstreamError(api, f"request failed: {exc!r}") from exc

        logger.debug("Upstream %s responded %d", api, resp.status_code)

        try:
            body = resp.json()
        except ValueError as exc:
            raise UpstreamError(api, "invalid JSON body", status_code=resp.status_code) from exc

        if not isinstance(body, dict):
            raise UpstreamError(api, "expected a JSON object", status_code=resp.status_code)
        return body
