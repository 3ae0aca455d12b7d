"""
Sentry instrumentation for the FastAPI service.
Strips sensitive headers and upstream API keys from events before they leave the process.
"""

from typing import Any

import sentry_sdk
from sentry_sdk.integrations.fastapi import FastApiIntegration
from sentry_sdk.integrations.starlette import StarletteIntegration

from services.explorer.config import settings

SENSITIVE_HEADERS = {"authorization", "cookie", "set-cookie"}
# Query parameters the upstream client uses for credentials
SENSITIVE_PARAMS = ("key=", "api_key=")


def _filter_headers(headers: Any) -> None:
    if isinstance(headers, dict):
        for key in list(headers.keys()):
            if key.lower() in SENSITIVE_HEADERS:
                headers[key] = "[FILTERED]"


def _filter_url(url: Any) -> Any:
    if isinstance(url, str) and any(p in url for p in SENSITIVE_PARAMS):
        return url.split("?", 1)[0] + "?[FILTERED]"
    return url


def _strip_sensitive_data(event: dict[str, Any], hint: dict[str, Any]) -> dict[str, Any] | None:
    """before_send hook: strip Authorization headers, cookies and keyed URLs from breadcrumbs."""
    if "breadcrumbs" in event:
        for breadcrumb in event["breadcrumbs"].get("values", []):
            data = breadcrumb.get("data", {})
            if isinstance(data, dict):
                _filter_headers(data.get("headers", {}))
                if "url" in data:
                    data["url"] = _filter_url(data["url"])
    request = event.get("request", {})
    if isinstance(request, dict):
        _filter_headers(request.get("headers", {}))
    return event


def setup_sentry() -> None:
    if not settings.sentry_dsn:
        return

    sentry_sdk.init(
        dsn=settings.sentry_dsn,
        environment=settings.environment,
        release=f"{settings.app_name}@{settings.app_version}",
        traces_sample_rate=settings.sentry_traces_sample_rate,
        before_send=_strip_sensitive_data,
        integrations=[
            StarletteIntegration(transaction_style="endpoint"),
            FastApiIntegration(transaction_style="endpoint"),
        ],
        send_default_pii=False,
    )
