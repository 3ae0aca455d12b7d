"""
Error taxonomy and the single error reporter.

Every failure a request can hit ends up here:
  - UpstreamError          third-party API unreachable, non-2xx, or malformed body
  - PersistenceError       location store connection or statement failure
  - MissingParameterError  required query parameter absent

All of them are reported the same way: logged with traceback (Sentry picks up
ERROR records through its logging integration) and answered with a plain-text
500. Callers never see which kind it was.
"""

from __future__ import annotations

import logging

from fastapi import Request
from fastapi.responses import PlainTextResponse

logger = logging.getLogger(__name__)

FAILURE_MESSAGE = "Sorry, something went wrong"


class ExplorerError(Exception):
    """Base for every failure surfaced to a caller as a generic 500."""


class UpstreamError(ExplorerError):
    def __init__(self, api: str, message: str, status_code: int | None = None) -> None:
        self.api = api
        self.status_code = status_code
        detail = f"{api}: {message}"
        if status_code is not None:
            detail = f"{detail} (status={status_code})"
        super().__init__(detail)


class PersistenceError(ExplorerError):
    pass


class MissingParameterError(ExplorerError):
    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"missing required query parameter {name!r}")


def report_error(exc: BaseException, request: Request | None = None) -> PlainTextResponse | None:
    """
    Log a failure and, when a request is still being answered, build the 500.

    Safe to call with request=None from code that has already left the
    request lifecycle: it then only logs and returns None.
    """
    request_id = None
    path = None
    if request is not None:
        request_id = getattr(request.state, "request_id", None)
        path = request.url.path

    logger.error(
        "Request failed: path=%s request_id=%s error=%s",
        path,
        request_id,
        exc,
        exc_info=(type(exc), exc, exc.__traceback__),
    )

    if request is None:
        return None
    return PlainTextResponse(FAILURE_MESSAGE, status_code=500)


async def explorer_error_handler(request: Request, exc: Exception) -> PlainTextResponse:
    """FastAPI exception handler: every failure kind gets the same response."""
    return report_error(exc, request)
