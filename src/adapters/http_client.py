"""Wrapper de httpx.

Centralises what every remote call shares: the client builder (timeouts,
headers), the backoff schedule and the classification of failures into
`ApiError`.
"""

from __future__ import annotations

import asyncio
import json

import httpx

from core.config import ClientConfig
from core.domain.errors import ApiError
from core.domain.language import Language


def build_async_client(config: ClientConfig | None = None) -> httpx.AsyncClient:
    """Crea un `httpx.AsyncClient` con defaults seguros."""

    config = config or ClientConfig()
    headers = {
        "User-Agent": config.user_agent,
        "Accept": "application/json",
    }
    return httpx.AsyncClient(
        timeout=httpx.Timeout(config.timeout_seconds),
        follow_redirects=True,
        headers=headers,
    )


def backoff_delay_seconds(attempt: int, base_ms: int) -> float:
    """Delay after failed attempt `attempt` (1-based): base, 2*base, 4*base..."""

    return (base_ms * (2 ** (attempt - 1))) / 1000


def error_from_response(response: httpx.Response, language: Language = Language.ENGLISH) -> ApiError:
    return ApiError.from_status(response.status_code, response.reason_phrase, language)


def classify_failure(exc: BaseException, language: Language = Language.ENGLISH) -> ApiError:
    """Translate any failure raised during an attempt into an `ApiError`.

    Order: ApiError as-is, connectivity, timeout, HTTP status, anything else.
    """

    if isinstance(exc, ApiError):
        return exc
    if isinstance(exc, httpx.TransportError) and not isinstance(exc, httpx.TimeoutException):
        return ApiError.connection(detail=str(exc) or type(exc).__name__, language=language)
    if isinstance(exc, (httpx.TimeoutException, asyncio.TimeoutError, TimeoutError)):
        return ApiError.timeout(language=language)
    if isinstance(exc, httpx.HTTPStatusError):
        return error_from_response(exc.response, language)
    if isinstance(exc, json.JSONDecodeError):
        return ApiError.unexpected(detail=f"invalid JSON: {exc}", language=language)
    return ApiError.unexpected(detail=str(exc) or type(exc).__name__, language=language)
