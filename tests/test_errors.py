from __future__ import annotations

import asyncio
import json

import httpx
import pytest

from adapters.http_client import backoff_delay_seconds, classify_failure
from core.domain.errors import ApiError, ErrorKind
from core.domain.language import Language


@pytest.mark.parametrize(
    ("status", "kind", "message"),
    [
        (404, ErrorKind.NOT_FOUND, "resource not found"),
        (429, ErrorKind.HTTP, "rate limited, try later"),
        (500, ErrorKind.HTTP, "server error"),
        (503, ErrorKind.HTTP, "service unavailable"),
        (418, ErrorKind.HTTP, "HTTP error 418"),
    ],
)
def test_from_status_messages(status: int, kind: ErrorKind, message: str) -> None:
    error = ApiError.from_status(status, "Reason")
    assert error.kind is kind
    assert error.status == status
    assert error.message == message
    assert error.detail == f"{status} Reason"


def test_spanish_messages() -> None:
    assert ApiError.from_status(404, language=Language.SPANISH).message == "recurso no encontrado"
    assert "conexión" in ApiError.connection(language=Language.SPANISH).message


def test_api_error_is_read_only() -> None:
    error = ApiError.from_status(500)
    with pytest.raises(AttributeError):
        error.status = 200  # type: ignore[misc]
    with pytest.raises(AttributeError):
        error._message = "patched"


def test_to_dict() -> None:
    assert ApiError.timeout().to_dict() == {
        "kind": "timeout",
        "status": 0,
        "message": "request took too long",
        "detail": "Request timeout",
    }


def test_classify_passes_api_error_through() -> None:
    original = ApiError.from_status(404)
    assert classify_failure(original) is original


def test_classify_connection_failure() -> None:
    error = classify_failure(httpx.ConnectError("connection refused"))
    assert error.kind is ErrorKind.CONNECTION
    assert error.status == 0
    assert error.message == "connection error"
    assert error.detail == "connection refused"


@pytest.mark.parametrize("exc", [httpx.ReadTimeout("slow"), httpx.ConnectTimeout("slow"), asyncio.TimeoutError()])
def test_classify_timeouts(exc: BaseException) -> None:
    error = classify_failure(exc)
    assert error.kind is ErrorKind.TIMEOUT
    assert error.status == 0
    assert error.message == "request took too long"


def test_classify_http_status_error() -> None:
    request = httpx.Request("GET", "https://pokeapi.test/api/v2/pokemon/1")
    response = httpx.Response(503, request=request)
    exc = httpx.HTTPStatusError("boom", request=request, response=response)
    error = classify_failure(exc)
    assert error.status == 503
    assert error.message == "service unavailable"


@pytest.mark.parametrize("exc", [json.JSONDecodeError("bad", "doc", 0), RuntimeError("weird")])
def test_classify_anything_else_is_unexpected(exc: BaseException) -> None:
    error = classify_failure(exc)
    assert error.kind is ErrorKind.UNEXPECTED
    assert error.status == 0
    assert error.message == "unexpected error"


def test_backoff_doubles_from_base() -> None:
    assert [backoff_delay_seconds(n, 1000) for n in (1, 2, 3)] == [1.0, 2.0, 4.0]
    assert backoff_delay_seconds(3, 0) == 0
