"""Error value surfaced by every failed remote operation.

`ApiError` is a single concrete type with an explicit `kind` discriminant.
Callers branch on `kind` (or `status`) instead of on exception subclasses.
"""

from __future__ import annotations

from enum import Enum
from typing import Any

from core.domain.language import Language


class ErrorKind(str, Enum):
    CONNECTION = "connection"
    TIMEOUT = "timeout"
    HTTP = "http"
    NOT_FOUND = "not_found"
    UNEXPECTED = "unexpected"


_MESSAGES: dict[Language, dict[str, str]] = {
    Language.ENGLISH: {
        "connection": "connection error",
        "timeout": "request took too long",
        "unexpected": "unexpected error",
        "404": "resource not found",
        "429": "rate limited, try later",
        "500": "server error",
        "503": "service unavailable",
        "http": "HTTP error {status}",
    },
    Language.SPANISH: {
        "connection": "error de conexión, verifica tu conexión a internet",
        "timeout": "la petición tardó demasiado, intenta de nuevo",
        "unexpected": "error inesperado al cargar datos",
        "404": "recurso no encontrado",
        "429": "demasiadas peticiones, intenta de nuevo en un momento",
        "500": "error del servidor, intenta de nuevo más tarde",
        "503": "servicio no disponible temporalmente",
        "http": "error HTTP {status}",
    },
}


def message_for(key: str, language: Language = Language.ENGLISH, **values: Any) -> str:
    catalog = _MESSAGES.get(language, _MESSAGES[Language.ENGLISH])
    return catalog[key].format(**values)


def http_message(status: int, language: Language = Language.ENGLISH) -> str:
    """Friendly text for an HTTP failure status."""

    key = str(status)
    if key in _MESSAGES[Language.ENGLISH]:
        return message_for(key, language)
    return message_for("http", language, status=status)


class ApiError(Exception):
    """Terminal failure of a remote operation (after retries).

    Read-only once constructed. `status` is 0 for connection, timeout and
    unexpected failures, and the HTTP code otherwise.
    """

    __slots__ = ("_kind", "_status", "_message", "_detail")

    def __init__(
        self,
        kind: ErrorKind,
        message: str,
        *,
        status: int = 0,
        detail: str | None = None,
    ) -> None:
        super().__init__(message)
        object.__setattr__(self, "_kind", ErrorKind(kind))
        object.__setattr__(self, "_status", int(status))
        object.__setattr__(self, "_message", message)
        object.__setattr__(self, "_detail", detail)

    def __setattr__(self, name: str, value: Any) -> None:
        if name in ApiError.__slots__ or name in ("kind", "status", "message", "detail"):
            raise AttributeError(f"ApiError is immutable (cannot set {name!r})")
        super().__setattr__(name, value)

    @property
    def kind(self) -> ErrorKind:
        return self._kind

    @property
    def status(self) -> int:
        return self._status

    @property
    def message(self) -> str:
        return self._message

    @property
    def detail(self) -> str | None:
        return self._detail

    @classmethod
    def connection(cls, detail: str | None = None, language: Language = Language.ENGLISH) -> "ApiError":
        return cls(ErrorKind.CONNECTION, message_for("connection", language), detail=detail)

    @classmethod
    def timeout(cls, detail: str | None = "Request timeout", language: Language = Language.ENGLISH) -> "ApiError":
        return cls(ErrorKind.TIMEOUT, message_for("timeout", language), detail=detail)

    @classmethod
    def unexpected(cls, detail: str | None = None, language: Language = Language.ENGLISH) -> "ApiError":
        return cls(ErrorKind.UNEXPECTED, message_for("unexpected", language), detail=detail)

    @classmethod
    def from_status(
        cls,
        status: int,
        reason: str | None = None,
        language: Language = Language.ENGLISH,
    ) -> "ApiError":
        kind = ErrorKind.NOT_FOUND if status == 404 else ErrorKind.HTTP
        detail = f"{status} {reason}".strip() if reason else str(status)
        return cls(kind, http_message(status, language), status=status, detail=detail)

    def to_dict(self) -> dict[str, Any]:
        return {
            "kind": self._kind.value,
            "status": self._status,
            "message": self._message,
            "detail": self._detail,
        }

    def __repr__(self) -> str:
        return f"ApiError(kind={self._kind.value!r}, status={self._status}, message={self._message!r})"
