"""Configuración de la aplicación.

Two layers live here:
- `ClientConfig`: an immutable value built once and injected into the
  catalog client. The client never reads process-wide state.
- `AppSettings`: pydantic-settings bootstrap for CLI entry-points (env vars,
  `.env` files). It only produces a `ClientConfig`, it is not used by the core.
"""

from __future__ import annotations

import os
import sys
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from core.domain.language import Language

DEFAULT_BASE_URL = "https://pokeapi.co/api/v2"
DEFAULT_USER_AGENT = "pokedex-d2/0.1 (+https://local)"


def get_user_config_dir() -> Path:
    """Directorio de configuración por usuario (cross-platform, sin dependencias)."""

    if sys.platform.startswith("win"):
        base = Path(os.environ.get("APPDATA", str(Path.home())))
        return base / "pokedex-d2"
    if sys.platform == "darwin":
        return Path.home() / "Library" / "Application Support" / "pokedex-d2"

    xdg = os.environ.get("XDG_CONFIG_HOME")
    if xdg:
        return Path(xdg) / "pokedex-d2"
    return Path.home() / ".config" / "pokedex-d2"


def get_user_env_file() -> Path:
    return get_user_config_dir() / ".env"


def default_favorites_path() -> Path:
    return get_user_config_dir() / "favorites.json"


class ClientConfig(BaseModel):
    """Settings for a single `CatalogClient` instance."""

    model_config = ConfigDict(frozen=True)

    base_url: str = Field(
        default=DEFAULT_BASE_URL,
        min_length=8,
        description="Base URL of the remote catalog (no trailing slash needed).",
    )
    timeout_ms: int = Field(
        default=10_000,
        gt=0,
        description="Per-attempt timeout in milliseconds.",
    )
    max_retries: int = Field(
        default=3,
        ge=1,
        le=10,
        description="Total attempts per logical request (first try included).",
    )
    backoff_base_ms: int = Field(
        default=1_000,
        ge=0,
        description="Delay before the first retry; doubles on every further retry.",
    )
    detail_concurrency: int | None = Field(
        default=None,
        ge=1,
        description="Max in-flight detail requests in a batch. None means unbounded.",
    )
    non_retryable_statuses: frozenset[int] = Field(
        default_factory=frozenset,
        description="HTTP statuses that fail immediately instead of being retried.",
    )
    user_agent: str = Field(default=DEFAULT_USER_AGENT, min_length=1)

    @property
    def timeout_seconds(self) -> float:
        return self.timeout_ms / 1000

    @property
    def root_url(self) -> str:
        return self.base_url.rstrip("/")


class AppSettings(BaseSettings):
    """Configuración central de las entry-points (CLI).

    Orden de `.env`: proyecto primero (dev), luego config global de usuario.
    """

    model_config = SettingsConfigDict(
        env_prefix="POKEDEX_D2_",
        extra="ignore",
        case_sensitive=False,
        env_file=(".env", str(get_user_env_file())),
        env_file_encoding="utf-8",
    )

    api_base_url: str = Field(
        default=DEFAULT_BASE_URL,
        min_length=8,
        description="Base URL de la API (PokéAPI compatible).",
    )
    http_timeout_ms: int = Field(
        default=10_000,
        gt=0,
        description="Timeout por intento (milisegundos).",
    )
    http_max_retries: int = Field(
        default=3,
        ge=1,
        le=10,
        description="Intentos máximos por petición.",
    )
    http_backoff_base_ms: int = Field(default=1_000, ge=0)
    detail_concurrency: int | None = Field(
        default=None,
        ge=1,
        le=500,
        description="Concurrencia máxima al hidratar detalles (None = sin límite).",
    )
    user_agent: str = Field(default=DEFAULT_USER_AGENT, min_length=1)

    default_count: int = Field(
        default=50,
        ge=1,
        le=2000,
        description="Número de registros a cargar por defecto.",
    )
    favorites_path: Path = Field(
        default_factory=default_favorites_path,
        description="Fichero JSON donde se guardan los favoritos.",
    )
    default_language: Language = Field(
        default=Language.ENGLISH,
        description="Idioma de los mensajes de error (en/es).",
    )

    log_level: str = Field(default="WARNING")
    log_format: str = Field(
        default="console",
        pattern="^(console|json)$",
        description="'console' for humans, 'json' for log aggregation.",
    )

    def client_config(self) -> ClientConfig:
        return ClientConfig(
            base_url=self.api_base_url,
            timeout_ms=self.http_timeout_ms,
            max_retries=self.http_max_retries,
            backoff_base_ms=self.http_backoff_base_ms,
            detail_concurrency=self.detail_concurrency,
            user_agent=self.user_agent,
        )
