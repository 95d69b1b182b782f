"""Contrato de la fuente de datos del catálogo.

`CatalogClient` in `adapters.pokeapi_client` implements it; services and
tests depend on this Protocol instead of the concrete HTTP client.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from core.domain.models import DetailOutcome, Record, RecordSummary


@runtime_checkable
class CatalogSource(Protocol):
    """Read-only access to list and detail resources.

    All methods are async because they perform network I/O and raise
    `ApiError` once retries are exhausted.
    """

    async def get_list(self, limit: int = 50, offset: int = 0) -> list[RecordSummary]:
        ...

    async def get_details(self, identifier: int | str) -> Record:
        ...

    async def get_list_with_details(self, count: int = 50) -> list[Record]:
        ...

    async def get_list_with_details_settled(self, count: int = 50) -> list[DetailOutcome]:
        ...
