"""PokéAPI catalog client.

Responsabilidad:
- GET requests against the configured base URL with a per-attempt timeout.
- Sequential retries with exponential backoff, local to each logical request.
- Typed accessors (`RecordPage`, `Record`, `TagResource`) validated with
  pydantic; every terminal failure surfaces as `ApiError`.

No response caching happens here: every call is a fresh round trip.
"""

from __future__ import annotations

import asyncio
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, Awaitable, Callable, Mapping, TypeVar
from urllib.parse import quote

import httpx
from pydantic import BaseModel, ValidationError

from adapters.http_client import (
    backoff_delay_seconds,
    build_async_client,
    classify_failure,
    error_from_response,
)
from core.config import ClientConfig
from core.domain.errors import ApiError
from core.domain.language import Language
from core.domain.models import (
    DetailOutcome,
    Record,
    RecordPage,
    RecordSummary,
    TagResource,
)
from core.formatting import build_endpoint
from core.logging_utils import get_logger

ModelT = TypeVar("ModelT", bound=BaseModel)
Sleep = Callable[[float], Awaitable[None]]

RECORD_COLLECTION = "pokemon"
TAG_COLLECTION = "type"

logger = get_logger("catalog_client")


def _validate_identifier(identifier: int | str) -> str:
    if isinstance(identifier, bool):
        raise ValueError("identifier must be a positive integer or a non-empty name")
    if isinstance(identifier, int):
        if identifier <= 0:
            raise ValueError(f"identifier must be positive, got {identifier}")
        return str(identifier)
    if isinstance(identifier, str) and identifier.strip():
        return quote(identifier.strip().lower(), safe="")
    raise ValueError("identifier must be a positive integer or a non-empty name")


class CatalogClient:
    """Async client for the record and tag collections.

    Use it as an async context manager to share one connection pool across
    calls (required for efficient batch fetches). Outside a context each call
    opens and closes its own `httpx.AsyncClient`.
    """

    def __init__(
        self,
        config: ClientConfig | None = None,
        *,
        http_client: httpx.AsyncClient | None = None,
        sleep: Sleep = asyncio.sleep,
        language: Language = Language.ENGLISH,
    ) -> None:
        self._config = config or ClientConfig()
        self._client = http_client
        self._owns_client = False
        self._sleep = sleep
        self._language = language

    @property
    def config(self) -> ClientConfig:
        return self._config

    async def __aenter__(self) -> "CatalogClient":
        if self._client is None:
            self._client = build_async_client(self._config)
            self._owns_client = True
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._owns_client and self._client is not None:
            await self._client.aclose()
            self._client = None
            self._owns_client = False

    @asynccontextmanager
    async def _session(self) -> AsyncIterator[httpx.AsyncClient]:
        if self._client is not None:
            yield self._client
            return
        async with build_async_client(self._config) as client:
            yield client

    def _url(self, *segments: str, params: Mapping[str, str | int] | None = None) -> str:
        return self._config.root_url + build_endpoint("/".join(segments), params)

    async def request_json(
        self,
        url: str,
        params: Mapping[str, Any] | None = None,
        *,
        client: httpx.AsyncClient | None = None,
    ) -> Any:
        """GET `url` and decode JSON, retrying failed attempts with backoff."""

        if client is None:
            async with self._session() as session:
                return await self.request_json(url, params, client=session)

        max_attempts = self._config.max_retries
        for attempt in range(1, max_attempts + 1):
            try:
                logger.debug("api_request", url=url, params=dict(params or {}), attempt=attempt)
                response = await asyncio.wait_for(
                    client.get(url, params=params),
                    timeout=self._config.timeout_seconds,
                )
                if not response.is_success:
                    raise error_from_response(response, self._language)
                data = response.json()
                logger.debug("api_response", url=url, attempt=attempt, status=response.status_code)
                return data
            except Exception as exc:
                error = classify_failure(exc, self._language)
                retryable = error.status not in self._config.non_retryable_statuses
                if attempt >= max_attempts or not retryable:
                    logger.error(
                        "api_request_failed",
                        url=url,
                        attempt=attempt,
                        kind=error.kind.value,
                        status=error.status,
                        detail=error.detail,
                    )
                    if error is exc:
                        raise
                    raise error from exc

                delay = backoff_delay_seconds(attempt, self._config.backoff_base_ms)
                logger.warning(
                    "api_request_retry",
                    url=url,
                    attempt=attempt,
                    kind=error.kind.value,
                    status=error.status,
                    delay_seconds=delay,
                )
                await self._sleep(delay)

        raise AssertionError("unreachable")  # pragma: no cover

    def _parse(self, model: type[ModelT], data: Any, url: str) -> ModelT:
        try:
            return model.model_validate(data)
        except ValidationError as exc:
            logger.error("api_payload_invalid", url=url, model=model.__name__, errors=exc.error_count())
            raise ApiError.unexpected(
                detail=f"invalid {model.__name__} payload from {url}",
                language=self._language,
            ) from exc

    async def get_page(
        self,
        limit: int = 50,
        offset: int = 0,
        *,
        client: httpx.AsyncClient | None = None,
    ) -> RecordPage:
        if isinstance(limit, bool) or not isinstance(limit, int) or limit < 1:
            raise ValueError(f"limit must be >= 1, got {limit!r}")
        if isinstance(offset, bool) or not isinstance(offset, int) or offset < 0:
            raise ValueError(f"offset must be >= 0, got {offset!r}")

        url = self._url(RECORD_COLLECTION, params={"limit": limit, "offset": offset})
        data = await self.request_json(url, client=client)
        page = self._parse(RecordPage, data, url)
        logger.info("record_list_fetched", limit=limit, offset=offset, items=len(page.results))
        return page

    async def get_list(self, limit: int = 50, offset: int = 0) -> list[RecordSummary]:
        page = await self.get_page(limit, offset)
        return list(page.results)

    async def get_details(
        self,
        identifier: int | str,
        *,
        client: httpx.AsyncClient | None = None,
    ) -> Record:
        """Fetch one record by positive id or by name."""

        segment = _validate_identifier(identifier)
        url = self._url(RECORD_COLLECTION, segment)
        data = await self.request_json(url, client=client)
        record = self._parse(Record, data, url)
        logger.debug("record_fetched", id=record.id, name=record.name)
        return record

    def _detail_fetcher(
        self,
        client: httpx.AsyncClient,
    ) -> Callable[[RecordSummary], Awaitable[Record]]:
        limit = self._config.detail_concurrency
        sem = asyncio.Semaphore(limit) if limit else None

        async def fetch_one(summary: RecordSummary) -> Record:
            if sem is None:
                return await self.get_details(summary.identifier, client=client)
            async with sem:
                return await self.get_details(summary.identifier, client=client)

        return fetch_one

    async def get_list_with_details(self, count: int = 50) -> list[Record]:
        """First `count` records, fully hydrated, in list order.

        All detail requests run concurrently. The first failure fails the
        whole batch and cancels the requests still in flight.
        """

        async with self._session() as client:
            page = await self.get_page(count, 0, client=client)
            fetch_one = self._detail_fetcher(client)
            tasks = [asyncio.ensure_future(fetch_one(summary)) for summary in page.results]
            try:
                records = await asyncio.gather(*tasks)
            except BaseException:
                for task in tasks:
                    task.cancel()
                await asyncio.gather(*tasks, return_exceptions=True)
                raise

        logger.info("record_batch_fetched", count=count, records=len(records))
        return list(records)

    async def get_list_with_details_settled(self, count: int = 50) -> list[DetailOutcome]:
        """Like `get_list_with_details`, but reports per-item failures.

        A failure of the list request itself still raises `ApiError`.
        """

        async with self._session() as client:
            page = await self.get_page(count, 0, client=client)
            fetch_one = self._detail_fetcher(client)
            results = await asyncio.gather(
                *(fetch_one(summary) for summary in page.results),
                return_exceptions=True,
            )

        outcomes: list[DetailOutcome] = []
        for summary, result in zip(page.results, results):
            if isinstance(result, ApiError):
                outcomes.append(DetailOutcome(identifier=summary.identifier, error=result))
            elif isinstance(result, BaseException):
                raise result
            else:
                outcomes.append(DetailOutcome(identifier=summary.identifier, record=result))

        failed = sum(1 for o in outcomes if not o.ok)
        logger.info("record_batch_settled", count=count, ok=len(outcomes) - failed, failed=failed)
        return outcomes

    async def get_tag(self, name: str) -> TagResource:
        if not isinstance(name, str) or not name.strip():
            raise ValueError("tag name must be a non-empty string")
        url = self._url(TAG_COLLECTION, quote(name.strip().lower(), safe=""))
        data = await self.request_json(url)
        return self._parse(TagResource, data, url)

    async def get_all_tags(self) -> list[str]:
        # The tag collection is small; one page covers it.
        url = self._url(TAG_COLLECTION, params={"limit": 100})
        data = await self.request_json(url)
        page = self._parse(RecordPage, data, url)
        return [entry.name for entry in page.results]
