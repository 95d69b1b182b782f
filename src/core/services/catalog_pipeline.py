"""Catalog loading orchestration.

Runs the list -> details -> derivation flow for entry-points (CLI, tests,
future APIs) while keeping side-effects such as printing out of the core.
UI layers plug in through `PipelineHooks`.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Container

from core.domain.models import FilterCriteria, Record
from core.interfaces.catalog import CatalogSource
from core.logging_utils import get_logger
from core.services.derivation import (
    StageCounts,
    apply_filters,
    dedupe_records,
    unique_tags,
)

logger = get_logger("catalog_pipeline")


@dataclass
class CatalogRequest:
    """Parameters that control a catalog load."""

    count: int = 50
    criteria: FilterCriteria = field(default_factory=FilterCriteria)
    settled: bool = False


@dataclass
class PipelineHooks:
    """Optional callbacks for UI layers (warnings, progress)."""

    warning: Callable[[str], None] | None = None
    loaded: Callable[[int], None] | None = None


@dataclass
class CatalogResult:
    records: list[Record]
    filtered: list[Record]
    tags: list[str]
    counts: StageCounts
    warnings: list[str] = field(default_factory=list)


async def load_catalog(
    *,
    source: CatalogSource,
    request: CatalogRequest,
    favorite_ids: Container[int] | None = None,
    hooks: PipelineHooks | None = None,
) -> CatalogResult:
    """Fetch the first `request.count` records and derive the filtered view.

    Strict mode propagates the first `ApiError`. Settled mode keeps the
    records that loaded and turns each failed item into a warning.
    """

    hooks = hooks or PipelineHooks()
    warnings: list[str] = []

    def warn(message: str) -> None:
        warnings.append(message)
        if hooks.warning:
            hooks.warning(message)

    if request.settled:
        outcomes = await source.get_list_with_details_settled(request.count)
        fetched: list[Record] = []
        for outcome in outcomes:
            if outcome.record is not None:
                fetched.append(outcome.record)
            elif outcome.error is not None:
                warn(f"{outcome.identifier}: {outcome.error.message}")
    else:
        fetched = await source.get_list_with_details(request.count)

    records = dedupe_records(fetched)
    if len(records) != len(fetched):
        warn(f"{len(fetched) - len(records)} duplicated record(s) dropped")
    if hooks.loaded:
        hooks.loaded(len(records))

    result = apply_filters(records, request.criteria, favorite_ids)
    logger.info(
        "catalog_loaded",
        total=result.counts.total,
        after_search=result.counts.after_search,
        after_tag=result.counts.after_tag,
        after_favorites=result.counts.after_favorites,
    )

    return CatalogResult(
        records=records,
        filtered=result.records,
        tags=unique_tags(records),
        counts=result.counts,
        warnings=warnings,
    )
