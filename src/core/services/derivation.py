"""Derivation pipeline: search and filtering over in-memory records.

Every function is pure: no I/O, inputs are never mutated and results keep
the relative order of the source list. Empty or malformed inputs degrade to
empty/unfiltered outputs instead of raising.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Container, Iterable, Sequence

from core.domain.models import FilterCriteria, Record


@dataclass(frozen=True)
class StageCounts:
    """Record counts after each stage, for diagnostics in the UI layer."""

    total: int
    after_search: int
    after_tag: int
    after_favorites: int


@dataclass(frozen=True)
class FilterResult:
    records: list[Record]
    counts: StageCounts


def search_by_name(
    records: Sequence[Record] | None,
    term: str | None,
    case_sensitive: bool = False,
) -> Sequence[Record]:
    """Records whose name contains `term`.

    A blank or non-string term returns the input unchanged (same object).
    """

    if records is None:
        return []
    if not isinstance(term, str) or not term.strip():
        return records

    needle = term if case_sensitive else term.casefold()
    out: list[Record] = []
    for record in records:
        name = record.name if case_sensitive else record.name.casefold()
        if needle in name:
            out.append(record)
    return out


def filter_by_tag(records: Sequence[Record] | None, tag: str | None) -> Sequence[Record]:
    """Records carrying `tag` (exact match). Empty tag returns the input."""

    if records is None:
        return []
    if not tag:
        return records
    return [record for record in records if tag in record.tags]


def unique_tags(records: Iterable[Record] | None) -> list[str]:
    """Distinct tags across `records`, sorted ascending."""

    seen: set[str] = set()
    for record in records or ():
        seen.update(record.tags)
    return sorted(seen)


def filter_by_favorites(
    records: Sequence[Record] | None,
    favorite_ids: Container[int] | None,
) -> list[Record]:
    """Records whose id is a member of `favorite_ids`."""

    if records is None or favorite_ids is None:
        return []
    return [record for record in records if record.id in favorite_ids]


def dedupe_records(records: Iterable[Record] | None) -> list[Record]:
    """Remove repeated ids keeping the first occurrence."""

    seen: set[int] = set()
    deduped: list[Record] = []
    for record in records or ():
        if record.id in seen:
            continue
        seen.add(record.id)
        deduped.append(record)
    return deduped


def apply_filters(
    records: Sequence[Record] | None,
    criteria: FilterCriteria,
    favorite_ids: Container[int] | None = None,
) -> FilterResult:
    """Run search -> tag -> favorites and report the count after each stage.

    The favorites stage only runs when `criteria.favorites_only` is set.
    """

    if records is None:
        records = []
    searched = search_by_name(records, criteria.search, criteria.case_sensitive)
    tagged = filter_by_tag(searched, criteria.tag)
    final = filter_by_favorites(tagged, favorite_ids) if criteria.favorites_only else tagged

    return FilterResult(
        records=list(final),
        counts=StageCounts(
            total=len(records),
            after_search=len(searched),
            after_tag=len(tagged),
            after_favorites=len(final),
        ),
    )
