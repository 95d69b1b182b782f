"""Modelos del dominio (Pydantic v2).

Field shapes follow the upstream PokéAPI documents; unknown fields are
ignored. Records are frozen: they are only created from a successful detail
fetch and treated as read-only values afterwards.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

from pydantic import BaseModel, ConfigDict, Field, field_validator

from core.domain.errors import ApiError
from core.formatting import (
    convert_height_units,
    convert_weight_units,
    extract_id_from_locator,
)


class _Frozen(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore")


class NamedResource(_Frozen):
    name: str = Field(..., min_length=1)
    url: str = ""


class TagSlot(_Frozen):
    slot: int = Field(..., ge=1)
    type: NamedResource


class StatEntry(_Frozen):
    base_stat: int = Field(..., ge=0)
    effort: int = Field(default=0, ge=0)
    stat: NamedResource


class AbilityEntry(_Frozen):
    is_hidden: bool = False
    slot: int = Field(..., ge=1)
    ability: NamedResource


class Sprites(_Frozen):
    front_default: str | None = None
    front_shiny: str | None = None
    back_default: str | None = None
    back_shiny: str | None = None


class Record(_Frozen):
    """A fully-hydrated catalog item (PokéAPI "pokemon")."""

    id: int = Field(..., gt=0, description="Identificador único y positivo.")
    name: str = Field(..., min_length=1)
    height: int = Field(default=0, ge=0, description="Altura en decímetros.")
    weight: int = Field(default=0, ge=0, description="Peso en hectogramos.")
    base_experience: int | None = None
    order: int | None = None
    sprites: Sprites = Field(default_factory=Sprites)
    types: tuple[TagSlot, ...] = Field(..., min_length=1, max_length=2)
    stats: tuple[StatEntry, ...] = ()
    abilities: tuple[AbilityEntry, ...] = ()

    @property
    def tags(self) -> list[str]:
        """Type names ordered by slot; the first one is the primary tag."""

        return [slot.type.name for slot in sorted(self.types, key=lambda s: s.slot)]

    @property
    def height_m(self) -> float:
        return convert_height_units(self.height)

    @property
    def weight_kg(self) -> float:
        return convert_weight_units(self.weight)

    @property
    def image_url(self) -> str | None:
        return self.sprites.front_default


class RecordSummary(_Frozen):
    """Entry of a list response, before the detail fetch."""

    name: str = Field(..., min_length=1)
    url: str = ""

    @property
    def record_id(self) -> int:
        return extract_id_from_locator(self.url)

    @property
    def identifier(self) -> int | str:
        """Id parsed from the locator, falling back to the name."""

        return self.record_id or self.name


class RecordPage(_Frozen):
    count: int = Field(default=0, ge=0)
    next: str | None = None
    previous: str | None = None
    results: tuple[RecordSummary, ...] = ()


class TagMember(_Frozen):
    slot: int = Field(..., ge=1)
    pokemon: RecordSummary


class TagResource(_Frozen):
    """A category tag (PokéAPI "type") and the records that carry it."""

    id: int = Field(..., gt=0)
    name: str = Field(..., min_length=1)
    pokemon: tuple[TagMember, ...] = ()

    @property
    def members(self) -> list[RecordSummary]:
        return [member.pokemon for member in self.pokemon]


class FavoriteSet(frozenset):
    """Identifiers the user marked as favorite.

    Owned by the favorites store; the pipeline only asks `id in favorites`.
    """

    @classmethod
    def of(cls, ids: Iterable[int]) -> "FavoriteSet":
        return cls(int(i) for i in ids)


class FilterCriteria(_Frozen):
    """Ephemeral filter state: (search text, selected tag, favorites-only)."""

    search: str = ""
    tag: str | None = None
    favorites_only: bool = False
    case_sensitive: bool = False

    @field_validator("tag")
    @classmethod
    def _blank_tag_is_none(cls, value: str | None) -> str | None:
        if value is None or not value.strip():
            return None
        return value


@dataclass(frozen=True)
class DetailOutcome:
    """Per-item result of a partial-failure tolerant batch fetch."""

    identifier: int | str
    record: Record | None = None
    error: ApiError | None = None

    def __post_init__(self) -> None:
        if (self.record is None) == (self.error is None):
            raise ValueError("DetailOutcome needs exactly one of record or error")

    @property
    def ok(self) -> bool:
        return self.record is not None
