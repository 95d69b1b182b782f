from __future__ import annotations

import pytest
from pydantic import ValidationError

from core.domain.errors import ApiError
from core.domain.models import (
    DetailOutcome,
    FavoriteSet,
    FilterCriteria,
    Record,
    RecordPage,
    RecordSummary,
)
from tests.factories import make_record, page_payload, record_payload


def test_record_tags_follow_slot_order() -> None:
    payload = record_payload(6, "charizard", ("fire", "flying"))
    payload["types"].reverse()
    record = Record.model_validate(payload)
    assert record.tags == ["fire", "flying"]


def test_record_derived_values() -> None:
    record = make_record(1, "bulbasaur", ("grass", "poison"), height=7, weight=69)
    assert record.height_m == pytest.approx(0.7)
    assert record.weight_kg == pytest.approx(6.9)
    assert record.image_url == "https://img.test/1.png"


def test_record_is_frozen() -> None:
    record = make_record(1, "bulbasaur")
    with pytest.raises(ValidationError):
        record.name = "ivysaur"  # type: ignore[misc]


@pytest.mark.parametrize("tags", [(), ("a", "b", "c")])
def test_record_requires_one_or_two_tags(tags: tuple[str, ...]) -> None:
    with pytest.raises(ValidationError):
        Record.model_validate(record_payload(1, "bulbasaur", tags))


def test_record_requires_positive_id() -> None:
    with pytest.raises(ValidationError):
        Record.model_validate(record_payload(0, "missingno"))


def test_summary_identifier_prefers_parsed_id() -> None:
    assert RecordSummary(name="pikachu", url="https://x/pokemon/25/").identifier == 25
    assert RecordSummary(name="pikachu", url="https://x/pokemon/pikachu/").identifier == "pikachu"


def test_page_parses_results() -> None:
    page = RecordPage.model_validate(page_payload([(1, "bulbasaur"), (2, "ivysaur")], count=1302))
    assert page.count == 1302
    assert [s.record_id for s in page.results] == [1, 2]


def test_filter_criteria_blank_tag_means_none() -> None:
    assert FilterCriteria(tag="").tag is None
    assert FilterCriteria(tag="  ").tag is None
    assert FilterCriteria(tag="fire").tag == "fire"


def test_favorite_set_membership() -> None:
    favorites = FavoriteSet.of([1, 25, 25])
    assert 25 in favorites
    assert 4 not in favorites
    assert len(favorites) == 2


def test_detail_outcome_ok_flag() -> None:
    assert DetailOutcome(identifier=1, record=make_record(1, "bulbasaur")).ok
    assert not DetailOutcome(identifier=1, error=ApiError.from_status(404)).ok


def test_detail_outcome_requires_exactly_one_result() -> None:
    with pytest.raises(ValueError):
        DetailOutcome(identifier=1)
    with pytest.raises(ValueError):
        DetailOutcome(identifier=1, record=make_record(1, "bulbasaur"), error=ApiError.from_status(500))
