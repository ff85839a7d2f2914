from __future__ import annotations

import pytest

from feastcompare.domain.reconciliation import (
    DisplayStatus,
    best_match,
    display_status,
    resolve_search_status,
)
from feastcompare.domain.types import (
    ABSENT,
    CanonicalFeast,
    FoundElsewhereStatus,
    PresentStatus,
)
from tests.support.liturgy import match


def _feast(rank: str = "Feast") -> CanonicalFeast:
    return CanonicalFeast(
        canonical_name="Saint William",
        base_calendar_id="a",
        per_calendar_status={"a": PresentStatus(description="Saint William", rank=rank)},
    )


def test_best_match_prefers_highest_score_and_first_on_ties() -> None:
    first = match("First", 0.93)
    second = match("Second", 0.93)

    assert best_match([match("Low", 0.2), first, second]) is first
    assert best_match([]) is None


def test_resolve_search_status_without_matches_is_absent() -> None:
    assert resolve_search_status(_feast(), "b", []) is ABSENT


def test_resolve_search_status_keeps_rank_when_equal() -> None:
    status = resolve_search_status(_feast(), "b", [match("Saint William", 0.96, on="06-25")])

    assert isinstance(status, FoundElsewhereStatus)
    assert status.rank_changed is False
    assert status.transferred is True
    assert status.date == "06-25"


def test_resolve_search_status_honours_custom_threshold() -> None:
    status = resolve_search_status(_feast(), "b", [match("Saint William", 0.8)], threshold=0.75)

    assert isinstance(status, FoundElsewhereStatus)


def test_base_status_requires_present_base_calendar() -> None:
    feast = CanonicalFeast(
        canonical_name="Saint William",
        base_calendar_id="a",
        per_calendar_status={"a": ABSENT},
    )

    with pytest.raises(TypeError):
        _ = feast.base_status


def _found(*, transferred: bool, rank_changed: bool) -> FoundElsewhereStatus:
    return FoundElsewhereStatus(
        description="Saint William",
        rank="Memorial",
        date=None,
        transferred=transferred,
        rank_changed=rank_changed,
        score=0.95,
    )


@pytest.mark.parametrize(
    ("status", "expected"),
    [
        (PresentStatus(description="Saint William", rank="Feast"), DisplayStatus.PRESENT),
        (ABSENT, DisplayStatus.ABSENT),
        (_found(transferred=True, rank_changed=True), DisplayStatus.RANK_CHANGED),
        (_found(transferred=True, rank_changed=False), DisplayStatus.TRANSFERRED),
        (_found(transferred=False, rank_changed=False), DisplayStatus.FOUND_ELSEWHERE),
    ],
)
def test_display_status(status: object, expected: DisplayStatus) -> None:
    assert display_status(status) is expected  # type: ignore[arg-type]
