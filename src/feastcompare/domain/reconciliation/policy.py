"""Acceptance policy for secondary search matches.

Responsibilities of this stage:
- pick the best candidate from one calendar's search results
- accept it only above the match threshold
- describe how the accepted match differs from the base report
- map stored statuses onto the display categories
"""

from __future__ import annotations

from enum import StrEnum
from typing import TYPE_CHECKING

from feastcompare.config.comparison import DEFAULT_MATCH_THRESHOLD
from feastcompare.domain.types import (
    ABSENT,
    AbsentStatus,
    FoundElsewhereStatus,
    PresentStatus,
)

if TYPE_CHECKING:
    from collections.abc import Iterable

    from feastcompare.domain.types import (
        CalendarId,
        CanonicalFeast,
        ObservanceStatus,
        SearchMatch,
    )


class DisplayStatus(StrEnum):
    """Status categories shown in a comparison table."""

    PRESENT = "present"
    ABSENT = "absent"
    TRANSFERRED = "transferred"
    RANK_CHANGED = "rank-changed"
    FOUND_ELSEWHERE = "found-elsewhere"


def best_match(matches: Iterable[SearchMatch]) -> SearchMatch | None:
    """Return the highest scoring match; the earliest one wins ties."""

    best: SearchMatch | None = None
    for match in matches:
        if best is None or match.score > best.score:
            best = match
    return best


def is_acceptable(match: SearchMatch, *, threshold: float = DEFAULT_MATCH_THRESHOLD) -> bool:
    return match.score > threshold


def found_elsewhere(
    feast: CanonicalFeast,
    calendar_id: CalendarId,
    match: SearchMatch,
) -> FoundElsewhereStatus:
    """Describe ``match`` relative to the base calendar's report of ``feast``."""

    base = feast.base_status
    return FoundElsewhereStatus(
        description=match.description,
        rank=match.rank,
        color=match.color,
        date=match.date,
        # TODO: compare the match date against the target date once search
        # results carry a resolved date; this only ever runs for non-base calendars.
        transferred=feast.base_calendar_id != calendar_id,
        rank_changed=base.rank != match.rank,
        score=match.score,
    )


def resolve_search_status(
    feast: CanonicalFeast,
    calendar_id: CalendarId,
    matches: Iterable[SearchMatch],
    *,
    threshold: float = DEFAULT_MATCH_THRESHOLD,
) -> FoundElsewhereStatus | AbsentStatus:
    match = best_match(matches)
    if match is None or not is_acceptable(match, threshold=threshold):
        return ABSENT
    return found_elsewhere(feast, calendar_id, match)


def display_status(status: ObservanceStatus) -> DisplayStatus:
    """Classify a stored status into its display category.

    A changed rank is reported before a transfer since ``transferred`` is set
    for every match found in a non-base calendar.
    """

    if isinstance(status, PresentStatus):
        return DisplayStatus.PRESENT
    if isinstance(status, AbsentStatus):
        return DisplayStatus.ABSENT
    if status.rank_changed:
        return DisplayStatus.RANK_CHANGED
    if status.transferred:
        return DisplayStatus.TRANSFERRED
    return DisplayStatus.FOUND_ELSEWHERE
