"""Domain value types for cross-calendar feast comparison."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum
from typing import TYPE_CHECKING, Final, Literal

if TYPE_CHECKING:
    from datetime import date

type CalendarId = str

UNSPECIFIED_COLOR: Final[str] = "unspecified"


@dataclass(frozen=True, slots=True)
class CalendarSystem:
    """One liturgical calendar tradition offered by the catalog."""

    id: CalendarId
    display_label: str
    commemoration_interpretation: str
    description: str = ""


@dataclass(frozen=True, slots=True, kw_only=True)
class Observance:
    """A principal observance or commemoration reported by a calendar for a date."""

    description: str
    rank: str
    date: date
    calendar_id: CalendarId
    liturgical_color: str = UNSPECIFIED_COLOR


@dataclass(frozen=True, slots=True, kw_only=True)
class DayInfo:
    """What a calendar reports for one date."""

    date: date
    principal: Observance | None = None
    commemorations: tuple[Observance, ...] = ()
    day_in_season: str = ""
    day_rank: str = ""

    def observances(self) -> tuple[Observance, ...]:
        """Return the principal observance followed by the commemorations."""

        if self.principal is None:
            return self.commemorations
        return (self.principal, *self.commemorations)


@dataclass(frozen=True, slots=True, kw_only=True)
class SearchMatch:
    """One candidate returned by a calendar's fuzzy feast search.

    ``score`` is only comparable with other matches of the same query.
    ``date`` is the calendar's own date text for the feast and may be absent.
    """

    name: str
    description: str
    rank: str
    score: float
    date: str | None = None
    color: str = UNSPECIFIED_COLOR


class StatusKind(StrEnum):
    """How a calendar relates to a canonical feast."""

    PRESENT = "present"
    FOUND_ELSEWHERE = "found-elsewhere"
    ABSENT = "absent"


@dataclass(frozen=True, slots=True, kw_only=True)
class PresentStatus:
    """The calendar directly reports the feast on the target date."""

    description: str
    rank: str
    color: str = UNSPECIFIED_COLOR
    kind: Literal[StatusKind.PRESENT] = StatusKind.PRESENT


@dataclass(frozen=True, slots=True, kw_only=True)
class FoundElsewhereStatus:
    """The calendar's search located an acceptable match for the feast."""

    description: str
    rank: str
    date: str | None
    transferred: bool
    rank_changed: bool
    score: float
    color: str = UNSPECIFIED_COLOR
    kind: Literal[StatusKind.FOUND_ELSEWHERE] = StatusKind.FOUND_ELSEWHERE


@dataclass(frozen=True, slots=True)
class AbsentStatus:
    """Neither a direct report nor an acceptable search match exists."""

    kind: Literal[StatusKind.ABSENT] = StatusKind.ABSENT


type ObservanceStatus = PresentStatus | FoundElsewhereStatus | AbsentStatus

ABSENT: Final[AbsentStatus] = AbsentStatus()


@dataclass(slots=True, kw_only=True)
class CanonicalFeast:
    """One distinct feast seen across the compared calendars.

    ``canonical_name`` is the exact description text of the first report;
    ``base_calendar_id`` is the calendar that reported it first.
    """

    canonical_name: str
    base_calendar_id: CalendarId
    per_calendar_status: dict[CalendarId, ObservanceStatus] = field(default_factory=dict)

    @property
    def base_status(self) -> PresentStatus:
        status = self.per_calendar_status[self.base_calendar_id]
        if not isinstance(status, PresentStatus):
            raise TypeError(
                f"Base calendar {self.base_calendar_id!r} of {self.canonical_name!r} "
                "is not present"
            )
        return status

    def status_for(self, calendar_id: CalendarId) -> ObservanceStatus:
        return self.per_calendar_status.get(calendar_id, ABSENT)


class ComparisonState(StrEnum):
    """Overall outcome of one reconciliation run."""

    READY = "ready"
    EMPTY_SELECTION = "empty_selection"
    NOTHING_TO_COMPARE = "nothing_to_compare"


@dataclass(frozen=True, slots=True, kw_only=True)
class ComparisonTable:
    """Result of reconciling the selected calendars for one date."""

    date: date
    calendar_ids: tuple[CalendarId, ...]
    feasts: tuple[CanonicalFeast, ...] = ()
    unavailable_calendars: tuple[CalendarId, ...] = ()

    @property
    def state(self) -> ComparisonState:
        if not self.calendar_ids:
            return ComparisonState.EMPTY_SELECTION
        if not self.feasts:
            return ComparisonState.NOTHING_TO_COMPARE
        return ComparisonState.READY


@dataclass(frozen=True, slots=True, kw_only=True)
class CalendarSearchResult:
    """A search match tagged with the calendar that produced it."""

    calendar_id: CalendarId
    match: SearchMatch
