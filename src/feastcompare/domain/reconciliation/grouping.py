"""Canonical grouping of directly reported observances.

Observances are grouped by their exact description text. Calendars are
visited in selection order and, within a calendar, the principal observance
comes before the commemorations, so the base calendar of every feast is
deterministic for identical inputs.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from feastcompare.domain.classification import is_comparison_worthy
from feastcompare.domain.types import CanonicalFeast, PresentStatus

if TYPE_CHECKING:
    from collections.abc import Mapping, Sequence

    from feastcompare.domain.types import CalendarId, DayInfo, Observance

type FeastsByName = dict[str, CanonicalFeast]


def worthy_observances(day: DayInfo) -> tuple[Observance, ...]:
    """Return the observances of ``day`` that take part in comparisons, in report order."""

    return tuple(observance for observance in day.observances() if is_comparison_worthy(observance))


def group_observances(
    calendar_ids: Sequence[CalendarId],
    days_by_calendar: Mapping[CalendarId, DayInfo],
) -> FeastsByName:
    """Build canonical feasts from the days reported by each calendar."""

    feasts: FeastsByName = {}
    for calendar_id in calendar_ids:
        day = days_by_calendar.get(calendar_id)
        if day is None:
            continue
        for observance in worthy_observances(day):
            status = PresentStatus(
                description=observance.description,
                rank=observance.rank,
                color=observance.liturgical_color,
            )
            feast = feasts.get(observance.description)
            if feast is None:
                feasts[observance.description] = CanonicalFeast(
                    canonical_name=observance.description,
                    base_calendar_id=calendar_id,
                    per_calendar_status={calendar_id: status},
                )
                continue
            # a repeated description within one calendar keeps its first report
            feast.per_calendar_status.setdefault(calendar_id, status)
    return feasts
