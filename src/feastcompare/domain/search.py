"""Free-text feast search across several calendars."""

from __future__ import annotations

import asyncio
from logging import getLogger
from typing import TYPE_CHECKING

from .collation import collation_key
from .types import CalendarSearchResult

if TYPE_CHECKING:
    from collections.abc import Iterable

    from .ports import FeastSearch
    from .types import CalendarId

log = getLogger(__name__)


class EmptySelectionError(ValueError):
    """Raised when a multi-calendar operation is asked to run on no calendars."""


def _result_sort_key(
    result: CalendarSearchResult,
) -> tuple[tuple[str, str], float, tuple[str, str]]:
    return (
        collation_key(result.calendar_id),
        -result.match.score,
        collation_key(result.match.name),
    )


async def search_calendars(
    search: FeastSearch,
    query: str,
    calendar_ids: Iterable[CalendarId],
) -> tuple[CalendarSearchResult, ...]:
    """Search every selected calendar for ``query``.

    Results keep every calendar's matches, ordered by calendar, then by score
    (best first), then by name. A calendar whose search fails contributes no
    results.
    """

    normalized = query.strip()
    if not normalized:
        return ()
    selection = tuple(dict.fromkeys(calendar_ids))
    if not selection:
        raise EmptySelectionError("Select at least one calendar to search")

    per_calendar = await asyncio.gather(
        *(_search_one(search, calendar_id, normalized) for calendar_id in selection)
    )
    results = [result for batch in per_calendar for result in batch]
    return tuple(sorted(results, key=_result_sort_key))


async def _search_one(
    search: FeastSearch,
    calendar_id: CalendarId,
    query: str,
) -> list[CalendarSearchResult]:
    try:
        matches = await search.search(calendar_id, query)
    except Exception as exc:  # noqa: BLE001
        log.warning("Search failed for calendar %s: %s", calendar_id, exc)
        return []
    log.debug("Found %s results for %r in %s", len(matches), query, calendar_id)
    return [CalendarSearchResult(calendar_id=calendar_id, match=match) for match in matches]
