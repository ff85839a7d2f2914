"""Orchestrator for cross-calendar reconciliation.

Stages of one run:
1) look up every selected calendar's day concurrently
2) keep only comparison-worthy observances
3) group them into canonical feasts by exact description
4) search the calendars that did not report a feast
5) sort the feasts by name

Lookup and search failures are recovered per calendar; a run never raises
because one collaborator failed.
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from logging import getLogger
from typing import TYPE_CHECKING

from feastcompare.config.comparison import DEFAULT_MATCH_THRESHOLD, DEFAULT_SEARCH_CONCURRENCY
from feastcompare.domain.collation import collation_key
from feastcompare.domain.types import ABSENT, ComparisonTable

from .grouping import group_observances
from .policy import resolve_search_status

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence
    from datetime import date

    from feastcompare.config.comparison import ComparisonConfig
    from feastcompare.domain.ports import DayLookup, FeastSearch
    from feastcompare.domain.types import (
        CalendarId,
        CanonicalFeast,
        DayInfo,
        ObservanceStatus,
        SearchMatch,
    )

log = getLogger(__name__)

type SearchSlot = tuple[CanonicalFeast, CalendarId]


def _feast_sort_key(feast: CanonicalFeast) -> tuple[str, str]:
    return collation_key(feast.canonical_name)


@dataclass(slots=True)
class ReconciliationEngine:
    """Reconcile what several calendars observe on one date."""

    day_lookup: DayLookup
    search: FeastSearch
    match_threshold: float = DEFAULT_MATCH_THRESHOLD
    search_concurrency: int = DEFAULT_SEARCH_CONCURRENCY

    @classmethod
    def from_config(
        cls,
        config: ComparisonConfig,
        *,
        day_lookup: DayLookup,
        search: FeastSearch,
    ) -> ReconciliationEngine:
        return cls(
            day_lookup=day_lookup,
            search=search,
            match_threshold=config.match_threshold,
            search_concurrency=config.search_concurrency,
        )

    async def reconcile(
        self,
        target: date,
        calendar_ids: Iterable[CalendarId],
    ) -> ComparisonTable:
        """Run all reconciliation stages for ``target`` across ``calendar_ids``."""

        selection = tuple(dict.fromkeys(calendar_ids))
        if not selection:
            log.info("No calendars selected for %s; nothing to compare", target)
            return ComparisonTable(date=target, calendar_ids=())

        log.info("Reconciling %s across calendars: %s", target, ", ".join(selection))
        days_by_calendar = await self._retrieve_days(target, selection)
        unavailable = tuple(
            calendar_id for calendar_id in selection if calendar_id not in days_by_calendar
        )

        feasts = group_observances(selection, days_by_calendar)
        await self._search_missing(tuple(feasts.values()), selection)

        ordered = tuple(sorted(feasts.values(), key=_feast_sort_key))
        log.info(
            "Finished reconciling %s: feasts=%s, unavailable=%s",
            target,
            len(ordered),
            len(unavailable),
        )
        return ComparisonTable(
            date=target,
            calendar_ids=selection,
            feasts=ordered,
            unavailable_calendars=unavailable,
        )

    async def _retrieve_days(
        self,
        target: date,
        selection: Sequence[CalendarId],
    ) -> dict[CalendarId, DayInfo]:
        days = await asyncio.gather(
            *(self._lookup_day(calendar_id, target) for calendar_id in selection)
        )
        return {
            calendar_id: day
            for calendar_id, day in zip(selection, days, strict=True)
            if day is not None
        }

    async def _lookup_day(self, calendar_id: CalendarId, target: date) -> DayInfo | None:
        try:
            return await self.day_lookup.get_day_info(
                calendar_id, target.year, target.month, target.day
            )
        except Exception as exc:  # noqa: BLE001
            log.warning("Day lookup failed for calendar %s on %s: %s", calendar_id, target, exc)
            return None

    async def _search_missing(
        self,
        feasts: Sequence[CanonicalFeast],
        selection: Sequence[CalendarId],
    ) -> None:
        slots: list[SearchSlot] = [
            (feast, calendar_id)
            for feast in feasts
            for calendar_id in selection
            if calendar_id not in feast.per_calendar_status
        ]

        if self.search_concurrency <= 1:
            statuses = [await self._resolve_slot(feast, calendar_id) for feast, calendar_id in slots]
        else:
            semaphore = asyncio.Semaphore(self.search_concurrency)

            async def bounded(feast: CanonicalFeast, calendar_id: CalendarId) -> ObservanceStatus:
                async with semaphore:
                    return await self._resolve_slot(feast, calendar_id)

            statuses = await asyncio.gather(
                *(bounded(feast, calendar_id) for feast, calendar_id in slots)
            )

        found: dict[tuple[str, CalendarId], ObservanceStatus] = {
            (feast.canonical_name, calendar_id): status
            for (feast, calendar_id), status in zip(slots, statuses, strict=True)
        }
        # one entry per selected calendar, in selection order
        for feast in feasts:
            reported = feast.per_calendar_status
            feast.per_calendar_status = {
                calendar_id: reported[calendar_id]
                if calendar_id in reported
                else found.get((feast.canonical_name, calendar_id), ABSENT)
                for calendar_id in selection
            }

    async def _resolve_slot(
        self,
        feast: CanonicalFeast,
        calendar_id: CalendarId,
    ) -> ObservanceStatus:
        matches = await self._search_calendar(calendar_id, feast.canonical_name)
        return resolve_search_status(
            feast,
            calendar_id,
            matches,
            threshold=self.match_threshold,
        )

    async def _search_calendar(
        self,
        calendar_id: CalendarId,
        query: str,
    ) -> Sequence[SearchMatch]:
        try:
            return await self.search.search(calendar_id, query)
        except Exception as exc:  # noqa: BLE001
            log.warning("Search for %r failed in calendar %s: %s", query, calendar_id, exc)
            return ()
