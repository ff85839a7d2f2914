"""Ports for the external liturgical calendar services."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Sequence

    from feastcompare.domain.types import CalendarId, CalendarSystem, DayInfo, SearchMatch


@runtime_checkable
class DayLookup(Protocol):
    """Return what one calendar reports for one date.

    Implementations raise when the calendar has no data for the date or the
    transport fails; callers treat either as "no data".
    """

    async def get_day_info(
        self,
        calendar_id: CalendarId,
        year: int,
        month: int,
        day: int,
    ) -> DayInfo: ...


@runtime_checkable
class FeastSearch(Protocol):
    """Free-text fuzzy search for feasts within one calendar."""

    async def search(self, calendar_id: CalendarId, query: str) -> Sequence[SearchMatch]: ...


@runtime_checkable
class CalendarCatalog(Protocol):
    """List the calendar systems available for comparison."""

    async def list_calendars(self) -> Sequence[CalendarSystem]: ...


__all__ = ["CalendarCatalog", "DayLookup", "FeastSearch"]
