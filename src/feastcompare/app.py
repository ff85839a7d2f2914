"""Application orchestration entry points."""

from __future__ import annotations

import asyncio
from logging import getLogger
from typing import TYPE_CHECKING

from feastcompare.adapters.liturgy_api import LiturgyApiClient, should_cache_payload
from feastcompare.config import (
    DEFAULT_CALENDARS,
    get_comparison_config,
    get_liturgy_api_config,
)
from feastcompare.domain.reconciliation import ReconciliationEngine
from feastcompare.domain.search import search_calendars

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable, Sequence
    from datetime import date

    from feastcompare.config import ComparisonConfig
    from feastcompare.domain.types import (
        CalendarId,
        CalendarSearchResult,
        CalendarSystem,
        ComparisonTable,
    )

type ClientFactory = Callable[[], LiturgyApiClient]


log = getLogger(__name__)


def build_liturgy_api_client() -> LiturgyApiClient:
    """Build an API client from the environment configuration."""

    return LiturgyApiClient(config=get_liturgy_api_config(cache_predicate=should_cache_payload))


def default_calendar_selection(calendars: Sequence[CalendarSystem]) -> tuple[CalendarId, ...]:
    """Return the default calendars that the catalog actually offers."""

    available = {calendar.id for calendar in calendars}
    return tuple(calendar_id for calendar_id in DEFAULT_CALENDARS if calendar_id in available)


async def compare_day_async(
    target: date,
    calendar_ids: Iterable[CalendarId],
    *,
    client_factory: ClientFactory | None = None,
    comparison: ComparisonConfig | None = None,
) -> ComparisonTable:
    """Reconcile ``calendar_ids`` for ``target`` against the liturgical calendar API."""

    effective_config = comparison or get_comparison_config()
    async with (client_factory or build_liturgy_api_client)() as client:
        engine = ReconciliationEngine.from_config(
            effective_config,
            day_lookup=client,
            search=client,
        )
        return await engine.reconcile(target, calendar_ids)


def compare_day(
    target: date,
    calendar_ids: Iterable[CalendarId],
    *,
    client_factory: ClientFactory | None = None,
    comparison: ComparisonConfig | None = None,
) -> ComparisonTable:
    return asyncio.run(
        compare_day_async(
            target,
            calendar_ids,
            client_factory=client_factory,
            comparison=comparison,
        )
    )


async def _list_calendars_async(client_factory: ClientFactory) -> list[CalendarSystem]:
    async with client_factory() as client:
        return await client.list_calendars()


def list_calendars(*, client_factory: ClientFactory | None = None) -> list[CalendarSystem]:
    """Fetch the calendar catalog."""

    return asyncio.run(_list_calendars_async(client_factory or build_liturgy_api_client))


async def _search_feasts_async(
    query: str,
    calendar_ids: Iterable[CalendarId],
    client_factory: ClientFactory,
) -> tuple[CalendarSearchResult, ...]:
    async with client_factory() as client:
        return await search_calendars(client, query, calendar_ids)


def search_feasts(
    query: str,
    calendar_ids: Iterable[CalendarId],
    *,
    client_factory: ClientFactory | None = None,
) -> tuple[CalendarSearchResult, ...]:
    """Search ``calendar_ids`` for feasts matching ``query``."""

    return asyncio.run(
        _search_feasts_async(query, calendar_ids, client_factory or build_liturgy_api_client)
    )
