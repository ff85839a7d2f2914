"""Translate liturgical calendar API payloads into domain types."""

from __future__ import annotations

from typing import TYPE_CHECKING

from feastcompare.domain.types import (
    UNSPECIFIED_COLOR,
    CalendarSystem,
    DayInfo,
    Observance,
    SearchMatch,
)

if TYPE_CHECKING:
    from datetime import date

    from feastcompare.domain.types import CalendarId

    from .schema import (
        CalendarInfoPayload,
        DayDescriptionPayload,
        LiturgicalUnitPayload,
        SearchResultPayload,
    )


def _color(value: str | None) -> str:
    if value is None or not value.strip():
        return UNSPECIFIED_COLOR
    return value


def translate_calendar(payload: CalendarInfoPayload) -> CalendarSystem:
    return CalendarSystem(
        id=payload.name,
        display_label=payload.display_name,
        commemoration_interpretation=payload.commemoration_interpretation,
        description=payload.description,
    )


def translate_observance(
    payload: LiturgicalUnitPayload,
    *,
    calendar_id: CalendarId,
    fallback_date: date,
) -> Observance:
    return Observance(
        description=payload.desc,
        rank=payload.rank,
        liturgical_color=_color(payload.color),
        date=payload.date or fallback_date,
        calendar_id=calendar_id,
    )


def translate_day(payload: DayDescriptionPayload, *, calendar_id: CalendarId) -> DayInfo:
    principal = (
        translate_observance(payload.day, calendar_id=calendar_id, fallback_date=payload.date)
        if payload.day is not None
        else None
    )
    commemorations = tuple(
        translate_observance(unit, calendar_id=calendar_id, fallback_date=payload.date)
        for unit in payload.commemorations
    )
    return DayInfo(
        date=payload.date,
        principal=principal,
        commemorations=commemorations,
        day_in_season=payload.day_in_season,
        day_rank=payload.day_rank,
    )


def translate_search_result(payload: SearchResultPayload) -> SearchMatch:
    return SearchMatch(
        name=payload.name,
        description=payload.description,
        rank=payload.rank,
        score=payload.score,
        date=payload.date,
        color=_color(payload.color),
    )
