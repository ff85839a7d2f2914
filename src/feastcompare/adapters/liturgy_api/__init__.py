"""Liturgical calendar API adapter."""

from __future__ import annotations

from .client import LiturgyApiClient, LiturgyApiError, should_cache_payload
from .schema import (
    CalendarInfoPayload,
    CalendarListResponse,
    DayDescriptionPayload,
    DayInfoResponse,
    LiturgicalUnitPayload,
    SearchResponse,
    SearchResultPayload,
)
from .translator import (
    translate_calendar,
    translate_day,
    translate_observance,
    translate_search_result,
)

__all__ = [
    "CalendarInfoPayload",
    "CalendarListResponse",
    "DayDescriptionPayload",
    "DayInfoResponse",
    "LiturgicalUnitPayload",
    "LiturgyApiClient",
    "LiturgyApiError",
    "SearchResponse",
    "SearchResultPayload",
    "should_cache_payload",
    "translate_calendar",
    "translate_day",
    "translate_observance",
    "translate_search_result",
]
