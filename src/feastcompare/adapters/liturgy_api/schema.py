"""Liturgical calendar API response schemas."""

from __future__ import annotations

import datetime as dt  # noqa: TC003
import logging
from typing import ClassVar

from pydantic import BaseModel, ConfigDict, Field

log = logging.getLogger(__name__)


class LiturgyApiBaseModel(BaseModel):
    model_config = ConfigDict(extra="allow")
    _logged_extra_keys: ClassVar[set[str]] = set()

    def model_post_init(self, _context: object, /) -> None:
        extras = self.__pydantic_extra__
        if not extras:
            return
        new_keys = set(extras).difference(self._logged_extra_keys)
        if not new_keys:
            return
        self._logged_extra_keys.update(new_keys)
        log.warning(
            "Liturgy API %s: unmodeled keys: %s",
            type(self).__name__,
            ", ".join(sorted(new_keys)),
        )


class CalendarInfoPayload(LiturgyApiBaseModel):
    name: str
    display_name: str
    description: str = ""
    commemoration_interpretation: str = ""


class LiturgicalUnitPayload(LiturgyApiBaseModel):
    desc: str
    rank: str = ""
    date: dt.date | None = None
    color: str | None = None


class DayDescriptionPayload(LiturgyApiBaseModel):
    date: dt.date
    day_in_season: str = ""
    day_rank: str = ""
    day: LiturgicalUnitPayload | None = None
    commemorations: list[LiturgicalUnitPayload] = Field(
        default_factory=list["LiturgicalUnitPayload"]
    )


class DayInfoPayload(LiturgyApiBaseModel):
    desc: DayDescriptionPayload


class SearchResultPayload(LiturgyApiBaseModel):
    name: str
    description: str = ""
    date: str | None = None
    rank: str = ""
    score: float
    color: str | None = None


class ApiEnvelope(LiturgyApiBaseModel):
    """Common ``{success, data, error}`` wrapper of every API response."""

    success: bool
    error: str | None = None


class CalendarListResponse(ApiEnvelope):
    data: list[CalendarInfoPayload] | None = None


class DayInfoResponse(ApiEnvelope):
    data: DayInfoPayload | None = None


class SearchResponse(ApiEnvelope):
    data: list[SearchResultPayload] | None = None
