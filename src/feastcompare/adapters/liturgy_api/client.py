"""HTTP client for the liturgical calendar API."""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING
from urllib.parse import quote

from pydantic import ValidationError

from feastcompare.adapters.http_resilience import ResilientClient

from .schema import (
    ApiEnvelope,
    CalendarListResponse,
    DayInfoResponse,
    SearchResponse,
)
from .translator import translate_calendar, translate_day, translate_search_result

if TYPE_CHECKING:
    from collections.abc import Callable
    from types import TracebackType

    from feastcompare.config.http_resilience import ResilienceConfig
    from feastcompare.config.liturgy_api import LiturgyApiConfig
    from feastcompare.domain.types import CalendarId, CalendarSystem, DayInfo, SearchMatch

log = getLogger(__name__)


class LiturgyApiError(RuntimeError):
    """Raised when the liturgical calendar API reports an error or returns an unexpected payload."""


def should_cache_payload(payload: object) -> bool:
    """Cache only successful API envelopes."""

    return isinstance(payload, dict) and payload.get("success") is True


def _calendar_path(calendar_id: CalendarId) -> str:
    return f"calendars/{quote(calendar_id, safe='')}"


def _unwrap[T](envelope: ApiEnvelope, data: T | None, *, what: str) -> T:
    if not envelope.success or data is None:
        raise LiturgyApiError(envelope.error or f"Failed to fetch {what}")
    return data


class LiturgyApiClient:
    """Async client implementing the day lookup, search and calendar catalog ports.

    Used as an async context manager it shares one HTTP client across calls;
    otherwise every call opens and closes its own.
    """

    def __init__(
        self,
        *,
        config: LiturgyApiConfig,
        client_factory: Callable[[ResilienceConfig], ResilientClient] | None = None,
    ) -> None:
        self._config = config
        self._resilience = config.resilience
        self._client_factory = client_factory or ResilientClient
        self._client: ResilientClient | None = None

    async def __aenter__(self) -> LiturgyApiClient:
        if self._client is None:
            self._client = self._client_factory(self._resilience)
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    async def list_calendars(self) -> list[CalendarSystem]:
        payload = await self._get_json("calendars")
        response = self._validate(CalendarListResponse, payload)
        calendars = _unwrap(response, response.data, what="calendars")
        return [translate_calendar(item) for item in calendars]

    async def get_day_info(
        self,
        calendar_id: CalendarId,
        year: int,
        month: int,
        day: int,
    ) -> DayInfo:
        payload = await self._get_json(f"{_calendar_path(calendar_id)}/day/{year}/{month}/{day}")
        response = self._validate(DayInfoResponse, payload)
        data = _unwrap(response, response.data, what="day info")
        return translate_day(data.desc, calendar_id=calendar_id)

    async def search(self, calendar_id: CalendarId, query: str) -> list[SearchMatch]:
        payload = await self._get_json(f"{_calendar_path(calendar_id)}/search", params={"q": query})
        response = self._validate(SearchResponse, payload)
        results = _unwrap(response, response.data, what="search results")
        return [translate_search_result(item) for item in results]

    async def _get_json(self, path: str, *, params: dict[str, str] | None = None) -> object:
        if self._resilience.base_url is None:
            raise LiturgyApiError("Missing liturgy API base_url in resilience configuration")
        if self._client is not None:
            response = await self._client.get(path, params=params)
        else:
            async with self._client_factory(self._resilience) as client:
                response = await client.get(path, params=params)
        response.raise_for_status()

        payload = response.json()
        if not isinstance(payload, dict):
            raise LiturgyApiError("Unexpected liturgy API response payload")
        return payload

    @staticmethod
    def _validate[M: ApiEnvelope](model: type[M], payload: object) -> M:
        try:
            return model.model_validate(payload)
        except ValidationError as exc:
            log.debug("Invalid %s payload: %s", model.__name__, payload)
            raise LiturgyApiError(f"Invalid liturgy API {model.__name__} payload") from exc
