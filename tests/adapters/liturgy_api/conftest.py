from __future__ import annotations

from typing import TYPE_CHECKING

import httpx
import pytest

from feastcompare.adapters.http_resilience import ResilientClient
from feastcompare.adapters.liturgy_api import LiturgyApiClient
from feastcompare.config.http_resilience import ResilienceConfig
from feastcompare.config.liturgy_api import LiturgyApiConfig

if TYPE_CHECKING:
    from collections.abc import Callable

BASE_URL = "http://liturgy.test/api/"

type Handler = Callable[[httpx.Request], httpx.Response]


@pytest.fixture
def make_api_client() -> Callable[[Handler], LiturgyApiClient]:
    def build(handler: Handler) -> LiturgyApiClient:
        async def async_handler(request: httpx.Request) -> httpx.Response:
            return handler(request)

        def factory(resilience: ResilienceConfig) -> ResilientClient:
            client = ResilientClient(resilience)
            client._client = httpx.AsyncClient(  # noqa: SLF001  # type: ignore[reportPrivateUsage]
                base_url=BASE_URL,
                transport=httpx.MockTransport(async_handler),
            )
            return client

        resilience = ResilienceConfig(name="liturgy-api-test", base_url=BASE_URL, cache=None)
        config = LiturgyApiConfig(base_url=BASE_URL, resilience=resilience)
        return LiturgyApiClient(config=config, client_factory=factory)

    return build
