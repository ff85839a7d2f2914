"""Liturgical calendar API configuration values."""

from __future__ import annotations

from dataclasses import dataclass

from .env import require_env_vars
from .http_resilience import CacheConfig, RateLimit, ResilienceConfig, RetryPolicy, ShouldCacheHook

LITURGY_API_TIMEOUT_SECONDS = 10.0


@dataclass(frozen=True, slots=True)
class LiturgyApiConfig:
    """Holds liturgical calendar API configuration values."""

    base_url: str
    resilience: ResilienceConfig


def _normalise_base_url(value: str) -> str:
    # httpx joins relative paths onto the base URL only when it ends with a slash
    stripped = value.strip()
    return stripped if stripped.endswith("/") else f"{stripped}/"


def get_liturgy_api_config(
    *,
    resilience: ResilienceConfig | None = None,
    cache_predicate: ShouldCacheHook | None = None,
) -> LiturgyApiConfig:
    values = require_env_vars(("LITURGY_API_BASE_URL",))
    base_url = _normalise_base_url(values["LITURGY_API_BASE_URL"])
    return LiturgyApiConfig(
        base_url=base_url,
        resilience=resilience
        or ResilienceConfig(
            name="liturgy-api",
            base_url=base_url,
            timeout_seconds=LITURGY_API_TIMEOUT_SECONDS,
            retry=RetryPolicy(total=3),
            ratelimit=RateLimit(max_calls=20, per_seconds=1.0),
            cache=CacheConfig(should_cache=cache_predicate),
            default_headers={"Accept": "application/json"},
        ),
    )
