"""Reconciliation defaults for cross-calendar comparisons."""

from __future__ import annotations

from dataclasses import dataclass

from .env import optional_positive_int
from .errors import ConfigurationError

DEFAULT_MATCH_THRESHOLD = 0.9
DEFAULT_SEARCH_CONCURRENCY = 1
DEFAULT_CALENDARS = ("of-us", "ef")


@dataclass(frozen=True, slots=True)
class ComparisonConfig:
    match_threshold: float = DEFAULT_MATCH_THRESHOLD
    search_concurrency: int = DEFAULT_SEARCH_CONCURRENCY

    def __post_init__(self) -> None:
        if not 0.0 <= self.match_threshold <= 1.0:
            raise ConfigurationError(
                f"match_threshold must be within [0, 1], got {self.match_threshold}"
            )
        if self.search_concurrency < 1:
            raise ConfigurationError(
                f"search_concurrency must be at least 1, got {self.search_concurrency}"
            )


def get_comparison_config() -> ComparisonConfig:
    return ComparisonConfig(
        search_concurrency=optional_positive_int(
            "FEASTCOMPARE_SEARCH_CONCURRENCY",
            default=DEFAULT_SEARCH_CONCURRENCY,
        ),
    )
