"""Application configuration helpers."""

from __future__ import annotations

from .comparison import (
    DEFAULT_CALENDARS,
    DEFAULT_MATCH_THRESHOLD,
    ComparisonConfig,
    get_comparison_config,
)
from .env import optional_positive_int, require_env_var, require_env_vars
from .errors import ConfigurationError, MissingConfigurationError
from .http_resilience import CacheConfig, RateLimit, ResilienceConfig, RetryPolicy
from .liturgy_api import LiturgyApiConfig, get_liturgy_api_config
from .logging import configure_logging

__all__ = [
    "DEFAULT_CALENDARS",
    "DEFAULT_MATCH_THRESHOLD",
    "CacheConfig",
    "ComparisonConfig",
    "ConfigurationError",
    "LiturgyApiConfig",
    "MissingConfigurationError",
    "RateLimit",
    "ResilienceConfig",
    "RetryPolicy",
    "configure_logging",
    "get_comparison_config",
    "get_liturgy_api_config",
    "optional_positive_int",
    "require_env_var",
    "require_env_vars",
]
