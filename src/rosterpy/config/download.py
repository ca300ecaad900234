"""Download service configuration values."""

from __future__ import annotations

import os
from dataclasses import dataclass

from .env import env_int
from .errors import ConfigurationError
from .http_resilience import CacheConfig, RateLimit, ResilienceConfig, RetryPolicy

DOWNLOAD_TIMEOUT_SECONDS = 20.0
DEFAULT_MAX_CONCURRENT_DOWNLOADS = 4
DOWNLOAD_USER_AGENT = "rosterpy-importer"
_CACHE_CHOICES = ("memory", "sqlite", "off")


@dataclass(frozen=True, slots=True)
class DownloadConfig:
    resilience: ResilienceConfig
    max_concurrent: int = DEFAULT_MAX_CONCURRENT_DOWNLOADS


def _download_cache() -> CacheConfig | None:
    """``ROSTERPY_DOWNLOAD_CACHE``: memory (default), sqlite (on disk) or off."""
    raw = (os.getenv("ROSTERPY_DOWNLOAD_CACHE") or "memory").strip().lower()
    if raw not in _CACHE_CHOICES:
        allowed = ", ".join(_CACHE_CHOICES)
        raise ConfigurationError(
            f"Invalid ROSTERPY_DOWNLOAD_CACHE {raw!r} (expected one of: {allowed})"
        )
    if raw == "off":
        return None
    if raw == "sqlite":
        return CacheConfig(backend="sqlite")
    return CacheConfig(backend="memory")


def get_download_config(*, resilience: ResilienceConfig | None = None) -> DownloadConfig:
    timeout = env_int("ROSTERPY_DOWNLOAD_TIMEOUT", default=int(DOWNLOAD_TIMEOUT_SECONDS), minimum=1)
    return DownloadConfig(
        resilience=resilience
        or ResilienceConfig(
            name="downloads",
            timeout_seconds=float(timeout),
            retry=RetryPolicy(total=2),
            ratelimit=RateLimit(max_calls=8, per_seconds=1.0),
            cache=_download_cache(),
            default_headers={"User-Agent": DOWNLOAD_USER_AGENT},
            follow_redirects=True,
        ),
        max_concurrent=env_int(
            "ROSTERPY_DOWNLOAD_CONCURRENCY", default=DEFAULT_MAX_CONCURRENT_DOWNLOADS, minimum=1
        ),
    )
