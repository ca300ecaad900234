"""Application configuration helpers."""

from __future__ import annotations

from .download import DownloadConfig, get_download_config
from .env import env_flag, env_int, load_environment, require_env_var, require_env_vars
from .errors import ConfigurationError, MissingConfigurationError
from .http_resilience import CacheConfig, RateLimit, ResilienceConfig, RetryPolicy
from .import_settings import (
    CustomerSettings,
    DataExchangeSettings,
    DateTimeSettings,
    ForumSettings,
    ImportSettings,
    get_import_settings,
)
from .logging import configure_logging
from .storage import DatabaseConfig, StorageConfig, get_database_config, get_storage_config

__all__ = [
    "CacheConfig",
    "ConfigurationError",
    "CustomerSettings",
    "DataExchangeSettings",
    "DatabaseConfig",
    "DateTimeSettings",
    "DownloadConfig",
    "ForumSettings",
    "ImportSettings",
    "MissingConfigurationError",
    "RateLimit",
    "ResilienceConfig",
    "RetryPolicy",
    "StorageConfig",
    "configure_logging",
    "env_flag",
    "env_int",
    "get_database_config",
    "get_download_config",
    "get_import_settings",
    "get_storage_config",
    "load_environment",
    "require_env_var",
    "require_env_vars",
]
