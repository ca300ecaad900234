from __future__ import annotations

from pathlib import Path

import pytest

from rosterpy.config import (
    ConfigurationError,
    get_database_config,
    get_download_config,
    get_import_settings,
    get_storage_config,
)
from rosterpy.config.import_settings import DEFAULT_IMPORT_BATCH_SIZE
from rosterpy.domain.model import CustomerNumberMethod

_IMPORT_VARIABLES = (
    "ROSTERPY_GENDER_ENABLED",
    "ROSTERPY_CITY_ENABLED",
    "ROSTERPY_CUSTOMER_NUMBER_METHOD",
    "ROSTERPY_AVATAR_UPLOAD_ENABLED",
    "ROSTERPY_TIME_ZONE_ENABLED",
    "ROSTERPY_SIGNATURES_ENABLED",
    "ROSTERPY_IMPORT_BATCH_SIZE",
    "ROSTERPY_IMAGE_DOWNLOAD_FOLDER",
    "ROSTERPY_IMAGE_IMPORT_FOLDER",
    "ROSTERPY_DOWNLOAD_CACHE",
    "ROSTERPY_DOWNLOAD_CONCURRENCY",
    "ROSTERPY_DOWNLOAD_TIMEOUT",
)


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    for name in _IMPORT_VARIABLES:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("ROSTERPY_DATA_DIR", str(tmp_path / "data"))


def test_defaults_follow_store_settings(tmp_path: Path) -> None:
    settings = get_import_settings()

    assert settings.customers.gender_enabled
    assert not settings.customers.city_enabled
    assert settings.customers.customer_number_method is CustomerNumberMethod.DISABLED
    assert not settings.customers.allow_customers_to_upload_avatars
    assert settings.forums.signatures_enabled
    assert settings.data_exchange.batch_size == DEFAULT_IMPORT_BATCH_SIZE
    expected_downloads = (tmp_path / "data" / "downloads").resolve()
    assert settings.data_exchange.image_download_folder == expected_downloads
    assert settings.data_exchange.image_import_folder is None


def test_environment_overrides_toggles(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.setenv("ROSTERPY_CITY_ENABLED", "yes")
    monkeypatch.setenv("ROSTERPY_GENDER_ENABLED", "0")
    monkeypatch.setenv("ROSTERPY_CUSTOMER_NUMBER_METHOD", "Automatically_Set")
    monkeypatch.setenv("ROSTERPY_TIME_ZONE_ENABLED", "true")
    monkeypatch.setenv("ROSTERPY_IMPORT_BATCH_SIZE", "25")
    monkeypatch.setenv("ROSTERPY_IMAGE_IMPORT_FOLDER", str(tmp_path / "images"))

    settings = get_import_settings()

    assert settings.customers.city_enabled
    assert not settings.customers.gender_enabled
    assert settings.customers.customer_number_method is CustomerNumberMethod.AUTOMATICALLY_SET
    assert settings.date_time.allow_customers_to_set_time_zone
    assert settings.data_exchange.batch_size == 25
    assert settings.data_exchange.image_import_folder == tmp_path / "images"


def test_invalid_customer_number_method_is_rejected(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("ROSTERPY_CUSTOMER_NUMBER_METHOD", "random")

    with pytest.raises(ConfigurationError, match="ROSTERPY_CUSTOMER_NUMBER_METHOD"):
        get_import_settings()


def test_batch_size_must_be_positive(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("ROSTERPY_IMPORT_BATCH_SIZE", "0")

    with pytest.raises(ConfigurationError):
        get_import_settings()


def test_database_uri_prefers_environment(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.setenv("DATABASE_URI", "sqlite+pysqlite:///:memory:")
    assert get_database_config().uri == "sqlite+pysqlite:///:memory:"

    monkeypatch.delenv("DATABASE_URI")
    uri = get_database_config().uri
    assert uri.startswith("sqlite+pysqlite:///")
    assert uri.endswith("rosterpy.db")
    assert Path(uri.removeprefix("sqlite+pysqlite:///")).parent == (tmp_path / "data").resolve()


def test_storage_paths_live_under_data_dir(tmp_path: Path) -> None:
    storage = get_storage_config()

    assert storage.http_cache_path(ensure=False).name == "http_cache.db"
    assert storage.download_dir(ensure=True).is_dir()
    assert storage.download_dir(ensure=False).parent == (tmp_path / "data").resolve()


def test_download_config_reads_concurrency(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("ROSTERPY_DOWNLOAD_CONCURRENCY", "3")

    config = get_download_config()

    assert config.max_concurrent == 3
    assert config.resilience.follow_redirects
    assert config.resilience.default_headers is not None


def test_download_cache_backend_is_selectable(monkeypatch: pytest.MonkeyPatch) -> None:
    cache = get_download_config().resilience.cache
    assert cache is not None
    assert cache.backend == "memory"

    monkeypatch.setenv("ROSTERPY_DOWNLOAD_CACHE", "SQLite")
    cache = get_download_config().resilience.cache
    assert cache is not None
    assert cache.backend == "sqlite"

    monkeypatch.setenv("ROSTERPY_DOWNLOAD_CACHE", "off")
    assert get_download_config().resilience.cache is None

    monkeypatch.setenv("ROSTERPY_DOWNLOAD_CACHE", "redis")
    with pytest.raises(ConfigurationError, match="ROSTERPY_DOWNLOAD_CACHE"):
        get_download_config()
