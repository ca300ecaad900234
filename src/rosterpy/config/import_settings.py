"""Feature toggles consulted by the customer importer."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

from rosterpy.domain.model.enums import CustomerNumberMethod

from .env import env_flag, env_int
from .errors import ConfigurationError
from .storage import get_storage_config

DEFAULT_IMPORT_BATCH_SIZE = 100


@dataclass(frozen=True, slots=True)
class CustomerSettings:
    gender_enabled: bool = True
    date_of_birth_enabled: bool = True
    company_enabled: bool = True
    street_address_enabled: bool = False
    street_address2_enabled: bool = False
    zip_postal_code_enabled: bool = False
    city_enabled: bool = False
    country_enabled: bool = False
    state_province_enabled: bool = False
    phone_enabled: bool = False
    fax_enabled: bool = False
    customer_number_method: CustomerNumberMethod = CustomerNumberMethod.DISABLED
    allow_customers_to_upload_avatars: bool = False


@dataclass(frozen=True, slots=True)
class DateTimeSettings:
    allow_customers_to_set_time_zone: bool = False


@dataclass(frozen=True, slots=True)
class ForumSettings:
    forums_enabled: bool = True
    signatures_enabled: bool = True


@dataclass(frozen=True, slots=True)
class DataExchangeSettings:
    batch_size: int = DEFAULT_IMPORT_BATCH_SIZE
    image_download_folder: Path | None = None
    image_import_folder: Path | None = None


@dataclass(frozen=True, slots=True)
class ImportSettings:
    """All settings an import run reads; snapshotted once per run."""

    customers: CustomerSettings = field(default_factory=CustomerSettings)
    date_time: DateTimeSettings = field(default_factory=DateTimeSettings)
    forums: ForumSettings = field(default_factory=ForumSettings)
    data_exchange: DataExchangeSettings = field(default_factory=DataExchangeSettings)


def _customer_number_method() -> CustomerNumberMethod:
    raw = os.getenv("ROSTERPY_CUSTOMER_NUMBER_METHOD")
    if raw is None or not raw.strip():
        return CustomerNumberMethod.DISABLED
    try:
        return CustomerNumberMethod(raw.strip().lower())
    except ValueError as exc:
        allowed = ", ".join(method.value for method in CustomerNumberMethod)
        raise ConfigurationError(
            f"Invalid ROSTERPY_CUSTOMER_NUMBER_METHOD {raw!r} (expected one of: {allowed})"
        ) from exc


def _optional_path(name: str) -> Path | None:
    value = os.getenv(name)
    if value is None or not value.strip():
        return None
    return Path(value).expanduser()


def get_import_settings() -> ImportSettings:
    defaults = CustomerSettings()
    customers = CustomerSettings(
        gender_enabled=env_flag("ROSTERPY_GENDER_ENABLED", default=defaults.gender_enabled),
        date_of_birth_enabled=env_flag(
            "ROSTERPY_DATE_OF_BIRTH_ENABLED", default=defaults.date_of_birth_enabled
        ),
        company_enabled=env_flag("ROSTERPY_COMPANY_ENABLED", default=defaults.company_enabled),
        street_address_enabled=env_flag(
            "ROSTERPY_STREET_ADDRESS_ENABLED", default=defaults.street_address_enabled
        ),
        street_address2_enabled=env_flag(
            "ROSTERPY_STREET_ADDRESS2_ENABLED", default=defaults.street_address2_enabled
        ),
        zip_postal_code_enabled=env_flag(
            "ROSTERPY_ZIP_POSTAL_CODE_ENABLED", default=defaults.zip_postal_code_enabled
        ),
        city_enabled=env_flag("ROSTERPY_CITY_ENABLED", default=defaults.city_enabled),
        country_enabled=env_flag("ROSTERPY_COUNTRY_ENABLED", default=defaults.country_enabled),
        state_province_enabled=env_flag(
            "ROSTERPY_STATE_PROVINCE_ENABLED", default=defaults.state_province_enabled
        ),
        phone_enabled=env_flag("ROSTERPY_PHONE_ENABLED", default=defaults.phone_enabled),
        fax_enabled=env_flag("ROSTERPY_FAX_ENABLED", default=defaults.fax_enabled),
        customer_number_method=_customer_number_method(),
        allow_customers_to_upload_avatars=env_flag(
            "ROSTERPY_AVATAR_UPLOAD_ENABLED",
            default=defaults.allow_customers_to_upload_avatars,
        ),
    )
    storage = get_storage_config()
    return ImportSettings(
        customers=customers,
        date_time=DateTimeSettings(
            allow_customers_to_set_time_zone=env_flag(
                "ROSTERPY_TIME_ZONE_ENABLED", default=False
            )
        ),
        forums=ForumSettings(
            forums_enabled=env_flag("ROSTERPY_FORUMS_ENABLED", default=True),
            signatures_enabled=env_flag("ROSTERPY_SIGNATURES_ENABLED", default=True),
        ),
        data_exchange=DataExchangeSettings(
            batch_size=env_int(
                "ROSTERPY_IMPORT_BATCH_SIZE", default=DEFAULT_IMPORT_BATCH_SIZE, minimum=1
            ),
            image_download_folder=_optional_path("ROSTERPY_IMAGE_DOWNLOAD_FOLDER")
            or storage.download_dir(ensure=False),
            image_import_folder=_optional_path("ROSTERPY_IMAGE_IMPORT_FOLDER"),
        ),
    )
