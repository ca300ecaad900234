"""Pydantic model of one customer import record, keyed by column name."""

from __future__ import annotations

from datetime import date, datetime  # noqa: TC003
from uuid import UUID  # noqa: TC003

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator

# secrets are taken verbatim; surrounding whitespace may be part of the value
_VERBATIM_FIELDS = frozenset({"password", "password_salt"})


def _blank_to_none(value: object, info: ValidationInfo) -> object:
    if isinstance(value, str):
        stripped = value.strip()
        if not stripped or stripped.upper() == "NULL":
            return None
        return value if info.field_name in _VERBATIM_FIELDS else stripped
    return value


class ImportRecordModel(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class CustomerRecord(ImportRecordModel):
    """Only fields present in the source end up in ``model_fields_set``."""

    id: int | None = Field(default=None, alias="Id")
    customer_guid: UUID | None = Field(default=None, alias="CustomerGuid")
    username: str | None = Field(default=None, alias="Username")
    email: str | None = Field(default=None, alias="Email")
    password: str | None = Field(default=None, alias="Password")
    password_format_id: int | None = Field(default=None, alias="PasswordFormatId")
    password_salt: str | None = Field(default=None, alias="PasswordSalt")
    admin_comment: str | None = Field(default=None, alias="AdminComment")
    is_tax_exempt: bool | None = Field(default=None, alias="IsTaxExempt")
    active: bool | None = Field(default=None, alias="Active")
    is_system_account: bool | None = Field(default=None, alias="IsSystemAccount")
    system_name: str | None = Field(default=None, alias="SystemName")
    last_ip_address: str | None = Field(default=None, alias="LastIpAddress")
    last_login_date_utc: datetime | None = Field(default=None, alias="LastLoginDateUtc")
    last_activity_date_utc: datetime | None = Field(default=None, alias="LastActivityDateUtc")
    created_on_utc: datetime | None = Field(default=None, alias="CreatedOnUtc")
    affiliate_id: int | None = Field(default=None, alias="AffiliateId")

    is_guest: bool | None = Field(default=None, alias="IsGuest")
    is_registered: bool | None = Field(default=None, alias="IsRegistered")
    is_forum_moderator: bool | None = Field(default=None, alias="IsForumModerator")
    is_administrator: bool | None = Field(default=None, alias="IsAdministrator")

    first_name: str | None = Field(default=None, alias="FirstName")
    last_name: str | None = Field(default=None, alias="LastName")
    gender: str | None = Field(default=None, alias="Gender")
    date_of_birth: date | None = Field(default=None, alias="DateOfBirth")
    company: str | None = Field(default=None, alias="Company")
    street_address: str | None = Field(default=None, alias="StreetAddress")
    street_address2: str | None = Field(default=None, alias="StreetAddress2")
    zip_postal_code: str | None = Field(default=None, alias="ZipPostalCode")
    city: str | None = Field(default=None, alias="City")
    country_id: int | None = Field(default=None, alias="CountryId")
    state_province_id: int | None = Field(default=None, alias="StateProvinceId")
    country_code: str | None = Field(default=None, alias="CountryCode")
    state_abbreviation: str | None = Field(default=None, alias="StateAbbreviation")
    phone: str | None = Field(default=None, alias="Phone")
    fax: str | None = Field(default=None, alias="Fax")
    time_zone_id: str | None = Field(default=None, alias="TimeZoneId")
    forum_post_count: int | None = Field(default=None, alias="ForumPostCount")
    signature: str | None = Field(default=None, alias="Signature")
    customer_number: str | None = Field(default=None, alias="CustomerNumber")
    avatar_picture_url: str | None = Field(default=None, alias="AvatarPictureUrl")

    bill_to_first_name: str | None = Field(default=None, alias="BillToFirstName")
    bill_to_last_name: str | None = Field(default=None, alias="BillToLastName")
    bill_to_email: str | None = Field(default=None, alias="BillToEmail")
    bill_to_company: str | None = Field(default=None, alias="BillToCompany")
    bill_to_country_code: str | None = Field(default=None, alias="BillToCountryCode")
    bill_to_state_abbreviation: str | None = Field(default=None, alias="BillToStateAbbreviation")
    bill_to_city: str | None = Field(default=None, alias="BillToCity")
    bill_to_address1: str | None = Field(default=None, alias="BillToAddress1")
    bill_to_address2: str | None = Field(default=None, alias="BillToAddress2")
    bill_to_zip_postal_code: str | None = Field(default=None, alias="BillToZipPostalCode")
    bill_to_phone_number: str | None = Field(default=None, alias="BillToPhoneNumber")
    bill_to_fax_number: str | None = Field(default=None, alias="BillToFaxNumber")

    ship_to_first_name: str | None = Field(default=None, alias="ShipToFirstName")
    ship_to_last_name: str | None = Field(default=None, alias="ShipToLastName")
    ship_to_email: str | None = Field(default=None, alias="ShipToEmail")
    ship_to_company: str | None = Field(default=None, alias="ShipToCompany")
    ship_to_country_code: str | None = Field(default=None, alias="ShipToCountryCode")
    ship_to_state_abbreviation: str | None = Field(default=None, alias="ShipToStateAbbreviation")
    ship_to_city: str | None = Field(default=None, alias="ShipToCity")
    ship_to_address1: str | None = Field(default=None, alias="ShipToAddress1")
    ship_to_address2: str | None = Field(default=None, alias="ShipToAddress2")
    ship_to_zip_postal_code: str | None = Field(default=None, alias="ShipToZipPostalCode")
    ship_to_phone_number: str | None = Field(default=None, alias="ShipToPhoneNumber")
    ship_to_fax_number: str | None = Field(default=None, alias="ShipToFaxNumber")

    _normalize_blanks = field_validator("*", mode="before")(_blank_to_none)

    def column_values(self) -> dict[str, object]:
        """Present columns only, keyed by their import column name."""
        return self.model_dump(by_alias=True, exclude_unset=True)


def known_columns() -> frozenset[str]:
    return frozenset(
        field.alias or name for name, field in CustomerRecord.model_fields.items()
    )
