"""Domain enums (pure, dependency-light)."""

from __future__ import annotations

from enum import IntEnum, StrEnum


class EntityType(StrEnum):
    """Discriminator used for attribute ownership and event payloads."""

    CUSTOMER = "customer"
    ADDRESS = "address"
    CUSTOMER_ROLE = "customer_role"
    AFFILIATE = "affiliate"
    COUNTRY = "country"
    STATE_PROVINCE = "state_province"
    MEDIA_ASSET = "media_asset"


class KeyField(StrEnum):
    """Columns eligible for identity matching, named as they appear in import files."""

    ID = "Id"
    CUSTOMER_GUID = "CustomerGuid"
    EMAIL = "Email"
    USERNAME = "Username"


class PasswordFormat(IntEnum):
    CLEAR = 0
    HASHED = 1
    ENCRYPTED = 2


class CustomerNumberMethod(StrEnum):
    DISABLED = "disabled"
    MANUALLY_SET = "manually_set"
    AUTOMATICALLY_SET = "automatically_set"


class RoleSystemName(StrEnum):
    ADMINISTRATORS = "Administrators"
    FORUM_MODERATORS = "ForumModerators"
    REGISTERED = "Registered"
    GUESTS = "Guests"


class AddressRole(StrEnum):
    """Column prefix of an address block in the import file."""

    BILL_TO = "BillTo"
    SHIP_TO = "ShipTo"


class CustomerAttribute(StrEnum):
    """Keys of auxiliary customer attributes; values double as import column names."""

    FIRST_NAME = "FirstName"
    LAST_NAME = "LastName"
    GENDER = "Gender"
    DATE_OF_BIRTH = "DateOfBirth"
    COMPANY = "Company"
    STREET_ADDRESS = "StreetAddress"
    STREET_ADDRESS2 = "StreetAddress2"
    ZIP_POSTAL_CODE = "ZipPostalCode"
    CITY = "City"
    COUNTRY_ID = "CountryId"
    STATE_PROVINCE_ID = "StateProvinceId"
    PHONE = "Phone"
    FAX = "Fax"
    TIME_ZONE_ID = "TimeZoneId"
    FORUM_POST_COUNT = "ForumPostCount"
    SIGNATURE = "Signature"
    CUSTOMER_NUMBER = "CustomerNumber"
    AVATAR_PICTURE_ID = "AvatarPictureId"


CUSTOMER_ATTRIBUTE_GROUP = "Customer"
