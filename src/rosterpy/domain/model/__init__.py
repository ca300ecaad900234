"""Public domain model surface."""

from __future__ import annotations

from rosterpy.domain.model.attributes import GenericAttribute
from rosterpy.domain.model.base import Entity, HasEntityType
from rosterpy.domain.model.customer import Address, Customer, CustomerRole, PostalKey
from rosterpy.domain.model.enums import (
    CUSTOMER_ATTRIBUTE_GROUP,
    AddressRole,
    CustomerAttribute,
    CustomerNumberMethod,
    EntityType,
    KeyField,
    PasswordFormat,
    RoleSystemName,
)
from rosterpy.domain.model.media import MediaAsset
from rosterpy.domain.model.reference import Affiliate, Country, StateProvince

__all__ = [  # noqa: RUF022
    # base
    "Entity",
    "HasEntityType",
    # customers
    "Customer",
    "Address",
    "CustomerRole",
    "PostalKey",
    # reference data
    "Affiliate",
    "Country",
    "StateProvince",
    # auxiliary stores
    "GenericAttribute",
    "MediaAsset",
    # enums
    "AddressRole",
    "CustomerAttribute",
    "CustomerNumberMethod",
    "EntityType",
    "KeyField",
    "PasswordFormat",
    "RoleSystemName",
    "CUSTOMER_ATTRIBUTE_GROUP",
]
