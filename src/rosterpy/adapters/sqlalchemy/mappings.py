"""SQLAlchemy mapping metadata for the rosterpy domain model."""

from __future__ import annotations

import logging
import uuid
from datetime import UTC, datetime
from functools import cache
from typing import TYPE_CHECKING

from sqlalchemy import (
    Boolean,
    Column,
    DateTime,
    Dialect,
    Enum,
    ForeignKey,
    Index,
    Integer,
    LargeBinary,
    String,
    Table,
    Text,
    TypeDecorator,
    UniqueConstraint,
    Uuid,
    orm,
)
from sqlalchemy.orm import configure_mappers, relationship

from rosterpy.domain.model import (
    Address,
    Affiliate,
    Country,
    Customer,
    CustomerRole,
    GenericAttribute,
    MediaAsset,
    PasswordFormat,
    StateProvince,
)

if TYPE_CHECKING:
    from sqlalchemy.engine import Engine

log = logging.getLogger(__name__)

UUIDColumnType = Uuid[uuid.UUID]


class UTCDateTime(TypeDecorator[datetime]):
    impl = DateTime(timezone=True)
    cache_ok = True

    def process_bind_param(self, value: datetime | None, dialect: Dialect) -> datetime | None:
        _ = dialect
        if value is None:
            return None
        if value.tzinfo is None:
            value = value.replace(tzinfo=UTC)
        return value.astimezone(UTC)

    def process_result_value(self, value: datetime | None, dialect: Dialect) -> datetime | None:
        _ = dialect
        if value is None:
            return None
        return value if value.tzinfo else value.replace(tzinfo=UTC)


mapper_registry = orm.registry()
mapper_registry.metadata.naming_convention = {
    "ix": "ix_%(column_0_label)s",
    "uq": "uq_%(table_name)s_%(column_0_label)s",
    "ck": "ck_%(table_name)s_%(constraint_name)s",
    "fk": "fk_%(table_name)s_%(column_0_label)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s",
}

# Reference tables ------------------------------------------------------------

country_table = Table(
    "country",
    mapper_registry.metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("name", String, nullable=False),
    Column("two_letter_iso_code", String(2), nullable=True),
    Column("three_letter_iso_code", String(3), nullable=True),
    Column("published", Boolean, nullable=False, default=True),
)

state_province_table = Table(
    "state_province",
    mapper_registry.metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column(
        "country_id", Integer, ForeignKey("country.id", ondelete="CASCADE"), nullable=False
    ),
    Column("name", String, nullable=False),
    Column("abbreviation", String, nullable=True),
    Column("published", Boolean, nullable=False, default=True),
)

affiliate_table = Table(
    "affiliate",
    mapper_registry.metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("active", Boolean, nullable=False, default=True),
    Column("deleted", Boolean, nullable=False, default=False),
)

customer_role_table = Table(
    "customer_role",
    mapper_registry.metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("name", String, nullable=False),
    Column("system_name", String, nullable=True, unique=True),
    Column("active", Boolean, nullable=False, default=True),
    Column("is_system_role", Boolean, nullable=False, default=False),
)

# Customer tables -------------------------------------------------------------

address_table = Table(
    "address",
    mapper_registry.metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("first_name", String, nullable=True),
    Column("last_name", String, nullable=True),
    Column("email", String, nullable=True),
    Column("company", String, nullable=True),
    Column("country_id", Integer, ForeignKey("country.id", ondelete="SET NULL"), nullable=True),
    Column(
        "state_province_id",
        Integer,
        ForeignKey("state_province.id", ondelete="SET NULL"),
        nullable=True,
    ),
    Column("city", String, nullable=True),
    Column("address1", String, nullable=True),
    Column("address2", String, nullable=True),
    Column("zip_postal_code", String, nullable=True),
    Column("phone_number", String, nullable=True),
    Column("fax_number", String, nullable=True),
    Column("created_on_utc", UTCDateTime(), nullable=True),
)

customer_table = Table(
    "customer",
    mapper_registry.metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("customer_guid", UUIDColumnType, nullable=False, unique=True),
    Column("username", String, nullable=True),
    Column("email", String, nullable=True),
    Column("password", String, nullable=True),
    Column("password_format", Enum(PasswordFormat, native_enum=False), nullable=False),
    Column("password_salt", String, nullable=True),
    Column("admin_comment", Text, nullable=True),
    Column("is_tax_exempt", Boolean, nullable=False, default=False),
    Column("affiliate_id", Integer, nullable=False, default=0),
    Column("active", Boolean, nullable=False, default=False),
    Column("is_system_account", Boolean, nullable=False, default=False),
    Column("system_name", String, nullable=True),
    Column("last_ip_address", String, nullable=True),
    Column("created_on_utc", UTCDateTime(), nullable=True),
    Column("last_login_date_utc", UTCDateTime(), nullable=True),
    Column("last_activity_date_utc", UTCDateTime(), nullable=True),
    Column(
        "billing_address_id",
        Integer,
        ForeignKey("address.id", ondelete="SET NULL"),
        key="_billing_address_id",
        nullable=True,
    ),
    Column(
        "shipping_address_id",
        Integer,
        ForeignKey("address.id", ondelete="SET NULL"),
        key="_shipping_address_id",
        nullable=True,
    ),
    Index("ix_customer_email", "email"),
    Index("ix_customer_username", "username"),
)

customer_address_table = Table(
    "customer_address",
    mapper_registry.metadata,
    Column(
        "customer_id", Integer, ForeignKey("customer.id", ondelete="CASCADE"), primary_key=True
    ),
    Column(
        "address_id", Integer, ForeignKey("address.id", ondelete="CASCADE"), primary_key=True
    ),
)

customer_role_mapping_table = Table(
    "customer_role_mapping",
    mapper_registry.metadata,
    Column(
        "customer_id", Integer, ForeignKey("customer.id", ondelete="CASCADE"), primary_key=True
    ),
    Column(
        "customer_role_id",
        Integer,
        ForeignKey("customer_role.id", ondelete="CASCADE"),
        primary_key=True,
    ),
)

# Auxiliary stores ------------------------------------------------------------

generic_attribute_table = Table(
    "generic_attribute",
    mapper_registry.metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("entity_id", Integer, nullable=False),
    Column("key_group", String, nullable=False),
    Column("key", String, nullable=False),
    Column("value", Text, nullable=False),
    UniqueConstraint(
        "entity_id", "key_group", "key", name="uq_generic_attribute_entity_group_key"
    ),
    Index("ix_generic_attribute_key_group_key", "key_group", "key"),
)

media_asset_table = Table(
    "media_asset",
    mapper_registry.metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("binary", LargeBinary, nullable=False),
    Column("mime_type", String, nullable=False),
    Column("seo_filename", String, nullable=True),
    Column("digest", String(64), nullable=False),
    Index("ix_media_asset_digest", "digest"),
)


@cache
def start_mappers() -> orm.registry:
    """Map domain dataclasses to tables (idempotent)."""

    mapper_registry.map_imperatively(Country, country_table)
    mapper_registry.map_imperatively(StateProvince, state_province_table)
    mapper_registry.map_imperatively(Affiliate, affiliate_table)
    mapper_registry.map_imperatively(CustomerRole, customer_role_table)
    mapper_registry.map_imperatively(Address, address_table)

    mapper_registry.map_imperatively(
        Customer,
        customer_table,
        properties={
            "_addresses": relationship(
                Address,
                secondary=customer_address_table,
                cascade="save-update, merge",
                order_by=address_table.c.id,
            ),
            "_roles": relationship(
                CustomerRole,
                secondary=customer_role_mapping_table,
                order_by=customer_role_table.c.id,
            ),
            "billing_address": relationship(
                Address,
                foreign_keys=[customer_table.c._billing_address_id],  # noqa: SLF001
            ),
            "shipping_address": relationship(
                Address,
                foreign_keys=[customer_table.c._shipping_address_id],  # noqa: SLF001
            ),
        },
    )

    mapper_registry.map_imperatively(GenericAttribute, generic_attribute_table)
    mapper_registry.map_imperatively(MediaAsset, media_asset_table)

    configure_mappers()
    return mapper_registry


def create_all_tables(engine: Engine) -> None:
    """Create database tables for the mapped metadata."""

    log.info("Creating all tables")
    mapper_registry.metadata.create_all(engine)
