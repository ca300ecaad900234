"""initial customer schema

Revision ID: 0001_initial_schema
Revises:
Create Date: 2026-10-19 09:00:00.000000
"""

from __future__ import annotations

import sqlalchemy as sa
from alembic import op

from rosterpy.adapters.sqlalchemy.mappings import UTCDateTime

revision = "0001_initial_schema"
down_revision = None
branch_labels = None
depends_on = None

_PASSWORD_FORMAT = sa.Enum(
    "CLEAR", "HASHED", "ENCRYPTED", name="passwordformat", native_enum=False
)


def upgrade() -> None:
    op.create_table(
        "country",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("name", sa.String(), nullable=False),
        sa.Column("two_letter_iso_code", sa.String(length=2), nullable=True),
        sa.Column("three_letter_iso_code", sa.String(length=3), nullable=True),
        sa.Column("published", sa.Boolean(), nullable=False),
        sa.PrimaryKeyConstraint("id", name=op.f("pk_country")),
    )
    op.create_table(
        "state_province",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("country_id", sa.Integer(), nullable=False),
        sa.Column("name", sa.String(), nullable=False),
        sa.Column("abbreviation", sa.String(), nullable=True),
        sa.Column("published", sa.Boolean(), nullable=False),
        sa.ForeignKeyConstraint(
            ["country_id"],
            ["country.id"],
            name=op.f("fk_state_province_country_id_country"),
            ondelete="CASCADE",
        ),
        sa.PrimaryKeyConstraint("id", name=op.f("pk_state_province")),
    )
    op.create_table(
        "affiliate",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("active", sa.Boolean(), nullable=False),
        sa.Column("deleted", sa.Boolean(), nullable=False),
        sa.PrimaryKeyConstraint("id", name=op.f("pk_affiliate")),
    )
    op.create_table(
        "customer_role",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("name", sa.String(), nullable=False),
        sa.Column("system_name", sa.String(), nullable=True),
        sa.Column("active", sa.Boolean(), nullable=False),
        sa.Column("is_system_role", sa.Boolean(), nullable=False),
        sa.PrimaryKeyConstraint("id", name=op.f("pk_customer_role")),
        sa.UniqueConstraint("system_name", name=op.f("uq_customer_role_system_name")),
    )
    op.create_table(
        "address",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("first_name", sa.String(), nullable=True),
        sa.Column("last_name", sa.String(), nullable=True),
        sa.Column("email", sa.String(), nullable=True),
        sa.Column("company", sa.String(), nullable=True),
        sa.Column("country_id", sa.Integer(), nullable=True),
        sa.Column("state_province_id", sa.Integer(), nullable=True),
        sa.Column("city", sa.String(), nullable=True),
        sa.Column("address1", sa.String(), nullable=True),
        sa.Column("address2", sa.String(), nullable=True),
        sa.Column("zip_postal_code", sa.String(), nullable=True),
        sa.Column("phone_number", sa.String(), nullable=True),
        sa.Column("fax_number", sa.String(), nullable=True),
        sa.Column("created_on_utc", UTCDateTime(), nullable=True),
        sa.ForeignKeyConstraint(
            ["country_id"],
            ["country.id"],
            name=op.f("fk_address_country_id_country"),
            ondelete="SET NULL",
        ),
        sa.ForeignKeyConstraint(
            ["state_province_id"],
            ["state_province.id"],
            name=op.f("fk_address_state_province_id_state_province"),
            ondelete="SET NULL",
        ),
        sa.PrimaryKeyConstraint("id", name=op.f("pk_address")),
    )
    op.create_table(
        "customer",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("customer_guid", sa.Uuid(), nullable=False),
        sa.Column("username", sa.String(), nullable=True),
        sa.Column("email", sa.String(), nullable=True),
        sa.Column("password", sa.String(), nullable=True),
        sa.Column("password_format", _PASSWORD_FORMAT, nullable=False),
        sa.Column("password_salt", sa.String(), nullable=True),
        sa.Column("admin_comment", sa.Text(), nullable=True),
        sa.Column("is_tax_exempt", sa.Boolean(), nullable=False),
        sa.Column("affiliate_id", sa.Integer(), nullable=False),
        sa.Column("active", sa.Boolean(), nullable=False),
        sa.Column("is_system_account", sa.Boolean(), nullable=False),
        sa.Column("system_name", sa.String(), nullable=True),
        sa.Column("last_ip_address", sa.String(), nullable=True),
        sa.Column("created_on_utc", UTCDateTime(), nullable=True),
        sa.Column("last_login_date_utc", UTCDateTime(), nullable=True),
        sa.Column("last_activity_date_utc", UTCDateTime(), nullable=True),
        sa.Column("billing_address_id", sa.Integer(), nullable=True),
        sa.Column("shipping_address_id", sa.Integer(), nullable=True),
        sa.ForeignKeyConstraint(
            ["billing_address_id"],
            ["address.id"],
            name=op.f("fk_customer_billing_address_id_address"),
            ondelete="SET NULL",
        ),
        sa.ForeignKeyConstraint(
            ["shipping_address_id"],
            ["address.id"],
            name=op.f("fk_customer_shipping_address_id_address"),
            ondelete="SET NULL",
        ),
        sa.PrimaryKeyConstraint("id", name=op.f("pk_customer")),
        sa.UniqueConstraint("customer_guid", name=op.f("uq_customer_customer_guid")),
    )
    op.create_index("ix_customer_email", "customer", ["email"], unique=False)
    op.create_index("ix_customer_username", "customer", ["username"], unique=False)
    op.create_table(
        "customer_address",
        sa.Column("customer_id", sa.Integer(), nullable=False),
        sa.Column("address_id", sa.Integer(), nullable=False),
        sa.ForeignKeyConstraint(
            ["address_id"],
            ["address.id"],
            name=op.f("fk_customer_address_address_id_address"),
            ondelete="CASCADE",
        ),
        sa.ForeignKeyConstraint(
            ["customer_id"],
            ["customer.id"],
            name=op.f("fk_customer_address_customer_id_customer"),
            ondelete="CASCADE",
        ),
        sa.PrimaryKeyConstraint("customer_id", "address_id", name=op.f("pk_customer_address")),
    )
    op.create_table(
        "customer_role_mapping",
        sa.Column("customer_id", sa.Integer(), nullable=False),
        sa.Column("customer_role_id", sa.Integer(), nullable=False),
        sa.ForeignKeyConstraint(
            ["customer_id"],
            ["customer.id"],
            name=op.f("fk_customer_role_mapping_customer_id_customer"),
            ondelete="CASCADE",
        ),
        sa.ForeignKeyConstraint(
            ["customer_role_id"],
            ["customer_role.id"],
            name=op.f("fk_customer_role_mapping_customer_role_id_customer_role"),
            ondelete="CASCADE",
        ),
        sa.PrimaryKeyConstraint(
            "customer_id", "customer_role_id", name=op.f("pk_customer_role_mapping")
        ),
    )
    op.create_table(
        "generic_attribute",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("entity_id", sa.Integer(), nullable=False),
        sa.Column("key_group", sa.String(), nullable=False),
        sa.Column("key", sa.String(), nullable=False),
        sa.Column("value", sa.Text(), nullable=False),
        sa.PrimaryKeyConstraint("id", name=op.f("pk_generic_attribute")),
        sa.UniqueConstraint(
            "entity_id", "key_group", "key", name="uq_generic_attribute_entity_group_key"
        ),
    )
    op.create_index(
        "ix_generic_attribute_key_group_key",
        "generic_attribute",
        ["key_group", "key"],
        unique=False,
    )
    op.create_table(
        "media_asset",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("binary", sa.LargeBinary(), nullable=False),
        sa.Column("mime_type", sa.String(), nullable=False),
        sa.Column("seo_filename", sa.String(), nullable=True),
        sa.Column("digest", sa.String(length=64), nullable=False),
        sa.PrimaryKeyConstraint("id", name=op.f("pk_media_asset")),
    )
    op.create_index("ix_media_asset_digest", "media_asset", ["digest"], unique=False)


def downgrade() -> None:
    op.drop_index("ix_media_asset_digest", table_name="media_asset")
    op.drop_table("media_asset")
    op.drop_index("ix_generic_attribute_key_group_key", table_name="generic_attribute")
    op.drop_table("generic_attribute")
    op.drop_table("customer_role_mapping")
    op.drop_table("customer_address")
    op.drop_index("ix_customer_username", table_name="customer")
    op.drop_index("ix_customer_email", table_name="customer")
    op.drop_table("customer")
    op.drop_table("address")
    op.drop_table("customer_role")
    op.drop_table("affiliate")
    op.drop_table("state_province")
    op.drop_table("country")
