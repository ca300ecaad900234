from __future__ import annotations

from datetime import UTC, datetime, timedelta, timezone

import pytest

from rosterpy.domain.customer_import import CUSTOMER_FIELD_MAPPINGS, FieldMapping
from rosterpy.domain.customer_import.field_mapping import (
    to_bool,
    to_datetime,
    to_password_format,
    to_str,
)
from rosterpy.domain.model import Customer, PasswordFormat
from tests.helpers.customers import make_context, make_row


def _mapping(column: str) -> FieldMapping:
    return next(mapping for mapping in CUSTOMER_FIELD_MAPPINGS if mapping.column == column)


def test_to_bool_accepts_common_spellings() -> None:
    assert to_bool("Yes") is True
    assert to_bool("0") is False
    assert to_bool(1) is True
    with pytest.raises(ValueError, match="Not a boolean"):
        to_bool("maybe")


def test_to_datetime_normalises_to_utc() -> None:
    naive = to_datetime("2024-03-01T10:00:00")
    offset = to_datetime(datetime(2024, 3, 1, 12, tzinfo=timezone(timedelta(hours=2))))

    assert naive == datetime(2024, 3, 1, 10, tzinfo=UTC)
    assert offset == datetime(2024, 3, 1, 10, tzinfo=UTC)


def test_to_password_format_accepts_names_and_numbers() -> None:
    assert to_password_format("hashed") is PasswordFormat.HASHED
    assert to_password_format(2) is PasswordFormat.ENCRYPTED
    assert to_password_format("0") is PasswordFormat.CLEAR


def test_present_value_is_converted_and_applied() -> None:
    customer = Customer(id=1)
    row = make_row(Active="true")
    row.initialize(customer, None)

    touched = _mapping("Active").apply(row, customer, make_context())

    assert touched
    assert customer.active is True


def test_present_null_resets_to_reset_value() -> None:
    customer = Customer(id=1, is_tax_exempt=True, admin_comment="vip")
    row = make_row(IsTaxExempt=None, AdminComment="NULL")
    row.initialize(customer, None)
    context = make_context()

    _mapping("IsTaxExempt").apply(row, customer, context)
    _mapping("AdminComment").apply(row, customer, context)

    assert customer.is_tax_exempt is False
    assert customer.admin_comment is None


def test_absent_column_leaves_existing_customer_untouched() -> None:
    created = datetime(2020, 1, 1, tzinfo=UTC)
    customer = Customer(id=1, created_on_utc=created)
    row = make_row(Email="ann@example.com")
    row.initialize(customer, None)

    touched = _mapping("CreatedOnUtc").apply(row, customer, make_context())

    assert not touched
    assert customer.created_on_utc == created


def test_absent_column_gets_default_for_new_customer() -> None:
    customer = Customer()
    row = make_row(Email="ann@example.com")
    row.initialize(customer, None)
    context = make_context()
    original_guid = customer.customer_guid

    for mapping in CUSTOMER_FIELD_MAPPINGS:
        mapping.apply(row, customer, context)

    assert customer.created_on_utc == context.utc_now
    assert customer.last_activity_date_utc == context.utc_now
    assert customer.customer_guid != original_guid
    assert customer.last_login_date_utc is None


def test_blank_guid_keeps_stored_guid_and_fills_new_one() -> None:
    stored = Customer(id=1)
    stored_guid = stored.customer_guid
    existing_row = make_row(Email="ann@example.com", CustomerGuid="")
    existing_row.initialize(stored, None)
    fresh = Customer()
    new_row = make_row(Email="bob@example.com", CustomerGuid=None)
    new_row.initialize(fresh, None)
    fresh_guid = fresh.customer_guid
    context = make_context()

    assert not _mapping("CustomerGuid").apply(existing_row, stored, context)
    assert _mapping("CustomerGuid").apply(new_row, fresh, context)

    assert stored.customer_guid == stored_guid
    assert fresh.customer_guid != fresh_guid


def test_password_columns_are_gated_for_current_customer() -> None:
    customer = Customer(id=1, password="old")
    row = make_row(Email="admin@example.com", Password="new", PasswordFormatId=1)
    row.initialize(customer, None)
    context = make_context(current_customer_email="ADMIN@example.com")

    assert not _mapping("Password").apply(row, customer, context)
    assert not _mapping("PasswordFormatId").apply(row, customer, context)
    assert customer.password == "old"
    assert customer.password_format is PasswordFormat.CLEAR


def test_unconvertible_value_raises() -> None:
    customer = Customer(id=1)
    row = make_row(CustomerGuid="not-a-guid")
    row.initialize(customer, None)

    with pytest.raises(ValueError):  # noqa: PT011
        _mapping("CustomerGuid").apply(row, customer, make_context())


def test_to_str_passes_strings_through() -> None:
    assert to_str("ann") == "ann"
    assert to_str(42) == "42"
