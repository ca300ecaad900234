"""Identity resolution: map an import row onto at most one stored customer."""

from __future__ import annotations

from typing import TYPE_CHECKING

from rosterpy.domain.model import KeyField

if TYPE_CHECKING:
    from collections.abc import Iterable

    from rosterpy.domain.customer_import.row import ImportRow
    from rosterpy.domain.model import Customer
    from rosterpy.domain.ports import CustomerRepository


SUPPORTED_KEY_FIELDS: tuple[KeyField, ...] = (
    KeyField.ID,
    KeyField.CUSTOMER_GUID,
    KeyField.EMAIL,
    KeyField.USERNAME,
)
DEFAULT_KEY_FIELDS: tuple[KeyField, ...] = (KeyField.EMAIL,)


def normalize_key_fields(names: Iterable[str | KeyField]) -> tuple[KeyField, ...]:
    """Validate configured key field names, keeping their order and dropping repeats."""

    resolved: list[KeyField] = []
    for name in names:
        try:
            key_field = KeyField(name)
        except ValueError as exc:
            supported = ", ".join(field.value for field in SUPPORTED_KEY_FIELDS)
            raise ValueError(f"Unsupported key field {name!r} (supported: {supported})") from exc
        if key_field not in resolved:
            resolved.append(key_field)
    return tuple(resolved) or DEFAULT_KEY_FIELDS


def find_existing_customer(
    row: ImportRow,
    key_fields: Iterable[KeyField],
    customers: CustomerRepository,
) -> Customer | None:
    """Try each key field in order; the first non-empty key that matches wins."""

    for key_field in key_fields:
        match = _lookup(row, key_field, customers)
        if match is not None:
            return match
    return None


def _lookup(row: ImportRow, key_field: KeyField, customers: CustomerRepository) -> Customer | None:
    match key_field:
        case KeyField.ID:
            customer_id = row.get_int(KeyField.ID)
            return customers.get_by_id(customer_id) if customer_id > 0 else None
        case KeyField.CUSTOMER_GUID:
            guid = row.get_uuid(KeyField.CUSTOMER_GUID)
            return customers.get_by_guid(guid) if guid is not None else None
        case KeyField.EMAIL:
            email = row.get_str(KeyField.EMAIL)
            return customers.get_by_email(email.strip()) if email else None
        case KeyField.USERNAME:
            username = row.get_str(KeyField.USERNAME)
            return customers.get_by_username(username.strip()) if username else None
