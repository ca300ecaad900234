"""Static column -> customer field table applied by the upsert phase.

Only columns present in a row are applied (partial update). A present column
holding ``None`` resets the field to its default; an absent column gets its
default only when the customer is new.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, datetime
from typing import TYPE_CHECKING, Any
from uuid import UUID, uuid4

from rosterpy.domain.model import PasswordFormat

if TYPE_CHECKING:
    from collections.abc import Callable

    from rosterpy.domain.model import Customer

    from .context import ImportContext
    from .row import ImportRow

type Converter = Callable[[object], Any]
type DefaultSupplier = Callable[[ImportContext], Any]
type Gate = Callable[[ImportRow, ImportContext], bool]

_NULL_MARKERS = frozenset({"", "null"})


def _is_null(value: object) -> bool:
    return value is None or (isinstance(value, str) and value.strip().lower() in _NULL_MARKERS)


def to_str(value: object) -> str:
    return value if isinstance(value, str) else str(value)


def to_bool(value: object) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, int):
        return value != 0
    text = str(value).strip().lower()
    if text in {"1", "true", "yes", "y", "on"}:
        return True
    if text in {"0", "false", "no", "n", "off"}:
        return False
    raise ValueError(f"Not a boolean: {value!r}")


def to_uuid(value: object) -> UUID:
    return value if isinstance(value, UUID) else UUID(str(value).strip())


def to_datetime(value: object) -> datetime:
    parsed = value if isinstance(value, datetime) else datetime.fromisoformat(str(value).strip())
    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=UTC)
    return parsed.astimezone(UTC)


def to_password_format(value: object) -> PasswordFormat:
    if isinstance(value, PasswordFormat):
        return value
    if isinstance(value, str) and not value.strip().isdigit():
        return PasswordFormat[value.strip().upper()]
    return PasswordFormat(int(str(value).strip()))


def _run_time(context: ImportContext) -> datetime:
    return context.utc_now


def _password_allowed(row: ImportRow, context: ImportContext) -> bool:
    return not context.is_current_customer(row.get_str("Email"))


@dataclass(frozen=True, slots=True)
class FieldMapping:
    column: str
    attribute: str
    convert: Converter
    reset_value: object = None
    default: DefaultSupplier | None = None
    gate: Gate | None = None
    keep_existing: bool = False

    def apply(self, row: ImportRow, customer: Customer, context: ImportContext) -> bool:
        """Apply this column to ``customer``; return whether the field was touched.

        Raises ``ValueError``/``TypeError`` when a present value cannot be converted.
        """

        if self.gate is not None and not self.gate(row, context):
            return False
        if row.has(self.column):
            raw = row.get(self.column)
            if self.keep_existing and not row.is_new and _is_null(raw):
                return False
            value = self._fallback(context) if _is_null(raw) else self.convert(raw)
        elif row.is_new and self.default is not None:
            value = self.default(context)
        else:
            return False
        setattr(customer, self.attribute, value)
        return True

    def _fallback(self, context: ImportContext) -> object:
        if self.default is not None:
            return self.default(context)
        return self.reset_value


PASSWORD_COLUMNS = frozenset({"Password", "PasswordFormatId", "PasswordSalt"})

CUSTOMER_FIELD_MAPPINGS: tuple[FieldMapping, ...] = (
    FieldMapping(
        "CustomerGuid", "customer_guid", to_uuid, default=lambda _: uuid4(), keep_existing=True
    ),
    FieldMapping("Username", "username", to_str),
    FieldMapping("Email", "email", to_str),
    FieldMapping("Password", "password", to_str, gate=_password_allowed),
    FieldMapping(
        "PasswordFormatId",
        "password_format",
        to_password_format,
        reset_value=PasswordFormat.CLEAR,
        gate=_password_allowed,
    ),
    FieldMapping("PasswordSalt", "password_salt", to_str, gate=_password_allowed),
    FieldMapping("AdminComment", "admin_comment", to_str),
    FieldMapping("IsTaxExempt", "is_tax_exempt", to_bool, reset_value=False),
    FieldMapping("Active", "active", to_bool, reset_value=False),
    FieldMapping("IsSystemAccount", "is_system_account", to_bool, reset_value=False),
    FieldMapping("SystemName", "system_name", to_str),
    FieldMapping("LastIpAddress", "last_ip_address", to_str),
    FieldMapping("LastLoginDateUtc", "last_login_date_utc", to_datetime),
    FieldMapping("LastActivityDateUtc", "last_activity_date_utc", to_datetime, default=_run_time),
    FieldMapping("CreatedOnUtc", "created_on_utc", to_datetime, default=_run_time),
)