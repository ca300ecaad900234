"""Customer import core: identity resolution, upsert, attributes, addresses."""

from __future__ import annotations

from .addresses import AddressPhase, build_address, merge_address
from .attributes import AttributePhase
from .avatar import AvatarImporter, create_download_item, seo_name
from .context import ImportContext, ProgressCallback
from .field_mapping import CUSTOMER_FIELD_MAPPINGS, FieldMapping
from .identity import (
    DEFAULT_KEY_FIELDS,
    SUPPORTED_KEY_FIELDS,
    find_existing_customer,
    normalize_key_fields,
)
from .lookups import CustomerNumberRegistry, LookupTables, build_lookup_tables
from .orchestrator import CustomerImporter, UnitOfWorkFactory
from .phases import GuardedPhase, ImportPhase, PhaseOutcome
from .result import ImportMessage, ImportResult, MessageSeverity
from .row import ImportRow, RowInfo, RowNote
from .upsert import UpsertPhase

__all__ = [
    "CUSTOMER_FIELD_MAPPINGS",
    "DEFAULT_KEY_FIELDS",
    "SUPPORTED_KEY_FIELDS",
    "AddressPhase",
    "AttributePhase",
    "AvatarImporter",
    "CustomerImporter",
    "CustomerNumberRegistry",
    "FieldMapping",
    "GuardedPhase",
    "ImportContext",
    "ImportMessage",
    "ImportPhase",
    "ImportResult",
    "ImportRow",
    "LookupTables",
    "MessageSeverity",
    "PhaseOutcome",
    "ProgressCallback",
    "RowInfo",
    "RowNote",
    "UnitOfWorkFactory",
    "UpsertPhase",
    "build_address",
    "build_lookup_tables",
    "create_download_item",
    "find_existing_customer",
    "merge_address",
    "normalize_key_fields",
    "seo_name",
]
