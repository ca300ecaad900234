"""Import rows: raw column values plus the per-row pipeline state."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import TYPE_CHECKING
from uuid import UUID

if TYPE_CHECKING:
    from collections.abc import Mapping

    from rosterpy.domain.model import Customer

_TRUE_STRINGS = frozenset({"1", "true", "yes", "y", "on"})


@dataclass(frozen=True, slots=True)
class RowInfo:
    """Identifies a row in diagnostics (1-based position in the source)."""

    position: int
    entity_id: int | None = None
    display_name: str | None = None

    def __str__(self) -> str:
        parts = [f"row {self.position}"]
        if self.entity_id is not None:
            parts.append(f"id {self.entity_id}")
        if self.display_name:
            parts.append(self.display_name)
        return ", ".join(parts)


@dataclass(frozen=True, slots=True)
class RowNote:
    """Diagnostic attached to a row before it reaches the importer."""

    message: str
    column: str | None = None


@dataclass(eq=False, slots=True)
class ImportRow:
    """One source record mapped to at most one customer.

    ``values`` only holds columns present in the source; a missing key means the
    column is absent, a ``None`` value means the column is present but empty.
    """

    position: int
    values: Mapping[str, object]
    notes: list[RowNote] = field(default_factory=list[RowNote])

    entity: Customer | None = None
    display_name: str | None = None
    is_new: bool = False
    is_rejected: bool = False

    def initialize(self, entity: Customer, display_name: str | None) -> None:
        self.entity = entity
        self.display_name = display_name
        self.is_new = entity.is_transient

    def reject(self) -> None:
        self.is_rejected = True

    @property
    def is_transient(self) -> bool:
        return self.entity is None or self.entity.is_transient

    @property
    def is_persisted(self) -> bool:
        return not self.is_rejected and not self.is_transient

    def require_entity(self) -> Customer:
        if self.entity is None:
            raise ValueError(f"Row {self.position} has no entity attached")
        return self.entity

    def row_info(self) -> RowInfo:
        entity_id = self.entity.id if self.entity is not None else None
        return RowInfo(position=self.position, entity_id=entity_id, display_name=self.display_name)

    def has(self, column: str) -> bool:
        return column in self.values

    def get(self, column: str) -> object | None:
        return self.values.get(column)

    def get_str(self, column: str) -> str | None:
        value = self.values.get(column)
        if value is None:
            return None
        text = value.isoformat() if isinstance(value, datetime) else str(value)
        return text if text.strip() else None

    def get_bool(self, column: str) -> bool:
        value = self.values.get(column)
        if isinstance(value, bool):
            return value
        if isinstance(value, int):
            return value != 0
        if isinstance(value, str):
            return value.strip().lower() in _TRUE_STRINGS
        return False

    def get_int(self, column: str) -> int:
        value = self.values.get(column)
        if isinstance(value, bool):
            return int(value)
        if isinstance(value, int):
            return value
        if isinstance(value, str) and value.strip():
            try:
                return int(value.strip())
            except ValueError:
                return 0
        return 0

    def get_uuid(self, column: str) -> UUID | None:
        value = self.values.get(column)
        if isinstance(value, UUID):
            return value
        text = self.get_str(column)
        if text is None:
            return None
        try:
            return UUID(text.strip())
        except ValueError:
            return None
