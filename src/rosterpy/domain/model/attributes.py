"""Auxiliary key/value facts stored next to an entity."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(eq=False, kw_only=True)
class GenericAttribute:
    """One value per (entity, key group, key); saving again overwrites."""

    id: int | None = None
    entity_id: int
    key_group: str
    key: str
    value: str
