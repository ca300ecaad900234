"""Reference data read once per import run (countries, states, affiliates)."""

from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar

from rosterpy.domain.model.base import Entity
from rosterpy.domain.model.enums import EntityType


@dataclass(eq=False, kw_only=True)
class Country(Entity):
    ENTITY_TYPE: ClassVar[EntityType] = EntityType.COUNTRY

    name: str
    two_letter_iso_code: str | None = None
    three_letter_iso_code: str | None = None
    published: bool = True


@dataclass(eq=False, kw_only=True)
class StateProvince(Entity):
    ENTITY_TYPE: ClassVar[EntityType] = EntityType.STATE_PROVINCE

    country_id: int
    name: str
    abbreviation: str | None = None
    published: bool = True


@dataclass(eq=False, kw_only=True)
class Affiliate(Entity):
    ENTITY_TYPE: ClassVar[EntityType] = EntityType.AFFILIATE

    active: bool = True
    deleted: bool = False
