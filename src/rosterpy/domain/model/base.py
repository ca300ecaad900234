"""
Base building blocks:
store-assigned identity and the entity_type contract.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, ClassVar, Protocol

if TYPE_CHECKING:
    from rosterpy.domain.model.enums import EntityType


class HasEntityType(Protocol):
    """Structural contract for typed dispatch (events, attribute ownership)."""

    ENTITY_TYPE: ClassVar[EntityType]

    @property
    def entity_type(self) -> EntityType: ...


@dataclass(eq=False, kw_only=True)
class Entity:
    """Identity is assigned by the store on first flush; ``None`` means not yet persisted."""

    id: int | None = None

    # class-level discriminator; subclasses must override
    ENTITY_TYPE: ClassVar[EntityType]

    @property
    def entity_type(self) -> EntityType:
        return self.ENTITY_TYPE

    @property
    def is_transient(self) -> bool:
        return self.id is None
