"""Port for entity change notifications."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from rosterpy.domain.model import Entity


@runtime_checkable
class EventPublisher(Protocol):
    def entity_inserted(self, entity: Entity) -> None: ...

    def entity_updated(self, entity: Entity) -> None: ...
