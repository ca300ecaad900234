"""Event publisher that reports entity changes to the log."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from rosterpy.domain.model import Entity

log = logging.getLogger(__name__)


@dataclass(slots=True)
class LoggingEventPublisher:
    """Best-effort notification sink; keeps a short history for inspection."""

    history: list[tuple[str, Entity]] = field(default_factory=list[tuple[str, "Entity"]])

    def entity_inserted(self, entity: Entity) -> None:
        self._publish("inserted", entity)

    def entity_updated(self, entity: Entity) -> None:
        self._publish("updated", entity)

    def _publish(self, action: str, entity: Entity) -> None:
        self.history.append((action, entity))
        log.info("%s %s (id=%s)", entity.entity_type, action, entity.id)


if TYPE_CHECKING:
    from rosterpy.domain.ports import EventPublisher

    _publisher_check: EventPublisher = LoggingEventPublisher()
