"""Phase contract shared by the upsert, attribute and address steps."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import TYPE_CHECKING, ClassVar, Protocol

if TYPE_CHECKING:
    from collections.abc import Sequence

    from rosterpy.domain.ports import ImportUnitOfWork

    from .context import ImportContext
    from .row import ImportRow

log = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class PhaseOutcome:
    """Result of one phase over one batch.

    ``survivors`` is the row set handed to the next phase; ``error`` holds the
    exception that stopped the phase, if any.
    """

    phase: str
    survivors: tuple[ImportRow, ...]
    affected: int = 0
    error: Exception | None = None

    @property
    def failed(self) -> bool:
        return self.error is not None


class ImportPhase(Protocol):
    """Contract implemented by each batch phase."""

    name: str

    def run(
        self, rows: Sequence[ImportRow], *, context: ImportContext, uow: ImportUnitOfWork
    ) -> PhaseOutcome: ...


class GuardedPhase(ABC):
    """Base phase that turns any failure into a failed :class:`PhaseOutcome`.

    The unit of work is rolled back on failure; whatever an earlier commit of
    the same phase persisted stands.
    """

    name: ClassVar[str]

    def run(
        self, rows: Sequence[ImportRow], *, context: ImportContext, uow: ImportUnitOfWork
    ) -> PhaseOutcome:
        batch = tuple(rows)
        if not batch:
            return PhaseOutcome(phase=self.name, survivors=())
        try:
            return self.process(batch, context=context, uow=uow)
        except Exception as exc:  # noqa: BLE001
            log.debug("Phase %s failed, rolling back", self.name)
            uow.rollback()
            return PhaseOutcome(
                phase=self.name, survivors=self.survivors_after_failure(batch), error=exc
            )

    @abstractmethod
    def process(
        self, rows: tuple[ImportRow, ...], *, context: ImportContext, uow: ImportUnitOfWork
    ) -> PhaseOutcome: ...

    def survivors_after_failure(self, rows: tuple[ImportRow, ...]) -> tuple[ImportRow, ...]:
        """Rows handed on when this phase failed; later phases still see them."""
        return rows
