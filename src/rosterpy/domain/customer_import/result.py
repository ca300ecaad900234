"""Run summary and ordered diagnostic log of an import run."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import UTC, datetime
from enum import StrEnum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from rosterpy.domain.customer_import.row import RowInfo

log = logging.getLogger(__name__)


class MessageSeverity(StrEnum):
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


_LOG_LEVELS = {
    MessageSeverity.INFO: logging.INFO,
    MessageSeverity.WARNING: logging.WARNING,
    MessageSeverity.ERROR: logging.ERROR,
}


@dataclass(frozen=True, slots=True)
class ImportMessage:
    message: str
    severity: MessageSeverity
    row_info: RowInfo | None = None
    field_name: str | None = None
    segment: int | None = None
    exception: BaseException | None = field(default=None, repr=False, compare=False)

    def __str__(self) -> str:
        where: list[str] = []
        if self.segment is not None:
            where.append(f"batch {self.segment}")
        if self.row_info is not None:
            where.append(str(self.row_info))
        if self.field_name:
            where.append(self.field_name)
        location = f" ({'; '.join(where)})" if where else ""
        return f"{self.severity.upper()}: {self.message}{location}"


@dataclass(slots=True)
class ImportResult:
    """Counters plus every diagnostic recorded during a run, in order."""

    started_on: datetime = field(default_factory=lambda: datetime.now(tz=UTC))
    completed_on: datetime | None = None
    total_records: int = 0
    new_records: int = 0
    modified_records: int = 0
    skipped_records: int = 0
    messages: list[ImportMessage] = field(default_factory=list[ImportMessage])

    def add_info(
        self, message: str, row_info: RowInfo | None = None, field_name: str | None = None
    ) -> ImportMessage:
        return self._add(
            ImportMessage(message, MessageSeverity.INFO, row_info=row_info, field_name=field_name)
        )

    def add_warning(
        self, message: str, row_info: RowInfo | None = None, field_name: str | None = None
    ) -> ImportMessage:
        return self._add(
            ImportMessage(
                message, MessageSeverity.WARNING, row_info=row_info, field_name=field_name
            )
        )

    def add_error(
        self,
        message: str,
        row_info: RowInfo | None = None,
        field_name: str | None = None,
        *,
        segment: int | None = None,
        exception: BaseException | None = None,
    ) -> ImportMessage:
        return self._add(
            ImportMessage(
                message,
                MessageSeverity.ERROR,
                row_info=row_info,
                field_name=field_name,
                segment=segment,
                exception=exception,
            )
        )

    def add_batch_error(self, exception: BaseException, *, segment: int, phase: str) -> ImportMessage:
        """Record a phase failure for one batch; the run itself carries on."""
        text = str(exception) or type(exception).__name__
        return self.add_error(text, field_name=phase, segment=segment, exception=exception)

    def complete(self) -> None:
        self.completed_on = datetime.now(tz=UTC)

    @property
    def errors(self) -> tuple[ImportMessage, ...]:
        return tuple(m for m in self.messages if m.severity is MessageSeverity.ERROR)

    @property
    def warnings(self) -> tuple[ImportMessage, ...]:
        return tuple(m for m in self.messages if m.severity is MessageSeverity.WARNING)

    @property
    def has_errors(self) -> bool:
        return any(m.severity is MessageSeverity.ERROR for m in self.messages)

    @property
    def processed_records(self) -> int:
        return self.new_records + self.modified_records + self.skipped_records

    def summary(self) -> str:
        return (
            f"total={self.total_records}, new={self.new_records}, "
            f"modified={self.modified_records}, skipped={self.skipped_records}, "
            f"errors={len(self.errors)}"
        )

    def _add(self, message: ImportMessage) -> ImportMessage:
        self.messages.append(message)
        log.log(_LOG_LEVELS[message.severity], "%s", message, exc_info=message.exception)
        return message
