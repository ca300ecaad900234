"""Run-scoped state shared by the import phases."""

from __future__ import annotations

import threading
from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import TYPE_CHECKING

from rosterpy.config.import_settings import ImportSettings

from .identity import DEFAULT_KEY_FIELDS, normalize_key_fields
from .lookups import CustomerNumberRegistry, LookupTables
from .result import ImportResult

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable
    from pathlib import Path

    from rosterpy.domain.model import KeyField

type ProgressCallback = Callable[[int, int], None]


@dataclass(slots=True)
class ImportContext:
    """Mutable context of one import run.

    ``lookups`` and ``customer_numbers`` are filled by the importer before the
    first batch; ``downloaded_urls`` remembers successful avatar downloads so a
    URL is fetched at most once per run.
    """

    settings: ImportSettings = field(default_factory=ImportSettings)
    key_fields: tuple[KeyField, ...] = DEFAULT_KEY_FIELDS
    update_only: bool = False
    current_customer_email: str | None = None
    progress: ProgressCallback | None = None
    utc_now: datetime = field(default_factory=lambda: datetime.now(tz=UTC))

    result: ImportResult = field(default_factory=ImportResult)
    lookups: LookupTables = field(default_factory=LookupTables)
    customer_numbers: CustomerNumberRegistry = field(default_factory=CustomerNumberRegistry)
    downloaded_urls: dict[str, Path] = field(default_factory=dict[str, "Path"])
    _abort: threading.Event = field(default_factory=threading.Event, repr=False)

    @classmethod
    def create(
        cls,
        *,
        settings: ImportSettings | None = None,
        key_field_names: Iterable[str] = (),
        update_only: bool = False,
        current_customer_email: str | None = None,
        progress: ProgressCallback | None = None,
    ) -> ImportContext:
        return cls(
            settings=settings or ImportSettings(),
            key_fields=normalize_key_fields(key_field_names),
            update_only=update_only,
            current_customer_email=current_customer_email,
            progress=progress,
        )

    def request_abort(self) -> None:
        self._abort.set()

    @property
    def abort_requested(self) -> bool:
        return self._abort.is_set()

    def report_progress(self, value: int, maximum: int) -> None:
        if self.progress is not None:
            self.progress(value, maximum)

    def is_current_customer(self, email: str | None) -> bool:
        if not email or not self.current_customer_email:
            return False
        return email.strip().casefold() == self.current_customer_email.strip().casefold()
