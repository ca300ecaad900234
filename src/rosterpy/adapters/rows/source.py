"""In-memory row source: validates raw records and cuts them into batches."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from pydantic import ValidationError

from rosterpy.domain.customer_import.row import ImportRow, RowNote
from rosterpy.domain.ports import RowBatch

from .schema import CustomerRecord

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator, Mapping, Sequence

log = logging.getLogger(__name__)

DEFAULT_BATCH_SIZE = 100


class RowSourceExhaustedError(RuntimeError):
    """Raised when a row source is iterated a second time."""


def parse_record(position: int, raw: Mapping[str, object]) -> ImportRow:
    """Validate one raw record; columns that fail conversion are dropped with a note."""

    data = dict(raw)
    notes: list[RowNote] = []
    while True:
        try:
            record = CustomerRecord.model_validate(data)
        except ValidationError as exc:
            failed: set[str] = set()
            for error in exc.errors():
                column = str(error["loc"][0]) if error["loc"] else None
                if column is None or column not in data:
                    raise
                failed.add(column)
                notes.append(RowNote(f"Conversion failed: {error['msg']}", column))
            for column in failed:
                data.pop(column)
            continue
        return ImportRow(position=position, values=record.column_values(), notes=notes)


class SequenceRowSource:
    """Non-restartable row source over already-parsed records."""

    def __init__(
        self,
        records: Sequence[Mapping[str, object]],
        *,
        batch_size: int = DEFAULT_BATCH_SIZE,
        columns: Iterable[str] | None = None,
    ) -> None:
        if batch_size < 1:
            raise ValueError(f"batch_size must be >= 1, got {batch_size}")
        self._records = records
        self._batch_size = batch_size
        self._columns = (
            frozenset(columns)
            if columns is not None
            else frozenset(key for record in records for key in record)
        )
        self._consumed = False

    @property
    def total_rows(self) -> int:
        return len(self._records)

    @property
    def columns(self) -> frozenset[str]:
        return self._columns

    def has_column(self, name: str) -> bool:
        return name in self._columns

    def batches(self) -> Iterator[RowBatch]:
        if self._consumed:
            raise RowSourceExhaustedError("Row source has already been consumed")
        self._consumed = True
        return self._iter_batches()

    def _iter_batches(self) -> Iterator[RowBatch]:
        size = self._batch_size
        for segment, start in enumerate(range(0, len(self._records), size), start=1):
            chunk = self._records[start : start + size]
            rows = tuple(
                parse_record(start + offset + 1, raw) for offset, raw in enumerate(chunk)
            )
            log.debug("Prepared batch %d with %d rows", segment, len(rows))
            yield RowBatch(segment=segment, first_row_index=start + 1, rows=rows)


if TYPE_CHECKING:
    from rosterpy.domain.ports import RowSource

    _source_check: RowSource = SequenceRowSource([])
