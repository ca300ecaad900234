"""Port for the upstream row segmenter."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Iterator

    from rosterpy.domain.customer_import.row import ImportRow


@dataclass(frozen=True, slots=True)
class RowBatch:
    """One segment of the row stream."""

    segment: int
    first_row_index: int
    rows: tuple[ImportRow, ...]


@runtime_checkable
class RowSource(Protocol):
    """Lazy, finite and non-restartable producer of fixed-size row batches."""

    @property
    def total_rows(self) -> int: ...

    def has_column(self, name: str) -> bool: ...

    def batches(self) -> Iterator[RowBatch]: ...
