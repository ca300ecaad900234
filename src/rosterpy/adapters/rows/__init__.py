"""Row source adapter: pydantic record schema and in-memory segmenter."""

from __future__ import annotations

from .schema import CustomerRecord, known_columns
from .source import DEFAULT_BATCH_SIZE, RowSourceExhaustedError, SequenceRowSource, parse_record

__all__ = [
    "DEFAULT_BATCH_SIZE",
    "CustomerRecord",
    "RowSourceExhaustedError",
    "SequenceRowSource",
    "known_columns",
    "parse_record",
]
