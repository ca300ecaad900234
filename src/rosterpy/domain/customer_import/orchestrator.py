"""Batch orchestrator: upsert -> attributes -> addresses for every batch."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from .addresses import AddressPhase, anchor_columns
from .attributes import AttributePhase
from .avatar import AvatarImporter
from .lookups import build_lookup_tables, load_customer_numbers
from .upsert import UpsertPhase

if TYPE_CHECKING:
    from collections.abc import Callable, Sequence

    from rosterpy.domain.ports import (
        EventPublisher,
        FileDownloader,
        ImportUnitOfWork,
        RowBatch,
        RowSource,
    )

    from .context import ImportContext
    from .phases import ImportPhase, PhaseOutcome
    from .result import ImportResult
    from .row import ImportRow

type UnitOfWorkFactory = Callable[[], ImportUnitOfWork]

log = logging.getLogger(__name__)


class CustomerImporter:
    """Drive an import run over a row source.

    Batches are processed strictly in order, each inside its own unit of work.
    A failing phase is recorded against its batch and never stops the run; the
    abort flag of the context is polled before each batch is read.
    """

    def __init__(
        self,
        uow_factory: UnitOfWorkFactory,
        *,
        events: EventPublisher,
        downloader: FileDownloader | None = None,
    ) -> None:
        self._uow_factory = uow_factory
        self._upsert: ImportPhase = UpsertPhase(events)
        self._attributes: ImportPhase = AttributePhase(
            AvatarImporter(downloader) if downloader is not None else None
        )
        self._addresses: ImportPhase = AddressPhase()

    def run(self, source: RowSource, context: ImportContext) -> ImportResult:
        result = context.result
        result.total_records = source.total_rows
        log.info("Starting customer import of %d rows", source.total_rows)

        self._load_reference_data(context)
        with_addresses = any(source.has_column(column) for column in anchor_columns())

        batches = iter(source.batches())
        while True:
            if context.abort_requested:
                log.warning("Customer import aborted on request")
                result.add_warning("Import aborted by request.")
                break
            batch = next(batches, None)
            if batch is None:
                break
            self._process_batch(
                batch, context=context, total=source.total_rows, with_addresses=with_addresses
            )

        result.complete()
        log.info("Finished customer import: %s", result.summary())
        return result

    def _load_reference_data(self, context: ImportContext) -> None:
        with self._uow_factory() as uow:
            context.lookups = build_lookup_tables(uow.repositories)
            context.customer_numbers = load_customer_numbers(uow.repositories)
        log.debug(
            "Loaded %d countries, %d states, %d known customer numbers",
            len(context.lookups.countries),
            len(context.lookups.states),
            len(context.customer_numbers),
        )

    def _process_batch(
        self, batch: RowBatch, *, context: ImportContext, total: int, with_addresses: bool
    ) -> None:
        context.report_progress(batch.first_row_index - 1, total)
        log.info("Processing batch %d (%d rows)", batch.segment, len(batch.rows))
        result = context.result
        for row in batch.rows:
            for note in row.notes:
                result.add_warning(note.message, row.row_info(), note.column)

        with self._uow_factory() as uow:
            upserted = self._run_phase(self._upsert, batch.rows, batch, context=context, uow=uow)
            result.new_records += sum(1 for row in upserted.survivors if row.is_new)
            result.modified_records += sum(1 for row in upserted.survivors if not row.is_new)

            attributed = self._run_phase(
                self._attributes, upserted.survivors, batch, context=context, uow=uow
            )
            if with_addresses:
                self._run_phase(
                    self._addresses, attributed.survivors, batch, context=context, uow=uow
                )

    @staticmethod
    def _run_phase(
        phase: ImportPhase,
        rows: Sequence[ImportRow],
        batch: RowBatch,
        *,
        context: ImportContext,
        uow: ImportUnitOfWork,
    ) -> PhaseOutcome:
        outcome = phase.run(rows, context=context, uow=uow)
        if outcome.error is not None:
            context.result.add_batch_error(outcome.error, segment=batch.segment, phase=phase.name)
        else:
            log.debug(
                "Batch %d %s: %d rows, %d changes",
                batch.segment,
                phase.name,
                len(outcome.survivors),
                outcome.affected,
            )
        return outcome
