"""Application orchestration entry points."""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING

from rosterpy.adapters.download import HttpFileDownloader
from rosterpy.adapters.events import LoggingEventPublisher
from rosterpy.adapters.rows import SequenceRowSource
from rosterpy.adapters.sqlalchemy.unit_of_work import (
    SqlAlchemyImportUnitOfWork,
    is_started,
    startup,
)
from rosterpy.config import get_import_settings, load_environment
from rosterpy.domain.customer_import import CustomerImporter, ImportContext

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping, Sequence

    from rosterpy.config import ImportSettings
    from rosterpy.domain.customer_import import ImportResult, ProgressCallback, UnitOfWorkFactory
    from rosterpy.domain.ports import EventPublisher, FileDownloader, RowSource


log = getLogger(__name__)


def build_row_source(
    records: Sequence[Mapping[str, object]], *, settings: ImportSettings
) -> SequenceRowSource:
    return SequenceRowSource(records, batch_size=settings.data_exchange.batch_size)


def run_customer_import(
    records: Sequence[Mapping[str, object]] | None = None,
    *,
    source: RowSource | None = None,
    key_field_names: Iterable[str] = (),
    update_only: bool = False,
    current_customer_email: str | None = None,
    settings: ImportSettings | None = None,
    unit_of_work_factory: UnitOfWorkFactory | None = None,
    downloader: FileDownloader | None = None,
    events: EventPublisher | None = None,
    progress: ProgressCallback | None = None,
) -> ImportResult:
    """Import customer records with the configured adapters and return the run summary."""

    if (records is None) == (source is None):
        raise ValueError("Pass exactly one of records or source")

    load_environment()
    effective_settings = settings or get_import_settings()
    if unit_of_work_factory is None:
        if not is_started():
            startup()
        unit_of_work_factory = SqlAlchemyImportUnitOfWork
    if downloader is None and effective_settings.customers.allow_customers_to_upload_avatars:
        downloader = HttpFileDownloader()

    effective_source = source or build_row_source(records or (), settings=effective_settings)
    context = ImportContext.create(
        settings=effective_settings,
        key_field_names=key_field_names,
        update_only=update_only,
        current_customer_email=current_customer_email,
        progress=progress,
    )
    importer = CustomerImporter(
        unit_of_work_factory,
        events=events or LoggingEventPublisher(),
        downloader=downloader,
    )
    log.info(
        "Starting customer import: rows=%s, key_fields=%s, update_only=%s",
        effective_source.total_rows,
        ",".join(context.key_fields),
        update_only,
    )
    return importer.run(effective_source, context)
