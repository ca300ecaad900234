"""Alembic environment for rosterpy."""

from __future__ import annotations

import logging
from logging.config import fileConfig
from pathlib import Path

from alembic import context
from sqlalchemy import create_engine, pool

from rosterpy.adapters.sqlalchemy.mappings import mapper_registry, start_mappers
from rosterpy.config import get_database_config

config = context.config

if config.config_file_name is not None and Path(config.config_file_name).suffix == ".ini":
    fileConfig(config.config_file_name, disable_existing_loggers=False)

log = logging.getLogger("alembic.env")

start_mappers()
target_metadata = mapper_registry.metadata

_CONFIGURE_OPTIONS = {
    "target_metadata": target_metadata,
    "render_as_batch": True,
    "compare_type": True,
}


def _database_url() -> str:
    return config.get_main_option("sqlalchemy.url") or get_database_config().uri


def run_migrations_offline() -> None:
    context.configure(url=_database_url(), literal_binds=True, **_CONFIGURE_OPTIONS)
    with context.begin_transaction():
        context.run_migrations()


def run_migrations_online() -> None:
    existing_connection = config.attributes.get("connection")
    if existing_connection is not None:
        context.configure(connection=existing_connection, **_CONFIGURE_OPTIONS)
        with context.begin_transaction():
            context.run_migrations()
        return

    engine = create_engine(_database_url(), poolclass=pool.NullPool, future=True)
    try:
        with engine.connect() as connection:
            context.configure(connection=connection, **_CONFIGURE_OPTIONS)
            with context.begin_transaction():
                context.run_migrations()
    finally:
        engine.dispose()


if context.is_offline_mode():
    log.info("Running migrations offline")
    run_migrations_offline()
else:
    run_migrations_online()
