"""SQLAlchemy adapter package for rosterpy."""

from __future__ import annotations

from .mappings import create_all_tables, mapper_registry, start_mappers
from .repositories import (
    SqlAlchemyAffiliateRepository,
    SqlAlchemyCountryRepository,
    SqlAlchemyCustomerRepository,
    SqlAlchemyCustomerRoleRepository,
    SqlAlchemyGenericAttributeRepository,
    SqlAlchemyMediaStore,
    SqlAlchemyStateProvinceRepository,
)
from .unit_of_work import SqlAlchemyImportUnitOfWork, StartupError, shutdown, startup

__all__ = [
    "SqlAlchemyAffiliateRepository",
    "SqlAlchemyCountryRepository",
    "SqlAlchemyCustomerRepository",
    "SqlAlchemyCustomerRoleRepository",
    "SqlAlchemyGenericAttributeRepository",
    "SqlAlchemyImportUnitOfWork",
    "SqlAlchemyMediaStore",
    "SqlAlchemyStateProvinceRepository",
    "StartupError",
    "create_all_tables",
    "mapper_registry",
    "shutdown",
    "start_mappers",
    "startup",
]
