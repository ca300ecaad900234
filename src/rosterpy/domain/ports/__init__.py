"""Domain port definitions for adapters."""

from __future__ import annotations

from .downloading import DownloadItem, FileDownloader
from .events import EventPublisher
from .media import MediaStore
from .persistence import (
    AffiliateRepository,
    CountryRepository,
    CustomerRepository,
    CustomerRoleRepository,
    GenericAttributeRepository,
    Repository,
    StateProvinceRepository,
)
from .source import RowBatch, RowSource
from .unit_of_work import ImportRepositories, ImportUnitOfWork, RepositoryCollection, UnitOfWork

__all__ = [
    "AffiliateRepository",
    "CountryRepository",
    "CustomerRepository",
    "CustomerRoleRepository",
    "DownloadItem",
    "EventPublisher",
    "FileDownloader",
    "GenericAttributeRepository",
    "ImportRepositories",
    "ImportUnitOfWork",
    "MediaStore",
    "Repository",
    "RepositoryCollection",
    "RowBatch",
    "RowSource",
    "StateProvinceRepository",
    "UnitOfWork",
]
