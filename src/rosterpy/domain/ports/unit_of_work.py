"""Unit-of-work abstractions for coordinating repositories."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from types import TracebackType

    from rosterpy.domain.ports.media import MediaStore
    from rosterpy.domain.ports.persistence import (
        AffiliateRepository,
        CountryRepository,
        CustomerRepository,
        CustomerRoleRepository,
        GenericAttributeRepository,
        StateProvinceRepository,
    )


@runtime_checkable
class RepositoryCollection(Protocol):
    """Marker protocol for groups of repositories managed together."""


@runtime_checkable
class UnitOfWork[TRepositories: RepositoryCollection](Protocol):
    """Generic unit-of-work boundary around a repository collection."""

    @property
    def repositories(self) -> TRepositories: ...

    def __enter__(self) -> UnitOfWork[TRepositories]: ...

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_value: BaseException | None,
        traceback: TracebackType | None,
    ) -> bool: ...

    def commit(self) -> int:
        """Persist pending changes and return the number of affected entities."""
        ...

    def rollback(self) -> None: ...


@dataclass(slots=True)
class ImportRepositories(RepositoryCollection):
    """Repositories required by the customer import phases."""

    customers: CustomerRepository
    roles: CustomerRoleRepository
    affiliates: AffiliateRepository
    countries: CountryRepository
    state_provinces: StateProvinceRepository
    attributes: GenericAttributeRepository
    media: MediaStore


type ImportUnitOfWork = UnitOfWork[ImportRepositories]
