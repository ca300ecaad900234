"""Ports for persisting domain aggregates and reading reference data."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

from rosterpy.domain.model import Customer

if TYPE_CHECKING:
    from collections.abc import Sequence
    from uuid import UUID

    from rosterpy.domain.model import Country, CustomerRole, StateProvince


@runtime_checkable
class Repository[TEntity](Protocol):
    """Minimal repository contract for a persistent aggregate store."""

    def add(self, entity: TEntity) -> None: ...


@runtime_checkable
class CustomerRepository(Repository[Customer], Protocol):
    """Entity store contract used by identity resolution and the upsert phase."""

    def update(self, entity: Customer) -> None: ...

    def get_by_id(self, customer_id: int) -> Customer | None: ...

    def get_by_guid(self, customer_guid: UUID) -> Customer | None: ...

    def get_by_email(self, email: str) -> Customer | None: ...

    def get_by_username(self, username: str) -> Customer | None: ...

    def load_roles(self, entity: Customer) -> None:
        """Make sure the role collection of a loaded customer is populated."""
        ...


@runtime_checkable
class CustomerRoleRepository(Protocol):
    def list_all(self, *, include_hidden: bool = True) -> Sequence[CustomerRole]: ...


@runtime_checkable
class AffiliateRepository(Protocol):
    def list_ids(self, *, include_hidden: bool = True) -> Sequence[int]: ...


@runtime_checkable
class CountryRepository(Protocol):
    def list_all(self, *, include_hidden: bool = True) -> Sequence[Country]: ...


@runtime_checkable
class StateProvinceRepository(Protocol):
    def list_all(self, *, include_hidden: bool = True) -> Sequence[StateProvince]: ...


@runtime_checkable
class GenericAttributeRepository(Protocol):
    """Key/value store for auxiliary entity facts."""

    def values_for_key(self, key: str, key_group: str) -> Sequence[str]:
        """Return every stored value of ``key`` within ``key_group``."""
        ...

    def get_value(self, entity_id: int, key: str, key_group: str) -> str | None: ...

    def save(self, entity_id: int, key: str, key_group: str, value: object | None) -> None:
        """Insert or overwrite; a null or empty value removes the attribute."""
        ...
