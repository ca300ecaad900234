"""Customer aggregate: credentials, flags, roles and owned addresses."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, ClassVar
from uuid import UUID, uuid4

from rosterpy.domain.model.base import Entity
from rosterpy.domain.model.enums import EntityType, PasswordFormat

if TYPE_CHECKING:
    from datetime import datetime


type PostalKey = tuple[str, ...]


def _norm(value: str | int | None) -> str:
    # null and "" compare equal
    return "" if value is None else str(value)


@dataclass(eq=False, kw_only=True)
class Address(Entity):
    """Postal address value owned by exactly one customer."""

    ENTITY_TYPE: ClassVar[EntityType] = EntityType.ADDRESS

    first_name: str | None = None
    last_name: str | None = None
    email: str | None = None
    company: str | None = None
    country_id: int | None = None
    state_province_id: int | None = None
    city: str | None = None
    address1: str | None = None
    address2: str | None = None
    zip_postal_code: str | None = None
    phone_number: str | None = None
    fax_number: str | None = None
    created_on_utc: datetime | None = None

    def postal_key(self) -> PostalKey:
        """All fields taking part in structural equality (creation time excluded)."""
        return (
            _norm(self.first_name),
            _norm(self.last_name),
            _norm(self.email),
            _norm(self.company),
            _norm(self.country_id),
            _norm(self.state_province_id),
            _norm(self.city),
            _norm(self.address1),
            _norm(self.address2),
            _norm(self.zip_postal_code),
            _norm(self.phone_number),
            _norm(self.fax_number),
        )

    def same_as(self, other: Address) -> bool:
        return self.postal_key() == other.postal_key()


@dataclass(eq=False, kw_only=True)
class CustomerRole(Entity):
    ENTITY_TYPE: ClassVar[EntityType] = EntityType.CUSTOMER_ROLE

    name: str
    system_name: str | None = None
    active: bool = True
    is_system_role: bool = False


@dataclass(eq=False, kw_only=True)
class Customer(Entity):
    ENTITY_TYPE: ClassVar[EntityType] = EntityType.CUSTOMER

    customer_guid: UUID = field(default_factory=uuid4)
    username: str | None = None
    email: str | None = None
    password: str | None = None
    password_format: PasswordFormat = PasswordFormat.CLEAR
    password_salt: str | None = None
    admin_comment: str | None = None
    is_tax_exempt: bool = False
    affiliate_id: int = 0
    active: bool = False
    is_system_account: bool = False
    system_name: str | None = None
    last_ip_address: str | None = None
    created_on_utc: datetime | None = None
    last_login_date_utc: datetime | None = None
    last_activity_date_utc: datetime | None = None

    billing_address: Address | None = field(default=None, repr=False)
    shipping_address: Address | None = field(default=None, repr=False)

    _addresses: list[Address] = field(default_factory=list["Address"], repr=False)
    _roles: list[CustomerRole] = field(default_factory=list["CustomerRole"], repr=False)

    @property
    def addresses(self) -> tuple[Address, ...]:
        return tuple(self._addresses)

    @property
    def roles(self) -> tuple[CustomerRole, ...]:
        return tuple(self._roles)

    def has_role(self, system_name: str) -> bool:
        return any(role.system_name == system_name for role in self._roles)

    def add_role(self, role: CustomerRole) -> None:
        if not self.has_role(role.system_name or ""):
            self._roles.append(role)

    def remove_role(self, role: CustomerRole) -> None:
        for existing in list(self._roles):
            if existing.system_name == role.system_name:
                self._roles.remove(existing)

    def find_address(self, candidate: Address) -> Address | None:
        """Return an owned address structurally equal to ``candidate``."""
        for address in self._addresses:
            if address.same_as(candidate):
                return address
        return None

    def add_address(self, address: Address) -> Address:
        """Attach ``address`` unless an equal one is already owned; return the owned one."""
        existing = self.find_address(address)
        if existing is not None:
            return existing
        self._addresses.append(address)
        return address
