"""Phase 3: merge billing/shipping address columns into the customer."""

from __future__ import annotations

from typing import TYPE_CHECKING

from rosterpy.domain.model import Address, AddressRole

from .phases import GuardedPhase, PhaseOutcome

if TYPE_CHECKING:
    from rosterpy.domain.model import Customer
    from rosterpy.domain.ports import ImportUnitOfWork

    from .context import ImportContext
    from .row import ImportRow


def address_columns(role: AddressRole) -> tuple[str, ...]:
    prefix = role.value
    return tuple(
        f"{prefix}{suffix}"
        for suffix in (
            "FirstName",
            "LastName",
            "Email",
            "Company",
            "CountryCode",
            "StateAbbreviation",
            "City",
            "Address1",
            "Address2",
            "ZipPostalCode",
            "PhoneNumber",
            "FaxNumber",
        )
    )


def anchor_columns() -> tuple[str, ...]:
    """Columns whose presence enables the address phase."""
    return tuple(f"{role.value}LastName" for role in AddressRole)


def build_address(row: ImportRow, role: AddressRole, context: ImportContext) -> Address | None:
    """Candidate address for ``role``, or ``None`` when its last name is empty."""

    prefix = role.value
    last_name = row.get_str(f"{prefix}LastName")
    if not last_name:
        return None
    lookups = context.lookups
    country_id = lookups.country_code_to_id(row.get_str(f"{prefix}CountryCode"))
    state_id = lookups.state_abbreviation_to_id(
        country_id, row.get_str(f"{prefix}StateAbbreviation")
    )
    return Address(
        first_name=row.get_str(f"{prefix}FirstName"),
        last_name=last_name,
        email=row.get_str(f"{prefix}Email"),
        company=row.get_str(f"{prefix}Company"),
        country_id=country_id,
        state_province_id=state_id,
        city=row.get_str(f"{prefix}City"),
        address1=row.get_str(f"{prefix}Address1"),
        address2=row.get_str(f"{prefix}Address2"),
        zip_postal_code=row.get_str(f"{prefix}ZipPostalCode"),
        phone_number=row.get_str(f"{prefix}PhoneNumber"),
        fax_number=row.get_str(f"{prefix}FaxNumber"),
        created_on_utc=context.utc_now,
    )


def merge_address(customer: Customer, candidate: Address, role: AddressRole) -> Address:
    """Reuse an equal owned address or attach ``candidate``, then bind it to ``role``."""

    address = customer.add_address(candidate)
    if role is AddressRole.BILL_TO:
        customer.billing_address = address
    else:
        customer.shipping_address = address
    return address


class AddressPhase(GuardedPhase):
    name = "ProcessAddresses"

    def process(
        self, rows: tuple[ImportRow, ...], *, context: ImportContext, uow: ImportUnitOfWork
    ) -> PhaseOutcome:
        customers = uow.repositories.customers
        affected = 0
        for row in rows:
            customer = row.require_entity()
            for role in AddressRole:
                candidate = build_address(row, role, context)
                if candidate is not None:
                    merge_address(customer, candidate, role)
            customers.update(customer)
            affected += uow.commit()
        return PhaseOutcome(phase=self.name, survivors=rows, affected=affected)
