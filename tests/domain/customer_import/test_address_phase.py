from __future__ import annotations

from rosterpy.domain.customer_import import (
    AddressPhase,
    ImportContext,
    build_address,
    build_lookup_tables,
    merge_address,
)
from rosterpy.domain.model import Address, AddressRole, Customer
from tests.helpers.customers import (
    FakeDatabase,
    FakeImportUnitOfWork,
    make_context,
    make_row,
    persisted_row,
    stored_customer,
)


def _context(database: FakeDatabase) -> ImportContext:
    context = make_context()
    context.lookups = build_lookup_tables(FakeImportUnitOfWork(database).repositories)
    return context


def test_build_address_resolves_codes() -> None:
    context = _context(FakeDatabase())
    row = make_row(
        BillToFirstName="Ann",
        BillToLastName="Lee",
        BillToCountryCode="USA",
        BillToStateAbbreviation="CA",
        BillToCity="Oakland",
    )

    address = build_address(row, AddressRole.BILL_TO, context)

    assert address is not None
    assert address.last_name == "Lee"
    assert address.country_id == 2
    assert address.state_province_id == 11
    assert address.created_on_utc == context.utc_now


def test_build_address_requires_last_name() -> None:
    context = _context(FakeDatabase())
    row = make_row(ShipToFirstName="Ann", ShipToLastName="  ", ShipToCity="Oakland")

    assert build_address(row, AddressRole.SHIP_TO, context) is None


def test_merge_reuses_equal_address() -> None:
    customer = Customer(id=1)
    owned = Address(last_name="Lee", city="Oakland", email=None)
    customer.add_address(owned)

    merged = merge_address(
        customer, Address(last_name="Lee", city="Oakland", email=""), AddressRole.SHIP_TO
    )

    assert merged is owned
    assert customer.addresses == (owned,)
    assert customer.shipping_address is owned
    assert customer.billing_address is None


def test_same_billing_and_shipping_share_one_address() -> None:
    database = FakeDatabase()
    ann = stored_customer(database, email="ann@example.com")
    context = _context(database)
    uow = FakeImportUnitOfWork(database)
    row = persisted_row(
        ann,
        BillToLastName="Lee",
        BillToCity="Berlin",
        ShipToLastName="Lee",
        ShipToCity="Berlin",
    )

    outcome = AddressPhase().run([row], context=context, uow=uow)

    assert not outcome.failed
    assert len(ann.addresses) == 1
    assert ann.billing_address is ann.shipping_address
    assert ann.billing_address is not None
    assert ann.billing_address.id is not None


def test_reimport_does_not_duplicate_addresses() -> None:
    database = FakeDatabase()
    ann = stored_customer(database, email="ann@example.com")
    context = _context(database)
    values = {"BillToLastName": "Lee", "BillToAddress1": "Main St 1"}

    for _ in range(2):
        AddressPhase().run(
            [persisted_row(ann, **values)], context=context, uow=FakeImportUnitOfWork(database)
        )

    assert len(ann.addresses) == 1


def test_row_without_last_names_leaves_addresses_untouched() -> None:
    database = FakeDatabase()
    ann = stored_customer(database, email="ann@example.com")
    context = _context(database)
    row = persisted_row(ann, BillToFirstName="Ann", BillToCity="Berlin")

    AddressPhase().run([row], context=context, uow=FakeImportUnitOfWork(database))

    assert ann.addresses == ()
    assert ann.billing_address is None
