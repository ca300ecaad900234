from __future__ import annotations

from datetime import date

from rosterpy.config import CustomerSettings
from rosterpy.domain.customer_import import (
    AttributePhase,
    CustomerNumberRegistry,
    build_lookup_tables,
)
from rosterpy.domain.model import CustomerAttribute, CustomerNumberMethod
from tests.helpers.customers import (
    FakeDatabase,
    FakeGenericAttributeRepository,
    FakeImportUnitOfWork,
    make_context,
    make_settings,
    persisted_row,
    stored_customer,
)


def test_core_and_enabled_attributes_are_saved() -> None:
    database = FakeDatabase()
    ann = stored_customer(database, email="ann@example.com")
    context = make_context()
    uow = FakeImportUnitOfWork(database)
    row = persisted_row(
        ann,
        FirstName="Ann",
        LastName="Lee",
        Gender="F",
        DateOfBirth=date(1990, 5, 17),
        City="Berlin",
    )

    outcome = AttributePhase().run([row], context=context, uow=uow)

    assert outcome.survivors == (row,)
    assert database.attribute(ann.id, "FirstName") == "Ann"
    assert database.attribute(ann.id, "LastName") == "Lee"
    assert database.attribute(ann.id, "Gender") == "F"
    assert database.attribute(ann.id, "DateOfBirth") == "1990-05-17"
    # city is disabled by default
    assert database.attribute(ann.id, "City") is None
    assert uow.commits == 1


def test_missing_core_attribute_clears_stored_value() -> None:
    database = FakeDatabase()
    ann = stored_customer(database, email="ann@example.com")
    customer_id = ann.id
    assert customer_id is not None
    database.attributes[(customer_id, "Customer", "LastName")] = "Lee"
    database.attributes[(customer_id, "Customer", "Company")] = "ACME"
    row = persisted_row(ann, FirstName="Ann")

    AttributePhase().run([row], context=make_context(), uow=FakeImportUnitOfWork(database))

    assert database.attribute(ann.id, "LastName") is None
    # gated attributes are left alone when their column is absent
    assert database.attribute(ann.id, "Company") == "ACME"


def test_country_and_state_codes_are_resolved() -> None:
    database = FakeDatabase()
    ann = stored_customer(database, email="ann@example.com")
    context = make_context()
    uow = FakeImportUnitOfWork(database)
    context.lookups = build_lookup_tables(uow.repositories)
    row = persisted_row(ann, CountryCode="US", StateAbbreviation="ny")

    AttributePhase().run([row], context=context, uow=uow)

    assert database.attribute(ann.id, "CountryId") == "2"
    assert database.attribute(ann.id, "StateProvinceId") == "10"


def test_manual_customer_numbers_stay_unique() -> None:
    database = FakeDatabase()
    first = stored_customer(database, email="a@example.com")
    second = stored_customer(database, email="b@example.com")
    settings = make_settings(
        customers=CustomerSettings(customer_number_method=CustomerNumberMethod.MANUALLY_SET)
    )
    context = make_context(settings=settings)
    context.customer_numbers = CustomerNumberRegistry(["K-0"])
    rows = [
        persisted_row(first, 1, CustomerNumber="K-1"),
        persisted_row(second, 2, CustomerNumber="k-1"),
    ]

    AttributePhase().run(rows, context=context, uow=FakeImportUnitOfWork(database))

    assert database.attribute(first.id, "CustomerNumber") == "K-1"
    assert database.attribute(second.id, "CustomerNumber") is None
    assert "K-1" in context.customer_numbers


def test_automatic_customer_number_uses_entity_id() -> None:
    database = FakeDatabase()
    ann = stored_customer(database, email="ann@example.com")
    settings = make_settings(
        customers=CustomerSettings(customer_number_method=CustomerNumberMethod.AUTOMATICALLY_SET)
    )
    context = make_context(settings=settings)

    AttributePhase().run(
        [persisted_row(ann, CustomerNumber="ignored")],
        context=context,
        uow=FakeImportUnitOfWork(database),
    )

    assert database.attribute(ann.id, CustomerAttribute.CUSTOMER_NUMBER) == str(ann.id)


def test_failure_stops_the_batch_but_hands_rows_on() -> None:
    database = FakeDatabase()
    first = stored_customer(database, email="a@example.com")
    second = stored_customer(database, email="b@example.com")
    third = stored_customer(database, email="c@example.com")
    uow = FakeImportUnitOfWork(
        database, attributes=FakeGenericAttributeRepository(database, fail_on_value="boom")
    )
    rows = [
        persisted_row(first, 1, FirstName="Ann"),
        persisted_row(second, 2, FirstName="boom"),
        persisted_row(third, 3, FirstName="Cid"),
    ]

    outcome = AttributePhase().run(rows, context=make_context(), uow=uow)

    assert outcome.failed
    assert outcome.survivors == tuple(rows)
    assert uow.rollbacks == 1
    assert database.attribute(first.id, "FirstName") == "Ann"
    assert database.attribute(third.id, "FirstName") is None
