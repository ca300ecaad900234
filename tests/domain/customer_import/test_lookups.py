from __future__ import annotations

from rosterpy.domain.customer_import import (
    CustomerNumberRegistry,
    LookupTables,
    build_lookup_tables,
)
from rosterpy.domain.customer_import.lookups import load_customer_numbers
from rosterpy.domain.model import Affiliate, Country
from tests.helpers.customers import FakeDatabase, FakeImportUnitOfWork


def _lookups(database: FakeDatabase) -> LookupTables:
    return build_lookup_tables(FakeImportUnitOfWork(database).repositories)


def test_country_codes_resolve_by_two_or_three_letters() -> None:
    lookups = _lookups(FakeDatabase())

    assert lookups.country_code_to_id("de") == 1
    assert lookups.country_code_to_id("USA") == 2
    assert lookups.country_code_to_id("XX") is None
    assert lookups.country_code_to_id("DEUT") is None
    assert lookups.country_code_to_id(None) is None


def test_ambiguous_country_code_resolves_to_none() -> None:
    database = FakeDatabase()
    database.countries.append(
        Country(id=3, name="Deutschland", two_letter_iso_code="DE", three_letter_iso_code="DDD")
    )

    lookups = _lookups(database)

    assert lookups.country_code_to_id("DE") is None
    assert lookups.country_code_to_id("DDD") == 3


def test_state_abbreviation_requires_country() -> None:
    lookups = _lookups(FakeDatabase())

    assert lookups.state_abbreviation_to_id(2, "ny") == 10
    assert lookups.state_abbreviation_to_id(1, "NY") is None
    assert lookups.state_abbreviation_to_id(None, "NY") is None


def test_known_affiliates_exclude_deleted_and_zero() -> None:
    database = FakeDatabase()
    database.affiliates.extend(
        [Affiliate(id=5), Affiliate(id=6, active=False), Affiliate(id=7, deleted=True)]
    )

    lookups = _lookups(database)

    assert lookups.is_known_affiliate(5)
    assert lookups.is_known_affiliate(6)
    assert not lookups.is_known_affiliate(7)
    assert not lookups.is_known_affiliate(0)


def test_customer_number_registry_is_case_insensitive() -> None:
    registry = CustomerNumberRegistry(["C-1"])

    registry.claim("c-2")

    assert "c-1" in registry
    assert "C-2" in registry
    assert "C-3" not in registry
    assert len(registry) == 2


def test_load_customer_numbers_reads_stored_attributes() -> None:
    database = FakeDatabase()
    database.attributes[(1, "Customer", "CustomerNumber")] = "A-1"
    database.attributes[(2, "Customer", "CustomerNumber")] = "A-2"
    database.attributes[(2, "Customer", "FirstName")] = "Ann"

    registry = load_customer_numbers(FakeImportUnitOfWork(database).repositories)

    assert len(registry) == 2
    assert "a-2" in registry
