"""Per-run reference snapshots: country/state codes, affiliates, customer numbers."""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import TYPE_CHECKING

from rosterpy.domain.model import CUSTOMER_ATTRIBUTE_GROUP, CustomerAttribute

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping

    from rosterpy.domain.ports import ImportRepositories


@dataclass(frozen=True, slots=True)
class CountryCodes:
    two_letter: str | None
    three_letter: str | None


@dataclass(frozen=True, slots=True)
class StateRef:
    country_id: int
    abbreviation: str | None


@dataclass(frozen=True, slots=True)
class LookupTables:
    """Immutable reference data shared by every phase of a run."""

    countries: Mapping[int, CountryCodes] = field(
        default_factory=lambda: MappingProxyType[int, CountryCodes]({})
    )
    states: Mapping[int, StateRef] = field(
        default_factory=lambda: MappingProxyType[int, StateRef]({})
    )
    affiliate_ids: frozenset[int] = frozenset()

    def country_code_to_id(self, code: str | None) -> int | None:
        """Resolve a 2- or 3-letter ISO code; unmatched or ambiguous codes give ``None``."""
        if not code:
            return None
        needle = code.strip().casefold()
        if len(needle) == 2:
            matches = [
                country_id
                for country_id, codes in self.countries.items()
                if codes.two_letter and codes.two_letter.casefold() == needle
            ]
        elif len(needle) == 3:
            matches = [
                country_id
                for country_id, codes in self.countries.items()
                if codes.three_letter and codes.three_letter.casefold() == needle
            ]
        else:
            return None
        return matches[0] if len(matches) == 1 else None

    def state_abbreviation_to_id(
        self, country_id: int | None, abbreviation: str | None
    ) -> int | None:
        if country_id is None or not abbreviation:
            return None
        needle = abbreviation.strip().casefold()
        matches = [
            state_id
            for state_id, state in self.states.items()
            if state.country_id == country_id
            and state.abbreviation
            and state.abbreviation.casefold() == needle
        ]
        return matches[0] if len(matches) == 1 else None

    def is_known_affiliate(self, affiliate_id: int) -> bool:
        return affiliate_id > 0 and affiliate_id in self.affiliate_ids


class CustomerNumberRegistry:
    """Case-insensitive, append-only set of customer numbers assigned so far."""

    __slots__ = ("_numbers",)

    def __init__(self, numbers: Iterable[str] = ()) -> None:
        self._numbers: set[str] = {number.casefold() for number in numbers if number}

    def __contains__(self, number: object) -> bool:
        return isinstance(number, str) and number.casefold() in self._numbers

    def __len__(self) -> int:
        return len(self._numbers)

    def claim(self, number: str) -> None:
        if number:
            self._numbers.add(number.casefold())


def build_lookup_tables(repositories: ImportRepositories) -> LookupTables:
    countries = {
        country.id: CountryCodes(country.two_letter_iso_code, country.three_letter_iso_code)
        for country in repositories.countries.list_all(include_hidden=True)
        if country.id is not None
    }
    states = {
        state.id: StateRef(state.country_id, state.abbreviation)
        for state in repositories.state_provinces.list_all(include_hidden=True)
        if state.id is not None
    }
    return LookupTables(
        countries=MappingProxyType(countries),
        states=MappingProxyType(states),
        affiliate_ids=frozenset(repositories.affiliates.list_ids(include_hidden=True)),
    )


def load_customer_numbers(repositories: ImportRepositories) -> CustomerNumberRegistry:
    return CustomerNumberRegistry(
        repositories.attributes.values_for_key(
            CustomerAttribute.CUSTOMER_NUMBER, CUSTOMER_ATTRIBUTE_GROUP
        )
    )
