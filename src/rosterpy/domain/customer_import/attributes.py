"""Phase 2: project row values into the generic attribute store."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from rosterpy.domain.model import CUSTOMER_ATTRIBUTE_GROUP, CustomerAttribute, CustomerNumberMethod

from .phases import GuardedPhase, PhaseOutcome

if TYPE_CHECKING:
    from collections.abc import Callable

    from rosterpy.config.import_settings import ImportSettings
    from rosterpy.domain.ports import GenericAttributeRepository, ImportUnitOfWork

    from .avatar import AvatarImporter
    from .context import ImportContext
    from .row import ImportRow

log = logging.getLogger(__name__)

type SettingsGate = Callable[[ImportSettings], bool]

CORE_ATTRIBUTES: tuple[CustomerAttribute, ...] = (
    CustomerAttribute.FIRST_NAME,
    CustomerAttribute.LAST_NAME,
)

GATED_ATTRIBUTES: tuple[tuple[CustomerAttribute, SettingsGate], ...] = (
    (CustomerAttribute.TIME_ZONE_ID, lambda s: s.date_time.allow_customers_to_set_time_zone),
    (CustomerAttribute.GENDER, lambda s: s.customers.gender_enabled),
    (CustomerAttribute.DATE_OF_BIRTH, lambda s: s.customers.date_of_birth_enabled),
    (CustomerAttribute.COMPANY, lambda s: s.customers.company_enabled),
    (CustomerAttribute.STREET_ADDRESS, lambda s: s.customers.street_address_enabled),
    (CustomerAttribute.STREET_ADDRESS2, lambda s: s.customers.street_address2_enabled),
    (CustomerAttribute.ZIP_POSTAL_CODE, lambda s: s.customers.zip_postal_code_enabled),
    (CustomerAttribute.CITY, lambda s: s.customers.city_enabled),
    (CustomerAttribute.COUNTRY_ID, lambda s: s.customers.country_enabled),
    (
        CustomerAttribute.STATE_PROVINCE_ID,
        lambda s: s.customers.country_enabled and s.customers.state_province_enabled,
    ),
    (CustomerAttribute.PHONE, lambda s: s.customers.phone_enabled),
    (CustomerAttribute.FAX, lambda s: s.customers.fax_enabled),
    (CustomerAttribute.FORUM_POST_COUNT, lambda s: s.forums.forums_enabled),
    (
        CustomerAttribute.SIGNATURE,
        lambda s: s.forums.forums_enabled and s.forums.signatures_enabled,
    ),
)


class AttributePhase(GuardedPhase):
    """Save profile attributes, customer number and avatar; one commit per row.

    A failure abandons the remaining rows of the batch, but the rows are still
    handed on so the address phase runs for them.
    """

    name = "ProcessGenericAttributes"

    def __init__(self, avatars: AvatarImporter | None = None) -> None:
        self._avatars = avatars

    def process(
        self, rows: tuple[ImportRow, ...], *, context: ImportContext, uow: ImportUnitOfWork
    ) -> PhaseOutcome:
        affected = 0
        for row in rows:
            self._project_row(row, context=context, uow=uow)
            affected += uow.commit()
        return PhaseOutcome(phase=self.name, survivors=rows, affected=affected)

    def _project_row(self, row: ImportRow, *, context: ImportContext, uow: ImportUnitOfWork) -> None:
        customer_id = row.require_entity().id
        if customer_id is None:
            raise ValueError(f"Customer of row {row.position} has not been persisted")
        settings = context.settings
        attributes = uow.repositories.attributes

        def save(key: CustomerAttribute, value: object | None) -> None:
            attributes.save(customer_id, key, CUSTOMER_ATTRIBUTE_GROUP, value)

        for key in CORE_ATTRIBUTES:
            save(key, row.get(key))
        for key, enabled in GATED_ATTRIBUTES:
            if enabled(settings) and row.has(key):
                save(key, row.get(key))

        # resolved codes win over raw id columns
        country_id = context.lookups.country_code_to_id(row.get_str("CountryCode"))
        state_id = context.lookups.state_abbreviation_to_id(
            country_id, row.get_str("StateAbbreviation")
        )
        if country_id is not None:
            save(CustomerAttribute.COUNTRY_ID, country_id)
        if state_id is not None:
            save(CustomerAttribute.STATE_PROVINCE_ID, state_id)

        _assign_customer_number(row, customer_id, context=context, attributes=attributes)

        if self._avatars is not None and settings.customers.allow_customers_to_upload_avatars:
            self._avatars.import_avatar(row, context=context, repositories=uow.repositories)


def _assign_customer_number(
    row: ImportRow,
    customer_id: int,
    *,
    context: ImportContext,
    attributes: GenericAttributeRepository,
) -> None:
    method = context.settings.customers.customer_number_method
    if method is CustomerNumberMethod.AUTOMATICALLY_SET:
        number: str | None = str(customer_id)
    else:
        if not row.has(CustomerAttribute.CUSTOMER_NUMBER):
            return
        number = row.get_str(CustomerAttribute.CUSTOMER_NUMBER)

    if number and number in context.customer_numbers:
        log.debug("Customer number %s already assigned, keeping previous value", number)
        return
    attributes.save(
        customer_id, CustomerAttribute.CUSTOMER_NUMBER, CUSTOMER_ATTRIBUTE_GROUP, number
    )
    if number:
        context.customer_numbers.claim(number)
