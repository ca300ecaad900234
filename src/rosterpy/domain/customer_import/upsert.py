"""Phase 1: resolve, create or update customers and commit them per batch."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from rosterpy.domain.model import Customer, RoleSystemName

from .field_mapping import CUSTOMER_FIELD_MAPPINGS, PASSWORD_COLUMNS
from .identity import find_existing_customer
from .phases import GuardedPhase, PhaseOutcome

if TYPE_CHECKING:
    from collections.abc import Mapping

    from rosterpy.domain.model import CustomerRole
    from rosterpy.domain.ports import EventPublisher, ImportRepositories, ImportUnitOfWork

    from .context import ImportContext
    from .row import ImportRow

log = logging.getLogger(__name__)

ROLE_COLUMNS: tuple[tuple[str, RoleSystemName], ...] = (
    ("IsGuest", RoleSystemName.GUESTS),
    ("IsRegistered", RoleSystemName.REGISTERED),
    ("IsForumModerator", RoleSystemName.FORUM_MODERATORS),
)

SYSTEM_ACCOUNT_SKIPPED = "Skipped system account."
UNKNOWN_CUSTOMER_SKIPPED = "Skipped unknown customer (update only)."
PASSWORD_IGNORED = "Security. Ignored password of current customer (who started this import)."
ADMIN_ROLE_IGNORED = "Security. Ignored administrator role."


class UpsertPhase(GuardedPhase):
    """Insert new customers and update matched ones; one commit for the batch.

    Only the last inserted and the last updated customer of a batch are
    published to the event sink.
    """

    name = "ProcessCustomers"

    def __init__(self, events: EventPublisher) -> None:
        self._events = events

    def process(
        self, rows: tuple[ImportRow, ...], *, context: ImportContext, uow: ImportUnitOfWork
    ) -> PhaseOutcome:
        repositories = uow.repositories
        roles = {
            role.system_name: role
            for role in repositories.roles.list_all(include_hidden=True)
            if role.system_name
        }

        last_inserted: Customer | None = None
        last_updated: Customer | None = None
        for row in rows:
            if not self._prepare_row(row, context=context, repositories=repositories, roles=roles):
                continue
            customer = row.require_entity()
            if row.is_new:
                repositories.customers.add(customer)
                last_inserted = customer
            else:
                repositories.customers.update(customer)
                last_updated = customer

        affected = uow.commit()
        survivors = tuple(row for row in rows if row.is_persisted)
        self._notify(last_inserted, last_updated, context)
        return PhaseOutcome(phase=self.name, survivors=survivors, affected=affected)

    def survivors_after_failure(self, rows: tuple[ImportRow, ...]) -> tuple[ImportRow, ...]:
        return ()

    def _prepare_row(
        self,
        row: ImportRow,
        *,
        context: ImportContext,
        repositories: ImportRepositories,
        roles: Mapping[str, CustomerRole],
    ) -> bool:
        result = context.result
        if row.get_bool("IsSystemAccount"):
            self._skip(row, context)
            return False

        customer = find_existing_customer(row, context.key_fields, repositories.customers)
        if customer is None:
            if context.update_only:
                row.reject()
                result.skipped_records += 1
                result.add_info(UNKNOWN_CUSTOMER_SKIPPED, row.row_info())
                return False
            customer = Customer(active=True, affiliate_id=0)
        elif customer.is_system_account:
            self._skip(row, context)
            return False
        else:
            repositories.customers.load_roles(customer)

        display_name = row.get_str("Email") or customer.email
        if display_name is None:
            display_name = str(customer.id) if customer.id is not None else row.get_str("Id")
        row.initialize(customer, display_name)

        for mapping in CUSTOMER_FIELD_MAPPINGS:
            try:
                mapping.apply(row, customer, context)
            except (ValueError, TypeError, KeyError) as exc:
                result.add_warning(f"Conversion failed: {exc}", row.row_info(), mapping.column)

        if context.is_current_customer(row.get_str("Email")) and any(
            row.has(column) for column in PASSWORD_COLUMNS
        ):
            result.add_info(PASSWORD_IGNORED, row.row_info(), "Password")

        if row.get_bool("IsAdministrator"):
            result.add_info(ADMIN_ROLE_IGNORED, row.row_info(), "IsAdministrator")

        if row.has("AffiliateId"):
            affiliate_id = row.get_int("AffiliateId")
            if context.lookups.is_known_affiliate(affiliate_id):
                customer.affiliate_id = affiliate_id

        _sync_roles(row, customer, roles)
        return True

    @staticmethod
    def _skip(row: ImportRow, context: ImportContext) -> None:
        row.reject()
        context.result.skipped_records += 1
        context.result.add_info(SYSTEM_ACCOUNT_SKIPPED, row.row_info(), "IsSystemAccount")

    def _notify(
        self,
        last_inserted: Customer | None,
        last_updated: Customer | None,
        context: ImportContext,
    ) -> None:
        try:
            if last_inserted is not None:
                self._events.entity_inserted(last_inserted)
            if last_updated is not None:
                self._events.entity_updated(last_updated)
        except Exception as exc:  # noqa: BLE001
            context.result.add_warning(f"Change notification failed: {exc}")


def _sync_roles(row: ImportRow, customer: Customer, roles: Mapping[str, CustomerRole]) -> None:
    """Set membership per flag column; absent columns leave membership alone."""

    for column, system_name in ROLE_COLUMNS:
        if not row.has(column):
            continue
        role = roles.get(system_name)
        if role is None:
            log.debug("Role %s is not defined, ignoring %s", system_name, column)
            continue
        if row.get_bool(column):
            customer.add_role(role)
        else:
            customer.remove_role(role)
