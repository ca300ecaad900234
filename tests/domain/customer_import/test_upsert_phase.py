from __future__ import annotations

from rosterpy.domain.customer_import import ImportContext, UpsertPhase, build_lookup_tables
from rosterpy.domain.customer_import.upsert import (
    ADMIN_ROLE_IGNORED,
    PASSWORD_IGNORED,
    SYSTEM_ACCOUNT_SKIPPED,
    UNKNOWN_CUSTOMER_SKIPPED,
)
from rosterpy.domain.model import Affiliate, RoleSystemName
from tests.helpers.customers import (
    FakeCustomerRepository,
    FakeDatabase,
    FakeImportUnitOfWork,
    RecordingEventPublisher,
    make_context,
    make_row,
    stored_customer,
)


def _prepared(database: FakeDatabase, context: ImportContext) -> FakeImportUnitOfWork:
    uow = FakeImportUnitOfWork(database)
    context.lookups = build_lookup_tables(uow.repositories)
    return uow


def _messages(context: ImportContext) -> list[str]:
    return [message.message for message in context.result.messages]


def test_new_customer_is_inserted_with_roles() -> None:
    database = FakeDatabase()
    context = make_context()
    uow = _prepared(database, context)
    events = RecordingEventPublisher()
    row = make_row(Email="ann@example.com", IsGuest=True, Active=True)

    outcome = UpsertPhase(events).run([row], context=context, uow=uow)

    assert not outcome.failed
    assert outcome.survivors == (row,)
    assert row.is_new
    customer = row.require_entity()
    assert customer.id is not None
    assert customer.email == "ann@example.com"
    assert customer.has_role(RoleSystemName.GUESTS)
    assert customer.created_on_utc == context.utc_now
    assert events.inserted == [customer]
    assert events.updated == []


def test_matched_customer_is_updated_in_place() -> None:
    database = FakeDatabase()
    ann = stored_customer(database, email="ann@example.com", admin_comment="old")
    context = make_context()
    uow = _prepared(database, context)
    events = RecordingEventPublisher()
    row = make_row(Email="ANN@example.com", AdminComment="new")

    outcome = UpsertPhase(events).run([row], context=context, uow=uow)

    assert outcome.survivors == (row,)
    assert row.entity is ann
    assert not row.is_new
    assert ann.admin_comment == "new"
    assert ann.email == "ANN@example.com"
    assert events.updated == [ann]
    assert len(database.customers) == 1


def test_only_last_inserted_and_updated_are_published() -> None:
    database = FakeDatabase()
    stored_customer(database, email="old1@example.com")
    last_existing = stored_customer(database, email="old2@example.com")
    context = make_context()
    uow = _prepared(database, context)
    events = RecordingEventPublisher()
    rows = [
        make_row(1, Email="new1@example.com"),
        make_row(2, Email="old1@example.com"),
        make_row(3, Email="new2@example.com"),
        make_row(4, Email="old2@example.com"),
    ]

    UpsertPhase(events).run(rows, context=context, uow=uow)

    assert events.inserted == [rows[2].entity]
    assert events.updated == [last_existing]


def test_system_account_rows_are_skipped() -> None:
    database = FakeDatabase()
    stored_customer(database, email="search@example.com", is_system_account=True)
    context = make_context()
    uow = _prepared(database, context)
    rows = [
        make_row(1, Email="bot@example.com", IsSystemAccount=True),
        make_row(2, Email="search@example.com"),
    ]

    outcome = UpsertPhase(RecordingEventPublisher()).run(rows, context=context, uow=uow)

    assert outcome.survivors == ()
    assert context.result.skipped_records == 2
    assert _messages(context) == [SYSTEM_ACCOUNT_SKIPPED, SYSTEM_ACCOUNT_SKIPPED]
    assert len(database.customers) == 1


def test_update_only_skips_unknown_customers() -> None:
    database = FakeDatabase()
    context = make_context(update_only=True)
    uow = _prepared(database, context)
    row = make_row(Email="ghost@example.com")

    outcome = UpsertPhase(RecordingEventPublisher()).run([row], context=context, uow=uow)

    assert outcome.survivors == ()
    assert row.is_rejected
    assert context.result.skipped_records == 1
    assert database.customers == []
    assert _messages(context) == [UNKNOWN_CUSTOMER_SKIPPED]


def test_new_customer_without_email_is_named_by_id_column() -> None:
    database = FakeDatabase()
    context = make_context(key_field_names=["Id", "Username"])
    uow = _prepared(database, context)
    row = make_row(Id="9001", Username="ghost")

    UpsertPhase(RecordingEventPublisher()).run([row], context=context, uow=uow)

    assert row.is_new
    assert row.display_name == "9001"


def test_password_of_current_customer_is_ignored() -> None:
    database = FakeDatabase()
    admin = stored_customer(database, email="admin@example.com", password="secret")
    context = make_context(current_customer_email="admin@example.com")
    uow = _prepared(database, context)
    row = make_row(Email="admin@example.com", Password="hijacked")

    UpsertPhase(RecordingEventPublisher()).run([row], context=context, uow=uow)

    assert admin.password == "secret"
    assert PASSWORD_IGNORED in _messages(context)


def test_administrator_flag_is_never_granted() -> None:
    database = FakeDatabase()
    context = make_context()
    uow = _prepared(database, context)
    row = make_row(Email="eve@example.com", IsAdministrator=True)

    UpsertPhase(RecordingEventPublisher()).run([row], context=context, uow=uow)

    assert not row.require_entity().has_role(RoleSystemName.ADMINISTRATORS)
    assert ADMIN_ROLE_IGNORED in _messages(context)


def test_only_known_affiliates_are_assigned() -> None:
    database = FakeDatabase(affiliates=[Affiliate(id=5)])
    context = make_context()
    uow = _prepared(database, context)
    rows = [
        make_row(1, Email="a@example.com", AffiliateId=5),
        make_row(2, Email="b@example.com", AffiliateId=99),
    ]

    UpsertPhase(RecordingEventPublisher()).run(rows, context=context, uow=uow)

    assert rows[0].require_entity().affiliate_id == 5
    assert rows[1].require_entity().affiliate_id == 0


def test_role_flags_add_and_remove_membership() -> None:
    database = FakeDatabase()
    ann = stored_customer(database, email="ann@example.com")
    registered = next(r for r in database.roles if r.system_name == RoleSystemName.REGISTERED)
    guests = next(r for r in database.roles if r.system_name == RoleSystemName.GUESTS)
    ann.add_role(registered)
    ann.add_role(guests)
    context = make_context()
    uow = _prepared(database, context)
    row = make_row(Email="ann@example.com", IsRegistered=False, IsForumModerator="yes")

    UpsertPhase(RecordingEventPublisher()).run([row], context=context, uow=uow)

    assert not ann.has_role(RoleSystemName.REGISTERED)
    assert ann.has_role(RoleSystemName.FORUM_MODERATORS)
    # absent column keeps membership
    assert ann.has_role(RoleSystemName.GUESTS)


def test_conversion_failure_becomes_warning() -> None:
    database = FakeDatabase()
    context = make_context()
    uow = _prepared(database, context)
    row = make_row(Email="ann@example.com", LastLoginDateUtc="yesterday-ish")

    outcome = UpsertPhase(RecordingEventPublisher()).run([row], context=context, uow=uow)

    assert outcome.survivors == (row,)
    [warning] = context.result.warnings
    assert warning.message.startswith("Conversion failed")
    assert warning.field_name == "LastLoginDateUtc"


def test_store_failure_rolls_back_and_hands_on_nothing() -> None:
    database = FakeDatabase()
    context = make_context()
    uow = FakeImportUnitOfWork(
        database, customers=FakeCustomerRepository(database, fail_on_email="bad@example.com")
    )
    rows = [make_row(1, Email="good@example.com"), make_row(2, Email="bad@example.com")]

    outcome = UpsertPhase(RecordingEventPublisher()).run(rows, context=context, uow=uow)

    assert outcome.failed
    assert isinstance(outcome.error, RuntimeError)
    assert outcome.survivors == ()
    assert uow.rollbacks == 1
    assert database.customers == []


def test_notification_failure_becomes_warning() -> None:
    database = FakeDatabase()
    context = make_context()
    uow = _prepared(database, context)
    row = make_row(Email="ann@example.com")

    outcome = UpsertPhase(RecordingEventPublisher(fail=True)).run(
        [row], context=context, uow=uow
    )

    assert not outcome.failed
    assert outcome.survivors == (row,)
    assert [w.message for w in context.result.warnings] == [
        "Change notification failed: event sink unavailable"
    ]


def test_empty_batch_is_a_no_op() -> None:
    context = make_context()
    uow = FakeImportUnitOfWork(FakeDatabase())

    outcome = UpsertPhase(RecordingEventPublisher()).run([], context=context, uow=uow)

    assert outcome.survivors == ()
    assert uow.commits == 0
