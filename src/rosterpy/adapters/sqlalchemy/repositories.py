"""Repository implementations backed by SQLAlchemy sessions."""

from __future__ import annotations

import hashlib
from datetime import date, datetime
from enum import Enum
from typing import TYPE_CHECKING, cast

from sqlalchemy import func, select

from rosterpy.adapters.sqlalchemy.mappings import (
    affiliate_table,
    country_table,
    customer_role_table,
    customer_table,
    generic_attribute_table,
    state_province_table,
)
from rosterpy.domain.model import (
    Country,
    Customer,
    CustomerRole,
    GenericAttribute,
    MediaAsset,
    StateProvince,
)

if TYPE_CHECKING:
    from collections.abc import Sequence
    from uuid import UUID

    from sqlalchemy.orm import Session

# leading bytes of the image formats accepted as avatars
_IMAGE_SIGNATURES: tuple[tuple[bytes, str], ...] = (
    (b"\x89PNG\r\n\x1a\n", "image/png"),
    (b"\xff\xd8\xff", "image/jpeg"),
    (b"GIF87a", "image/gif"),
    (b"GIF89a", "image/gif"),
    (b"BM", "image/bmp"),
)


def sniff_image_type(binary: bytes) -> str | None:
    for signature, mime_type in _IMAGE_SIGNATURES:
        if binary.startswith(signature):
            return mime_type
    if binary[:4] == b"RIFF" and binary[8:12] == b"WEBP":
        return "image/webp"
    return None


def content_digest(binary: bytes) -> str:
    return hashlib.sha256(binary).hexdigest()


class SqlAlchemyCustomerRepository:
    def __init__(self, session: Session) -> None:
        self.session = session

    def add(self, entity: Customer) -> None:
        self.session.add(entity)

    def update(self, entity: Customer) -> None:
        # attaches entities loaded by an earlier session
        self.session.add(entity)

    def get_by_id(self, customer_id: int) -> Customer | None:
        return self.session.get(Customer, customer_id)

    def get_by_guid(self, customer_guid: UUID) -> Customer | None:
        stmt = select(Customer).where(customer_table.c.customer_guid == customer_guid).limit(1)
        return self.session.execute(stmt).scalars().first()

    def get_by_email(self, email: str) -> Customer | None:
        stmt = (
            select(Customer)
            .where(func.lower(customer_table.c.email) == email.lower())
            .order_by(customer_table.c.id)
            .limit(1)
        )
        return self.session.execute(stmt).scalars().first()

    def get_by_username(self, username: str) -> Customer | None:
        stmt = (
            select(Customer)
            .where(func.lower(customer_table.c.username) == username.lower())
            .order_by(customer_table.c.id)
            .limit(1)
        )
        return self.session.execute(stmt).scalars().first()

    def load_roles(self, entity: Customer) -> None:
        _ = entity.roles


class SqlAlchemyCustomerRoleRepository:
    def __init__(self, session: Session) -> None:
        self.session = session

    def list_all(self, *, include_hidden: bool = True) -> Sequence[CustomerRole]:
        stmt = select(CustomerRole).order_by(customer_role_table.c.id)
        if not include_hidden:
            stmt = stmt.where(customer_role_table.c.active.is_(True))
        return self.session.execute(stmt).scalars().all()


class SqlAlchemyAffiliateRepository:
    def __init__(self, session: Session) -> None:
        self.session = session

    def list_ids(self, *, include_hidden: bool = True) -> Sequence[int]:
        stmt = select(affiliate_table.c.id).where(affiliate_table.c.deleted.is_(False))
        if not include_hidden:
            stmt = stmt.where(affiliate_table.c.active.is_(True))
        return self.session.execute(stmt).scalars().all()


class SqlAlchemyCountryRepository:
    def __init__(self, session: Session) -> None:
        self.session = session

    def list_all(self, *, include_hidden: bool = True) -> Sequence[Country]:
        stmt = select(Country).order_by(country_table.c.id)
        if not include_hidden:
            stmt = stmt.where(country_table.c.published.is_(True))
        return self.session.execute(stmt).scalars().all()


class SqlAlchemyStateProvinceRepository:
    def __init__(self, session: Session) -> None:
        self.session = session

    def list_all(self, *, include_hidden: bool = True) -> Sequence[StateProvince]:
        stmt = select(StateProvince).order_by(state_province_table.c.id)
        if not include_hidden:
            stmt = stmt.where(state_province_table.c.published.is_(True))
        return self.session.execute(stmt).scalars().all()


class SqlAlchemyGenericAttributeRepository:
    """One row per (entity, key group, key); empty values delete the row."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def values_for_key(self, key: str, key_group: str) -> Sequence[str]:
        stmt = (
            select(generic_attribute_table.c.value)
            .where(generic_attribute_table.c.key == key)
            .where(generic_attribute_table.c.key_group == key_group)
        )
        return self.session.execute(stmt).scalars().all()

    def get_value(self, entity_id: int, key: str, key_group: str) -> str | None:
        existing = self._find(entity_id, key, key_group)
        return existing.value if existing is not None else None

    def save(self, entity_id: int, key: str, key_group: str, value: object | None) -> None:
        text = _to_text(value)
        existing = self._find(entity_id, key, key_group)
        if not text:
            if existing is not None:
                self.session.delete(existing)
            return
        if existing is not None:
            existing.value = text
            return
        self.session.add(
            GenericAttribute(entity_id=entity_id, key_group=key_group, key=key, value=text)
        )

    def _find(self, entity_id: int, key: str, key_group: str) -> GenericAttribute | None:
        stmt = (
            select(GenericAttribute)
            .where(generic_attribute_table.c.entity_id == entity_id)
            .where(generic_attribute_table.c.key_group == key_group)
            .where(generic_attribute_table.c.key == key)
            .limit(1)
        )
        return self.session.execute(stmt).scalars().first()


class SqlAlchemyMediaStore:
    """Avatar binaries, deduplicated by SHA-256 digest."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def get(self, asset_id: int) -> MediaAsset | None:
        return self.session.get(MediaAsset, asset_id)

    def validate(self, binary: bytes, mime_type: str | None) -> bytes:
        _ = mime_type
        if not binary or sniff_image_type(binary) is None:
            return b""
        return binary

    def find_equal(self, binary: bytes, candidates: Sequence[MediaAsset]) -> MediaAsset | None:
        digest = content_digest(binary)
        for candidate in candidates:
            if candidate.digest == digest:
                return candidate
        return None

    def insert(self, binary: bytes, mime_type: str, seo_filename: str | None) -> MediaAsset:
        asset = MediaAsset(
            binary=binary,
            mime_type=sniff_image_type(binary) or mime_type,
            seo_filename=seo_filename or None,
            digest=content_digest(binary),
        )
        self.session.add(asset)
        # the caller links the generated id right away
        self.session.flush([asset])
        return asset


def _to_text(value: object | None) -> str | None:
    if value is None:
        return None
    if isinstance(value, Enum):
        return str(cast("object", value.value))
    if isinstance(value, datetime | date):
        return value.isoformat()
    return str(value)


if TYPE_CHECKING:
    from rosterpy.domain.ports import (
        AffiliateRepository,
        CountryRepository,
        CustomerRepository,
        CustomerRoleRepository,
        GenericAttributeRepository,
        MediaStore,
        StateProvinceRepository,
    )

    _session_stub = cast("Session", object())
    _customer_repo: CustomerRepository = SqlAlchemyCustomerRepository(_session_stub)
    _role_repo: CustomerRoleRepository = SqlAlchemyCustomerRoleRepository(_session_stub)
    _affiliate_repo: AffiliateRepository = SqlAlchemyAffiliateRepository(_session_stub)
    _country_repo: CountryRepository = SqlAlchemyCountryRepository(_session_stub)
    _state_repo: StateProvinceRepository = SqlAlchemyStateProvinceRepository(_session_stub)
    _attribute_repo: GenericAttributeRepository = SqlAlchemyGenericAttributeRepository(
        _session_stub
    )
    _media_store: MediaStore = SqlAlchemyMediaStore(_session_stub)
