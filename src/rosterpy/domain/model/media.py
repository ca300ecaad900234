"""Binary media assets (customer avatars)."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import ClassVar

from rosterpy.domain.model.base import Entity
from rosterpy.domain.model.enums import EntityType


@dataclass(eq=False, kw_only=True)
class MediaAsset(Entity):
    ENTITY_TYPE: ClassVar[EntityType] = EntityType.MEDIA_ASSET

    binary: bytes = field(repr=False)
    mime_type: str
    seo_filename: str | None = None
    digest: str
