"""Port for the binary media store."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Sequence

    from rosterpy.domain.model import MediaAsset


@runtime_checkable
class MediaStore(Protocol):
    def get(self, asset_id: int) -> MediaAsset | None: ...

    def validate(self, binary: bytes, mime_type: str | None) -> bytes:
        """Return the normalised binary, or empty bytes when it is not a usable image."""
        ...

    def find_equal(self, binary: bytes, candidates: Sequence[MediaAsset]) -> MediaAsset | None:
        """Return the candidate holding the same image as ``binary``, if any."""
        ...

    def insert(self, binary: bytes, mime_type: str, seo_filename: str | None) -> MediaAsset: ...
