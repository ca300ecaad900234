"""Port for fetching remote binaries."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Sequence
    from pathlib import Path


@dataclass(slots=True)
class DownloadItem:
    """Fetch descriptor; the downloader fills in ``success``, ``mime_type`` and ``error``."""

    path: Path
    url: str | None = None
    file_name: str | None = None
    mime_type: str | None = None
    display_order: int = 1
    success: bool | None = None
    error: str | None = None


@runtime_checkable
class FileDownloader(Protocol):
    """Callable port: download every item, blocking until all of them completed."""

    def __call__(self, items: Sequence[DownloadItem]) -> None: ...
