"""HTTP download service used by the avatar import."""

from __future__ import annotations

import asyncio
import logging
import mimetypes
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

import httpx

from rosterpy.adapters.http_resilience import ResilientClient
from rosterpy.config.download import DownloadConfig, get_download_config

if TYPE_CHECKING:
    from collections.abc import Callable, Sequence

    from rosterpy.config.http_resilience import ResilienceConfig
    from rosterpy.domain.ports import DownloadItem

log = logging.getLogger(__name__)


class DownloadError(RuntimeError):
    """Raised when a file cannot be fetched or written."""

    def __init__(self, message: str, *, url: str | None = None) -> None:
        super().__init__(message)
        self.url = url


def _default_client_factory(config: ResilienceConfig) -> ResilientClient:
    return ResilientClient(config)


@dataclass(slots=True)
class HttpFileDownloader:
    """Fetch every item concurrently and block until all of them finished.

    Failures never escape: the item is marked unsuccessful and carries the
    error message.
    """

    config: DownloadConfig = field(default_factory=get_download_config)
    client_factory: Callable[[ResilienceConfig], ResilientClient] = field(
        default=_default_client_factory
    )

    def __call__(self, items: Sequence[DownloadItem]) -> None:
        pending = [item for item in items if item.url]
        if not pending:
            return
        asyncio.run(self._download_all(pending))

    async def _download_all(self, items: Sequence[DownloadItem]) -> None:
        semaphore = asyncio.Semaphore(self.config.max_concurrent)
        async with self.client_factory(self.config.resilience) as client:

            async def guarded(item: DownloadItem) -> None:
                async with semaphore:
                    await self._download_one(client, item)

            await asyncio.gather(*(guarded(item) for item in items))

    async def _download_one(self, client: ResilientClient, item: DownloadItem) -> None:
        try:
            content, content_type = await self._fetch(client, item)
            item.path.parent.mkdir(parents=True, exist_ok=True)
            await asyncio.to_thread(item.path.write_bytes, content)
        except (DownloadError, OSError) as exc:
            log.warning("Download of %s failed: %s", item.url, exc)
            item.success = False
            item.error = str(exc)
            return
        item.success = True
        item.error = None
        if content_type:
            item.mime_type = content_type
        elif item.mime_type is None:
            item.mime_type = mimetypes.guess_type(item.path.name)[0]
        log.debug("Downloaded %s to %s (%d bytes)", item.url, item.path, len(content))

    @staticmethod
    async def _fetch(client: ResilientClient, item: DownloadItem) -> tuple[bytes, str | None]:
        url = item.url or ""
        try:
            response = await client.get(url)
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            raise DownloadError(
                f"HTTP {exc.response.status_code} for {url}", url=url
            ) from exc
        except httpx.HTTPError as exc:
            raise DownloadError(f"{type(exc).__name__}: {exc}", url=url) from exc
        if not response.content:
            raise DownloadError(f"Empty response body for {url}", url=url)
        content_type = response.headers.get("content-type")
        mime_type = content_type.split(";", 1)[0].strip() if content_type else None
        return response.content, mime_type or None


if TYPE_CHECKING:
    from rosterpy.domain.ports import FileDownloader

    _downloader_check: FileDownloader = HttpFileDownloader()
