"""Avatar import: resolve an image reference, fetch it and store it once."""

from __future__ import annotations

import logging
import mimetypes
import re
import unicodedata
from pathlib import Path, PurePosixPath
from typing import TYPE_CHECKING
from urllib.parse import unquote, urlsplit

from rosterpy.domain.model import CUSTOMER_ATTRIBUTE_GROUP, CustomerAttribute
from rosterpy.domain.ports import DownloadItem

if TYPE_CHECKING:
    from collections.abc import Mapping

    from rosterpy.config.import_settings import DataExchangeSettings
    from rosterpy.domain.model import MediaAsset
    from rosterpy.domain.ports import FileDownloader, ImportRepositories

    from .context import ImportContext
    from .row import ImportRow

log = logging.getLogger(__name__)

AVATAR_COLUMN = "AvatarPictureUrl"
EQUAL_IMAGE_FOUND = "Found equal image in data store. Skipping field."
INVALID_IMAGE = "Image is empty or not a supported format. Skipping field."
DOWNLOAD_FAILED = "Download of an image failed."

_NON_ALNUM = re.compile(r"[^a-z0-9]+")
_WEB_SCHEMES = ("http", "https")


def seo_name(text: str | None) -> str:
    """ASCII, lower-case slug: ``"Émile Zola"`` becomes ``"emile-zola"``."""
    if not text:
        return ""
    ascii_text = unicodedata.normalize("NFKD", text).encode("ascii", "ignore").decode("ascii")
    return _NON_ALNUM.sub("-", ascii_text.lower()).strip("-")


def create_download_item(
    url_or_path: str,
    name: str,
    display_order: int,
    *,
    folders: DataExchangeSettings,
    downloaded_urls: Mapping[str, Path],
) -> DownloadItem | None:
    """Turn a URL or file path into a download descriptor.

    Returns ``None`` when the reference cannot be resolved (malformed, or no
    target folder).
    Local files and URLs downloaded earlier in the run come back pre-marked.
    """

    reference = url_or_path.strip()
    if not reference:
        return None
    stem = name or "avatar"

    try:
        parts = urlsplit(reference)
    except ValueError:
        return None
    if parts.scheme.lower() in _WEB_SCHEMES and parts.netloc:
        file_name = PurePosixPath(unquote(parts.path)).name
        mime_type = mimetypes.guess_type(file_name)[0] if file_name else None
        cached = downloaded_urls.get(reference)
        if cached is not None:
            return DownloadItem(
                path=cached,
                url=reference,
                file_name=cached.name,
                mime_type=mime_type,
                display_order=display_order,
                success=True,
            )
        if folders.image_download_folder is None:
            return None
        suffix = PurePosixPath(file_name).suffix.lower()
        target = folders.image_download_folder / f"{stem}-{display_order}{suffix}"
        return DownloadItem(
            path=target,
            url=reference,
            file_name=target.name,
            mime_type=mime_type,
            display_order=display_order,
        )

    try:
        path = Path(reference).expanduser()
        if not path.is_absolute():
            if folders.image_import_folder is None:
                return None
            path = folders.image_import_folder / path
        exists = path.is_file()
    except (OSError, ValueError, RuntimeError):
        return None
    return DownloadItem(
        path=path,
        file_name=path.name,
        mime_type=mimetypes.guess_type(path.name)[0],
        display_order=display_order,
        success=exists,
        error=None if exists else f"File not found: {path}",
    )


class AvatarImporter:
    """Fetch, validate and deduplicate a customer's avatar, then link it."""

    def __init__(self, downloader: FileDownloader) -> None:
        self._downloader = downloader

    def import_avatar(
        self, row: ImportRow, *, context: ImportContext, repositories: ImportRepositories
    ) -> None:
        url_or_path = row.get_str(AVATAR_COLUMN)
        if not url_or_path:
            return
        customer = row.require_entity()
        if customer.id is None:
            return

        item = create_download_item(
            url_or_path,
            seo_name(row.display_name),
            1,
            folders=context.settings.data_exchange,
            downloaded_urls=context.downloaded_urls,
        )
        if item is None:
            log.debug("Unresolvable avatar reference %r", url_or_path)
            return

        if item.url and item.success is None:
            self._downloader([item])

        if not item.success:
            _report_failure(row, context, item.error)
            return
        try:
            binary = item.path.read_bytes()
        except OSError as exc:
            _report_failure(row, context, str(exc))
            return
        if item.url:
            context.downloaded_urls[item.url] = item.path

        if not binary:
            return

        media = repositories.media
        attributes = repositories.attributes
        current = _current_avatars(customer.id, repositories)
        normalized = media.validate(binary, item.mime_type)
        if not normalized:
            context.result.add_info(INVALID_IMAGE, row.row_info(), AVATAR_COLUMN)
            return
        if media.find_equal(normalized, current) is not None:
            context.result.add_info(EQUAL_IMAGE_FOUND, row.row_info(), AVATAR_COLUMN)
            return

        asset = media.insert(
            normalized, item.mime_type or "application/octet-stream", seo_name(row.display_name)
        )
        attributes.save(
            customer.id, CustomerAttribute.AVATAR_PICTURE_ID, CUSTOMER_ATTRIBUTE_GROUP, asset.id
        )


def _report_failure(row: ImportRow, context: ImportContext, error: str | None) -> None:
    message = f"{DOWNLOAD_FAILED} {error}" if error else DOWNLOAD_FAILED
    context.result.add_info(message, row.row_info(), AVATAR_COLUMN)


def _current_avatars(customer_id: int, repositories: ImportRepositories) -> list[MediaAsset]:
    raw = repositories.attributes.get_value(
        customer_id, CustomerAttribute.AVATAR_PICTURE_ID, CUSTOMER_ATTRIBUTE_GROUP
    )
    if not raw or not raw.strip().isdigit():
        return []
    asset = repositories.media.get(int(raw))
    return [asset] if asset is not None else []
