"""Uploaded media files and their blob-store keys."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import PurePosixPath
from typing import TYPE_CHECKING
from urllib.parse import unquote

if TYPE_CHECKING:
    from datetime import datetime
    from uuid import UUID

    from radium.domain.model.enums import MediaBucket

DEFAULT_EXTENSION = "bin"


@dataclass(frozen=True, slots=True)
class MediaFile:
    """Raw upload as received from the submitting user. Content is stored as-is."""

    filename: str
    content: bytes
    content_type: str | None = None

    @property
    def extension(self) -> str:
        suffix = PurePosixPath(self.filename).suffix.lstrip(".").lower()
        return suffix or DEFAULT_EXTENSION

    @property
    def is_empty(self) -> bool:
        return not self.content


def media_key(owner_id: UUID, uploaded_at: datetime, extension: str) -> str:
    """Return ``{userId}-{timestamp}.{ext}`` with the timestamp in epoch milliseconds."""

    timestamp = int(uploaded_at.timestamp() * 1000)
    return f"{owner_id}-{timestamp}.{extension}"


def media_key_from_url(url: str, bucket: MediaBucket) -> str | None:
    """Recover the object key from a public URL, or ``None`` if it is not in ``bucket``.

    Stores percent-encode keys in their URLs, so the key is decoded again here.
    """

    marker = f"/{bucket.value}/"
    if marker not in url:
        return None
    key = unquote(url.split(marker)[-1].split("?", 1)[0])
    return key or None
