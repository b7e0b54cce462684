"""Filesystem blob store: one directory per bucket under the media root."""

from __future__ import annotations

from dataclasses import dataclass, field
from logging import getLogger
from pathlib import Path
from typing import TYPE_CHECKING

from radium.config import get_storage_config
from radium.domain.errors import TransientStoreError

if TYPE_CHECKING:
    from radium.domain.model import MediaBucket
    from radium.domain.ports import BlobStore

log = getLogger(__name__)


def _default_root() -> Path:
    return get_storage_config().media_root()


@dataclass(slots=True)
class LocalBlobStore:
    root: Path = field(default_factory=_default_root)

    def path_for(self, bucket: MediaBucket, key: str) -> Path:
        if not key or "/" in key or "\\" in key or key in {".", ".."}:
            raise ValueError(f"Invalid object key: {key!r}")
        return self.root.expanduser().resolve() / bucket.value / key

    def put(
        self,
        bucket: MediaBucket,
        key: str,
        content: bytes,
        *,
        content_type: str | None = None,
    ) -> str:
        _ = content_type
        path = self._object_path("upload", bucket, key)
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_bytes(content)
        except OSError as exc:
            raise TransientStoreError(f"upload {bucket.value}/{key} failed: {exc}") from exc
        log.debug("Stored %d bytes at %s", len(content), path)
        return path.as_uri()

    def remove(self, bucket: MediaBucket, key: str) -> None:
        path = self._object_path("remove", bucket, key)
        try:
            path.unlink(missing_ok=True)
        except OSError as exc:
            raise TransientStoreError(f"remove {bucket.value}/{key} failed: {exc}") from exc
        log.debug("Removed %s", path)

    def _object_path(self, action: str, bucket: MediaBucket, key: str) -> Path:
        # keys recovered from stored URLs are not trusted
        try:
            return self.path_for(bucket, key)
        except ValueError as exc:
            raise TransientStoreError(f"{action} {bucket.value}/{key} failed: {exc}") from exc


if TYPE_CHECKING:
    _blob_store_check: BlobStore = LocalBlobStore()
