"""Port for the object storage holding cover art and audio."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from radium.domain.model import MediaBucket


@runtime_checkable
class BlobStore(Protocol):
    """Stores media bytes under ``bucket/key`` and hands back a stable URL."""

    def put(
        self,
        bucket: MediaBucket,
        key: str,
        content: bytes,
        *,
        content_type: str | None = None,
    ) -> str: ...

    def remove(self, bucket: MediaBucket, key: str) -> None:
        """Delete an object. Raises :class:`TransientStoreError` on failure."""
        ...
