"""Object storage adapter for the hosted backend's storage REST API."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from logging import getLogger
from typing import TYPE_CHECKING
from urllib.parse import quote

from pydantic import ValidationError as PydanticValidationError

from radium.adapters.http_resilience import default_client_factory
from radium.config import get_backend_config
from radium.domain.errors import TransientStoreError

from ._http import bearer_headers, invalid_payload, parse_json, send
from .schema import StorageErrorPayload, StorageUploadResponse

if TYPE_CHECKING:
    from collections.abc import Callable

    import httpx

    from radium.adapters.http_resilience import ResilientClient
    from radium.config import BackendConfig, ResilienceConfig
    from radium.domain.model import MediaBucket
    from radium.domain.ports import BlobStore

log = getLogger(__name__)

DEFAULT_CONTENT_TYPE = "application/octet-stream"


def _error_detail(response: httpx.Response) -> str:
    try:
        return StorageErrorPayload.model_validate(response.json()).detail
    except (ValueError, PydanticValidationError):
        return response.reason_phrase or f"HTTP {response.status_code}"


@dataclass(slots=True)
class HttpBlobStore:
    """Blob store backed by ``/storage/v1``; objects are served from public URLs."""

    config: BackendConfig = field(default_factory=get_backend_config)
    client_factory: Callable[[ResilienceConfig], ResilientClient] = field(
        default=default_client_factory
    )
    access_token: Callable[[], str | None] | None = None

    def public_url(self, bucket: MediaBucket, key: str) -> str:
        return f"{self.config.storage_url}/object/public/{bucket.value}/{quote(key)}"

    def put(
        self,
        bucket: MediaBucket,
        key: str,
        content: bytes,
        *,
        content_type: str | None = None,
    ) -> str:
        asyncio.run(self._upload(bucket, key, content, content_type or DEFAULT_CONTENT_TYPE))
        url = self.public_url(bucket, key)
        log.info("Uploaded %d bytes to %s/%s", len(content), bucket.value, key)
        return url

    def remove(self, bucket: MediaBucket, key: str) -> None:
        asyncio.run(self._remove(bucket, key))
        log.info("Removed %s/%s", bucket.value, key)

    async def _upload(
        self,
        bucket: MediaBucket,
        key: str,
        content: bytes,
        content_type: str,
    ) -> None:
        action = f"upload {bucket.value}/{key}"
        headers = {
            **self._headers(),
            "Content-Type": content_type,
            "x-upsert": "false",
        }
        async with self.client_factory(self.config.resilience) as client:
            response = await send(
                action,
                client.post(
                    f"{self.config.storage_url}/object/{bucket.value}/{quote(key)}",
                    content=content,
                    headers=headers,
                ),
            )
        if response.is_error:
            raise TransientStoreError(f"{action} failed: {_error_detail(response)}")
        try:
            StorageUploadResponse.model_validate(parse_json(action, response))
        except PydanticValidationError as exc:
            raise invalid_payload(action, exc) from exc

    async def _remove(self, bucket: MediaBucket, key: str) -> None:
        action = f"remove {bucket.value}/{key}"
        async with self.client_factory(self.config.resilience) as client:
            response = await send(
                action,
                client.delete(
                    f"{self.config.storage_url}/object/{bucket.value}",
                    json={"prefixes": [key]},
                    headers=self._headers(),
                ),
            )
        if response.is_error:
            raise TransientStoreError(f"{action} failed: {_error_detail(response)}")

    def _headers(self) -> dict[str, str]:
        token = self.access_token() if self.access_token is not None else None
        return bearer_headers(self.config, token)


if TYPE_CHECKING:
    _blob_store_check: BlobStore = HttpBlobStore()
