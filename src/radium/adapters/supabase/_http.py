"""Request helpers shared by the backend adapters."""

from __future__ import annotations

from typing import TYPE_CHECKING

import httpx

from radium.domain.errors import TransientStoreError

if TYPE_CHECKING:
    from collections.abc import Awaitable

    from pydantic import ValidationError as PydanticValidationError

    from radium.config.backend import BackendConfig


def bearer_headers(config: BackendConfig, access_token: str | None) -> dict[str, str]:
    return {
        "apikey": config.api_key,
        "Authorization": f"Bearer {access_token or config.api_key}",
    }


async def send(action: str, request: Awaitable[httpx.Response]) -> httpx.Response:
    """Await ``request``, turning transport failures into ``TransientStoreError``."""

    try:
        return await request
    except httpx.HTTPError as exc:
        raise TransientStoreError(f"{action} failed: {exc}") from exc


def parse_json(action: str, response: httpx.Response) -> object:
    try:
        return response.json()
    except ValueError as exc:
        raise TransientStoreError(f"{action}: unexpected response body") from exc


def invalid_payload(action: str, exc: PydanticValidationError) -> TransientStoreError:
    count = exc.error_count()
    return TransientStoreError(f"{action}: unexpected response payload ({count} errors)")

