"""MockTransport wiring for the resilient HTTP client."""

from __future__ import annotations

from typing import TYPE_CHECKING

import httpx

from radium.adapters.http_resilience import ResilientClient

if TYPE_CHECKING:
    from collections.abc import Callable

    from radium.config import ResilienceConfig

type Handler = Callable[[httpx.Request], httpx.Response]
type ClientFactory = Callable[[ResilienceConfig], ResilientClient]


def make_client_factory(handler: Handler) -> ClientFactory:
    async def async_handler(request: httpx.Request) -> httpx.Response:
        return handler(request)

    def factory(resilience: ResilienceConfig) -> ResilientClient:
        client = ResilientClient(resilience)
        client._client = httpx.AsyncClient(  # noqa: SLF001  # type: ignore[reportPrivateUsage]
            transport=httpx.MockTransport(async_handler),
            headers=dict(resilience.default_headers or {}),
        )
        return client

    return factory
