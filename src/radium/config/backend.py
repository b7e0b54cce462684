"""Backend service (auth + object storage) configuration values."""

from __future__ import annotations

from dataclasses import dataclass

from .env import require_env_vars
from .http_resilience import RateLimit, ResilienceConfig, RetryPolicy

BACKEND_TIMEOUT_SECONDS = 15.0


@dataclass(frozen=True, slots=True)
class BackendConfig:
    """Endpoint and public key of the hosted backend."""

    url: str
    api_key: str
    resilience: ResilienceConfig

    @property
    def storage_url(self) -> str:
        return f"{self.url}/storage/v1"

    @property
    def auth_url(self) -> str:
        return f"{self.url}/auth/v1"


def get_backend_config(*, resilience: ResilienceConfig | None = None) -> BackendConfig:
    values = require_env_vars(("RADIUM_BACKEND_URL", "RADIUM_BACKEND_KEY"))
    url = values["RADIUM_BACKEND_URL"].rstrip("/")
    api_key = values["RADIUM_BACKEND_KEY"]
    return BackendConfig(
        url=url,
        api_key=api_key,
        resilience=resilience
        or ResilienceConfig(
            name="backend",
            base_url=url,
            timeout_seconds=BACKEND_TIMEOUT_SECONDS,
            retry=RetryPolicy(total=4),
            ratelimit=RateLimit(max_calls=10, per_seconds=1.0),
            default_headers={"apikey": api_key},
        ),
    )
