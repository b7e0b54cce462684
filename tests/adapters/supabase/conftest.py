from __future__ import annotations

import pytest

from radium.config import BackendConfig, ResilienceConfig, RetryPolicy

BACKEND_URL = "https://backend.test"
API_KEY = "public-anon-key"


@pytest.fixture
def backend_config() -> BackendConfig:
    return BackendConfig(
        url=BACKEND_URL,
        api_key=API_KEY,
        resilience=ResilienceConfig(
            name="backend-test",
            base_url=BACKEND_URL,
            retry=RetryPolicy(total=0),
            default_headers={"apikey": API_KEY},
        ),
    )
