from __future__ import annotations

import pytest

from radium.config import (
    ConfigurationError,
    MissingConfigurationError,
    get_backend_config,
    get_portal_config,
)


def test_backend_config_builds_service_urls(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("RADIUM_BACKEND_URL", "https://project.backend.test/")
    monkeypatch.setenv("RADIUM_BACKEND_KEY", "anon-key")

    config = get_backend_config()

    assert config.url == "https://project.backend.test"
    assert config.storage_url == "https://project.backend.test/storage/v1"
    assert config.auth_url == "https://project.backend.test/auth/v1"
    assert config.resilience.base_url == config.url
    assert config.resilience.default_headers == {"apikey": "anon-key"}


def test_backend_config_requires_key(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("RADIUM_BACKEND_URL", "https://project.backend.test")
    monkeypatch.delenv("RADIUM_BACKEND_KEY", raising=False)

    with pytest.raises(MissingConfigurationError, match="RADIUM_BACKEND_KEY"):
        get_backend_config()


def test_portal_config_defaults_to_local_blobs(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("RADIUM_BLOB_BACKEND", raising=False)

    assert get_portal_config().blob_backend == "local"


def test_portal_config_accepts_backend(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("RADIUM_BLOB_BACKEND", "Backend")

    assert get_portal_config().blob_backend == "backend"


def test_portal_config_rejects_unknown_backend(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("RADIUM_BLOB_BACKEND", "ftp")

    with pytest.raises(ConfigurationError, match="ftp"):
        get_portal_config()
