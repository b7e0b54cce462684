from __future__ import annotations

import json
from typing import TYPE_CHECKING
from uuid import UUID

import httpx
import pytest

from radium.adapters.supabase import HttpIdentityProvider
from radium.domain.errors import AuthenticationError, TransientStoreError
from tests.helpers.http import make_client_factory

if TYPE_CHECKING:
    from radium.config import BackendConfig

USER_ID = UUID("6f1c2d3e-4b5a-4c6d-8e7f-9a0b1c2d3e4f")
USER = {"id": str(USER_ID), "email": "alice@example.com", "user_metadata": {"username": "alice"}}


def _session_payload(token: str = "access-1") -> dict[str, object]:
    return {
        "access_token": token,
        "token_type": "bearer",
        "expires_in": 3600,
        "refresh_token": "refresh-1",
        "user": USER,
    }


def test_sign_up_posts_username_metadata(backend_config: BackendConfig) -> None:
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json=USER)

    provider = HttpIdentityProvider(
        config=backend_config, client_factory=make_client_factory(handler)
    )

    user_id = provider.sign_up("alice@example.com", "secret", username="alice")

    assert user_id == USER_ID
    (request,) = seen
    assert request.url.path == "/auth/v1/signup"
    assert json.loads(request.content) == {
        "email": "alice@example.com",
        "password": "secret",
        "data": {"username": "alice"},
    }
    assert provider.access_token() is None


def test_sign_up_with_auto_confirm_keeps_session(backend_config: BackendConfig) -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        _ = request
        return httpx.Response(200, json=_session_payload())

    provider = HttpIdentityProvider(
        config=backend_config, client_factory=make_client_factory(handler)
    )

    assert provider.sign_up("alice@example.com", "secret", username="alice") == USER_ID
    assert provider.access_token() == "access-1"


def test_sign_up_refused(backend_config: BackendConfig) -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        _ = request
        return httpx.Response(422, json={"code": 422, "msg": "User already registered"})

    provider = HttpIdentityProvider(
        config=backend_config, client_factory=make_client_factory(handler)
    )

    with pytest.raises(AuthenticationError, match="User already registered"):
        provider.sign_up("alice@example.com", "secret", username="alice")


def test_sign_in_uses_password_grant(backend_config: BackendConfig) -> None:
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json=_session_payload())

    provider = HttpIdentityProvider(
        config=backend_config, client_factory=make_client_factory(handler)
    )

    session = provider.sign_in("alice@example.com", "secret")

    assert session.user_id == USER_ID
    assert session.email == "alice@example.com"
    assert session.access_token == "access-1"
    (request,) = seen
    assert request.url.path == "/auth/v1/token"
    assert request.url.params["grant_type"] == "password"


def test_sign_in_with_bad_credentials(backend_config: BackendConfig) -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        _ = request
        return httpx.Response(
            400, json={"error": "invalid_grant", "error_description": "Invalid login credentials"}
        )

    provider = HttpIdentityProvider(
        config=backend_config, client_factory=make_client_factory(handler)
    )

    with pytest.raises(AuthenticationError, match="Invalid login credentials"):
        provider.sign_in("alice@example.com", "wrong")
    assert provider.current_session() is None


def test_server_error_is_transient(backend_config: BackendConfig) -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        _ = request
        return httpx.Response(503, json={"message": "upstream unavailable"})

    provider = HttpIdentityProvider(
        config=backend_config, client_factory=make_client_factory(handler)
    )

    with pytest.raises(TransientStoreError, match="upstream unavailable"):
        provider.sign_in("alice@example.com", "secret")


def test_current_session_is_checked_with_backend(backend_config: BackendConfig) -> None:
    valid = {"token": True}

    def handler(request: httpx.Request) -> httpx.Response:
        if request.url.path == "/auth/v1/token":
            return httpx.Response(200, json=_session_payload())
        assert request.url.path == "/auth/v1/user"
        assert request.headers["Authorization"] == "Bearer access-1"
        if valid["token"]:
            return httpx.Response(200, json=USER)
        return httpx.Response(401, json={"msg": "JWT expired"})

    provider = HttpIdentityProvider(
        config=backend_config, client_factory=make_client_factory(handler)
    )
    provider.sign_in("alice@example.com", "secret")

    session = provider.current_session()
    assert session is not None
    assert session.user_id == USER_ID

    valid["token"] = False
    assert provider.current_session() is None
    assert provider.access_token() is None


def test_sign_out_drops_session_even_if_revoke_fails(backend_config: BackendConfig) -> None:
    paths: list[str] = []

    def handler(request: httpx.Request) -> httpx.Response:
        paths.append(request.url.path)
        if request.url.path == "/auth/v1/token":
            return httpx.Response(200, json=_session_payload())
        return httpx.Response(500, json={"message": "boom"})

    provider = HttpIdentityProvider(
        config=backend_config, client_factory=make_client_factory(handler)
    )
    provider.sign_in("alice@example.com", "secret")

    provider.sign_out()

    assert paths == ["/auth/v1/token", "/auth/v1/logout"]
    assert provider.current_session() is None
