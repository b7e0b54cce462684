"""Identity provider adapter for the hosted backend's auth REST API."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from logging import getLogger
from typing import TYPE_CHECKING

from pydantic import ValidationError as PydanticValidationError

from radium.adapters.http_resilience import default_client_factory
from radium.config import get_backend_config
from radium.domain.errors import AuthenticationError, TransientStoreError
from radium.domain.ports import Session

from ._http import bearer_headers, invalid_payload, parse_json, send
from .schema import AuthErrorPayload, AuthSession, AuthUser, SignUpResponse

if TYPE_CHECKING:
    from collections.abc import Callable
    from uuid import UUID

    import httpx

    from radium.adapters.http_resilience import ResilientClient
    from radium.config import BackendConfig, ResilienceConfig
    from radium.domain.ports import IdentityProvider

log = getLogger(__name__)

# statuses the auth API uses for refused credentials or rejected input
REFUSED_STATUSES = frozenset({400, 401, 403, 422})


def _error_detail(response: httpx.Response) -> str:
    try:
        return AuthErrorPayload.model_validate(response.json()).detail
    except (ValueError, PydanticValidationError):
        return response.reason_phrase or f"HTTP {response.status_code}"


def _raise_for_status(action: str, response: httpx.Response) -> None:
    if not response.is_error:
        return
    detail = _error_detail(response)
    if response.status_code in REFUSED_STATUSES:
        raise AuthenticationError(detail)
    raise TransientStoreError(f"{action} failed: {detail}")


@dataclass(slots=True)
class HttpIdentityProvider:
    """Session-holding client for ``/auth/v1``. One instance per signed-in user."""

    config: BackendConfig = field(default_factory=get_backend_config)
    client_factory: Callable[[ResilienceConfig], ResilientClient] = field(
        default=default_client_factory
    )
    _session: Session | None = field(default=None, init=False)

    def sign_up(self, email: str, password: str, *, username: str) -> UUID:
        payload = asyncio.run(
            self._post(
                "sign up",
                f"{self.config.auth_url}/signup",
                {"email": email, "password": password, "data": {"username": username}},
            )
        )
        try:
            response = SignUpResponse.model_validate(payload)
        except PydanticValidationError as exc:
            raise invalid_payload("sign up", exc) from exc
        user_id = response.user_id
        if user_id is None:
            raise TransientStoreError("sign up: response carried no user id")
        if response.access_token is not None:
            self._session = Session(
                user_id=user_id,
                email=response.email or email,
                access_token=response.access_token,
            )
        log.info("Signed up identity %s", user_id)
        return user_id

    def sign_in(self, email: str, password: str) -> Session:
        payload = asyncio.run(
            self._post(
                "sign in",
                f"{self.config.auth_url}/token",
                {"email": email, "password": password},
                params={"grant_type": "password"},
            )
        )
        try:
            auth = AuthSession.model_validate(payload)
        except PydanticValidationError as exc:
            raise invalid_payload("sign in", exc) from exc
        self._session = Session(
            user_id=auth.user.id, email=auth.user.email, access_token=auth.access_token
        )
        return self._session

    def current_session(self) -> Session | None:
        """Return the held session after checking it with the backend."""

        if self._session is None:
            return None
        user = asyncio.run(self._fetch_user(self._session))
        if user is None:
            log.info("Stored session is no longer valid")
            self._session = None
            return None
        self._session = Session(
            user_id=user.id, email=user.email, access_token=self._session.access_token
        )
        return self._session

    def sign_out(self) -> None:
        """Drop the local session; a failed remote revoke is only logged."""

        session, self._session = self._session, None
        if session is None or session.access_token is None:
            return
        try:
            asyncio.run(self._logout(session))
        except TransientStoreError as exc:
            log.warning("Remote sign-out failed for %s: %s", session.user_id, exc)

    def access_token(self) -> str | None:
        return self._session.access_token if self._session is not None else None

    async def _post(
        self,
        action: str,
        url: str,
        body: dict[str, object],
        *,
        params: dict[str, str] | None = None,
    ) -> object:
        async with self.client_factory(self.config.resilience) as client:
            response = await send(
                action,
                client.post(
                    url,
                    json=body,
                    params=params,
                    headers=bearer_headers(self.config, None),
                ),
            )
        _raise_for_status(action, response)
        return parse_json(action, response)

    async def _fetch_user(self, session: Session) -> AuthUser | None:
        async with self.client_factory(self.config.resilience) as client:
            response = await send(
                "load user",
                client.get(
                    f"{self.config.auth_url}/user",
                    headers=bearer_headers(self.config, session.access_token),
                ),
            )
        if response.status_code in {401, 403}:
            return None
        _raise_for_status("load user", response)
        try:
            return AuthUser.model_validate(parse_json("load user", response))
        except PydanticValidationError as exc:
            raise invalid_payload("load user", exc) from exc

    async def _logout(self, session: Session) -> None:
        async with self.client_factory(self.config.resilience) as client:
            response = await send(
                "sign out",
                client.post(
                    f"{self.config.auth_url}/logout",
                    headers=bearer_headers(self.config, session.access_token),
                ),
            )
        if response.is_error and response.status_code not in {401, 403}:
            raise TransientStoreError(f"sign out failed: {_error_detail(response)}")


if TYPE_CHECKING:
    _identity_check: IdentityProvider = HttpIdentityProvider()
