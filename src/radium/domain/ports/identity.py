"""Port for the external identity/session provider."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from uuid import UUID


@dataclass(frozen=True, slots=True)
class Session:
    user_id: UUID
    email: str | None
    access_token: str | None = None


@runtime_checkable
class IdentityProvider(Protocol):
    def sign_up(self, email: str, password: str, *, username: str) -> UUID: ...

    def sign_in(self, email: str, password: str) -> Session: ...

    def current_session(self) -> Session | None: ...

    def sign_out(self) -> None: ...
