"""Errors raised across the portal domain boundary."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterable
    from uuid import UUID

    from radium.domain.model.enums import SongStatus


class PortalError(Exception):
    """Base class for every error the portal reports to its callers."""


class AuthenticationError(PortalError):
    """No valid session, or the supplied credentials were refused."""


class AuthorizationError(PortalError):
    """The actor lacks the role or ownership an operation requires."""


class AccountBannedError(AuthorizationError):
    """The actor's profile is banned from gated functionality."""

    def __init__(self, profile_id: UUID) -> None:
        super().__init__("This account has been banned.")
        self.profile_id = profile_id


class ValidationError(PortalError):
    """Submitted input is incomplete or outside the allowed values."""

    def __init__(self, problems: Iterable[str]) -> None:
        self.problems: tuple[str, ...] = tuple(problems)
        super().__init__("; ".join(self.problems) or "invalid input")


class NotFoundError(PortalError):
    """A referenced song or profile does not exist."""

    def __init__(self, kind: str, identifier: object) -> None:
        super().__init__(f"{kind} not found: {identifier}")
        self.kind = kind
        self.identifier = identifier


class ConflictError(PortalError):
    """The write conflicts with the current stored state."""


class UsernameTakenError(ConflictError):
    def __init__(self, username: str) -> None:
        super().__init__(f"Username already taken: {username}")
        self.username = username


class AlreadyReviewedError(ConflictError):
    """Approve/Reject on a song that is no longer PENDING."""

    def __init__(self, song_id: UUID, status: SongStatus | None = None) -> None:
        detail = f" (status: {status})" if status is not None else ""
        super().__init__(f"Song {song_id} has already been reviewed{detail}")
        self.song_id = song_id
        self.status = status


class TransientStoreError(PortalError):
    """Network or storage failure; the caller may retry the action."""
