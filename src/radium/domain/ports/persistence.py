"""Ports for persisting portal aggregates."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

from radium.domain.model import Profile, Song, StatusHistoryEntry

if TYPE_CHECKING:
    from collections.abc import Collection, Iterable, Sequence
    from uuid import UUID

    from radium.domain.model import SongStatus


@runtime_checkable
class Repository[TEntity](Protocol):
    """Minimal repository contract for a persistent aggregate store."""

    def add(self, entity: TEntity) -> None: ...

    def get(self, entity_id: UUID) -> TEntity | None: ...


@runtime_checkable
class ProfileRepository(Repository[Profile], Protocol):
    """Persistence contract for profiles."""

    def get_many(self, profile_ids: Iterable[UUID]) -> dict[UUID, Profile]: ...

    def get_by_username(self, username: str) -> Profile | None: ...

    def list(self) -> Sequence[Profile]: ...


@runtime_checkable
class SongRepository(Repository[Song], Protocol):
    """Persistence contract for songs. Removing a song cascades to its history."""

    def list(
        self,
        *,
        statuses: Collection[SongStatus] | None = None,
        owner_id: UUID | None = None,
    ) -> Sequence[Song]: ...

    def remove(self, song: Song) -> None: ...


@runtime_checkable
class StatusHistoryRepository(Protocol):
    """Read access to the audit log. Entries are written through their song."""

    def for_song(self, song_id: UUID) -> Sequence[StatusHistoryEntry]: ...

    def count_for_song(self, song_id: UUID) -> int: ...
