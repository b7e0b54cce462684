"""Release submissions and their moderation audit trail."""

from __future__ import annotations

from dataclasses import FrozenInstanceError, dataclass, field
from typing import TYPE_CHECKING

from radium.domain.errors import AlreadyReviewedError
from radium.domain.model.entity import Entity, utc_now
from radium.domain.model.enums import MediaBucket, SongStatus
from radium.domain.model.media import media_key_from_url

if TYPE_CHECKING:
    from datetime import date, datetime
    from uuid import UUID

    from radium.domain.model.enums import Genre, Platform


@dataclass(eq=False, kw_only=True)
class StatusHistoryEntry(Entity):
    """One status transition. Entries are append-only and never edited.

    Fields can be assigned once, during construction; the ORM fills loaded rows
    without going through ``__setattr__``.
    """

    song_id: UUID
    status: SongStatus
    user_id: UUID  # acting admin
    reason: str | None = None
    created_at: datetime = field(default_factory=utc_now)

    def __setattr__(self, name: str, value: object) -> None:
        if name in self.__dataclass_fields__ and name in self.__dict__:
            raise FrozenInstanceError(f"cannot assign to field {name!r}")
        super().__setattr__(name, value)


@dataclass(eq=False, kw_only=True)
class Song(Entity):
    """One submitted release.

    ``status`` and ``rejection_reason`` are only changed through :meth:`approve` and
    :meth:`reject`, so every song starts out PENDING and never returns there.
    """

    user_id: UUID
    release_date: date
    album_title: str
    artist_names: str
    genre: Genre
    platforms: tuple[Platform, ...]
    cover_art_url: str
    audio_file_url: str
    upc: str | None = None
    isrc: str | None = None
    created_at: datetime = field(default_factory=utc_now)

    _status: SongStatus = field(default=SongStatus.PENDING, init=False)
    _rejection_reason: str | None = field(default=None, init=False)
    _history: list[StatusHistoryEntry] = field(
        default_factory=list["StatusHistoryEntry"], init=False, repr=False
    )

    @property
    def status(self) -> SongStatus:
        return self._status

    @property
    def rejection_reason(self) -> str | None:
        return self._rejection_reason if self._status is SongStatus.REJECTED else None

    @property
    def is_reviewed(self) -> bool:
        return self._status is not SongStatus.PENDING

    @property
    def history(self) -> tuple[StatusHistoryEntry, ...]:
        """Transitions in chronological order."""
        return tuple(sorted(self._history, key=lambda entry: entry.created_at))

    @property
    def latest_entry(self) -> StatusHistoryEntry | None:
        history = self.history
        return history[-1] if history else None

    def media_keys(self) -> dict[MediaBucket, str | None]:
        """Blob keys behind the stored URLs; ``None`` where a URL is not in its bucket."""
        return {
            MediaBucket.COVER_ART: media_key_from_url(self.cover_art_url, MediaBucket.COVER_ART),
            MediaBucket.AUDIO_FILES: media_key_from_url(
                self.audio_file_url, MediaBucket.AUDIO_FILES
            ),
        }

    def approve(self, *, by: UUID, at: datetime | None = None) -> StatusHistoryEntry:
        return self._transition(SongStatus.APPROVED, by=by, reason=None, at=at)

    def reject(
        self, *, by: UUID, reason: str | None = None, at: datetime | None = None
    ) -> StatusHistoryEntry:
        cleaned = reason.strip() if reason is not None else None
        return self._transition(SongStatus.REJECTED, by=by, reason=cleaned or None, at=at)

    def _transition(
        self,
        status: SongStatus,
        *,
        by: UUID,
        reason: str | None,
        at: datetime | None,
    ) -> StatusHistoryEntry:
        if self.is_reviewed:
            raise AlreadyReviewedError(self.id, self._status)
        entry = StatusHistoryEntry(
            song_id=self.id,
            status=status,
            user_id=by,
            reason=reason,
            created_at=at or utc_now(),
        )
        self._status = status
        self._rejection_reason = reason
        self._history.append(entry)
        return entry
