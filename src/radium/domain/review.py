"""Review workflow: submission, moderation and removal of releases.

Every operation runs inside one unit of work, so a status change and its
history entry are committed together or not at all. Blob-store calls are not
transactional; the workflow compensates where it can and reports the rest.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from logging import getLogger
from typing import TYPE_CHECKING

from radium.domain._lookup import require_profile, require_song
from radium.domain.errors import AlreadyReviewedError, ConflictError, TransientStoreError
from radium.domain.model import (
    MediaBucket,
    Song,
    SongFilter,
    media_key,
    utc_now,
)
from radium.domain.policy import require_moderator, require_submitter, require_viewer
from radium.domain.validation import validate_submission

if TYPE_CHECKING:
    from datetime import datetime
    from uuid import UUID

    from radium.domain.model import MediaFile, SongStatus, StatusHistoryEntry
    from radium.domain.ports import BlobStore, PortalUnitOfWork, UnitOfWorkFactory
    from radium.domain.validation import SongSubmission

type Clock = Callable[[], datetime]

UNKNOWN_UPLOADER = "Unknown User"
UNKNOWN_ADMIN = "Unknown Admin"

log = getLogger(__name__)


@dataclass(frozen=True, slots=True)
class HistoryView:
    """A status transition with the acting admin's username resolved."""

    status: SongStatus
    reason: str | None
    created_at: datetime
    actor_id: UUID
    actor_username: str


@dataclass(frozen=True, slots=True)
class SongDetails:
    song: Song
    uploader_username: str
    history: tuple[HistoryView, ...]  # newest first


@dataclass(frozen=True, slots=True)
class SongListing:
    song: Song
    uploader_username: str


@dataclass(slots=True)
class SongDeletion:
    """Outcome of a delete. Blob failures do not stop the row from being removed."""

    song_id: UUID
    removed: dict[MediaBucket, str] = field(default_factory=dict["MediaBucket", str])
    failures: dict[MediaBucket, str] = field(default_factory=dict["MediaBucket", str])

    @property
    def is_partial(self) -> bool:
        return bool(self.failures)


@dataclass(slots=True)
class _Upload:
    bucket: MediaBucket
    key: str
    url: str


@dataclass(slots=True)
class ReviewWorkflow:
    unit_of_work_factory: UnitOfWorkFactory
    blob_store: BlobStore
    clock: Clock = field(default=utc_now)

    def submit(
        self,
        *,
        owner_id: UUID,
        submission: SongSubmission,
        cover_art: MediaFile | None,
        audio_file: MediaFile | None,
    ) -> Song:
        """Upload the media and create a PENDING song without history entries."""

        with self.unit_of_work_factory() as uow:
            owner = require_profile(uow, owner_id)
            require_submitter(owner)
            valid = validate_submission(submission, cover_art=cover_art, audio_file=audio_file)

            uploads = self._upload_media(owner.id, valid.cover_art, valid.audio_file)
            try:
                song = Song(
                    user_id=owner.id,
                    release_date=valid.release_date,
                    album_title=valid.album_title,
                    artist_names=valid.artist_names,
                    genre=valid.genre,
                    platforms=valid.platforms,
                    upc=valid.upc,
                    isrc=valid.isrc,
                    cover_art_url=uploads[0].url,
                    audio_file_url=uploads[1].url,
                    created_at=self.clock(),
                )
                uow.repositories.songs.add(song)
                uow.commit()
            except Exception:
                self._discard_uploads(uploads)
                raise

        log.info(
            "Song submitted: id=%s, owner=%s, title=%r", song.id, owner.id, song.album_title
        )
        return song

    def approve(self, *, song_id: UUID, actor_id: UUID) -> Song:
        with self.unit_of_work_factory() as uow:
            actor = require_profile(uow, actor_id)
            require_moderator(actor)
            song = require_song(uow, song_id)
            entry = song.approve(by=actor.id, at=self.clock())
            self._commit_review(uow, song)

        self._log_transition(entry)
        return song

    def reject(self, *, song_id: UUID, actor_id: UUID, reason: str | None = None) -> Song:
        with self.unit_of_work_factory() as uow:
            actor = require_profile(uow, actor_id)
            require_moderator(actor)
            song = require_song(uow, song_id)
            entry = song.reject(by=actor.id, reason=reason, at=self.clock())
            self._commit_review(uow, song)

        self._log_transition(entry)
        return song

    def delete(self, *, song_id: UUID, actor_id: UUID) -> SongDeletion:
        """Remove a song, its history and its media. Irreversible."""

        with self.unit_of_work_factory() as uow:
            actor = require_profile(uow, actor_id)
            require_moderator(actor)
            song = require_song(uow, song_id)

            deletion = SongDeletion(song_id=song.id)
            for bucket, key in song.media_keys().items():
                if key is None:
                    deletion.failures[bucket] = f"Unrecognised {bucket} URL on song {song.id}"
                    continue
                try:
                    self.blob_store.remove(bucket, key)
                except TransientStoreError as exc:
                    log.warning(
                        "Failed to remove %s/%s for song %s: %s", bucket, key, song.id, exc
                    )
                    deletion.failures[bucket] = str(exc)
                    continue
                deletion.removed[bucket] = key

            uow.repositories.songs.remove(song)
            uow.commit()

        log.info(
            "Song deleted: id=%s, by=%s, removed=%s, failed=%s",
            song_id,
            actor_id,
            sorted(deletion.removed),
            sorted(deletion.failures),
        )
        return deletion

    def read(self, *, song_id: UUID, viewer_id: UUID, with_history: bool = True) -> SongDetails:
        with self.unit_of_work_factory() as uow:
            viewer = require_profile(uow, viewer_id)
            song = require_song(uow, song_id)
            require_viewer(viewer, song)

            entries: tuple[StatusHistoryEntry, ...] = ()
            if with_history:
                entries = tuple(uow.repositories.status_history.for_song(song.id))
            names = _usernames(uow, {song.user_id, *(entry.user_id for entry in entries)})

        history = tuple(
            HistoryView(
                status=entry.status,
                reason=entry.reason,
                created_at=entry.created_at,
                actor_id=entry.user_id,
                actor_username=names.get(entry.user_id, UNKNOWN_ADMIN),
            )
            for entry in reversed(entries)
        )
        return SongDetails(
            song=song,
            uploader_username=names.get(song.user_id, UNKNOWN_UPLOADER),
            history=history,
        )

    def list_songs(
        self,
        *,
        actor_id: UUID,
        song_filter: SongFilter = SongFilter.PENDING,
    ) -> list[SongListing]:
        """Admin review queue, newest submissions first."""

        with self.unit_of_work_factory() as uow:
            actor = require_profile(uow, actor_id)
            require_moderator(actor)
            songs = uow.repositories.songs.list(statuses=song_filter.statuses())
            names = _usernames(uow, {song.user_id for song in songs})

        return [
            SongListing(song=song, uploader_username=names.get(song.user_id, UNKNOWN_UPLOADER))
            for song in songs
        ]

    def list_own_songs(self, *, owner_id: UUID) -> list[Song]:
        with self.unit_of_work_factory() as uow:
            owner = require_profile(uow, owner_id)
            require_submitter(owner)
            return list(uow.repositories.songs.list(owner_id=owner.id))

    def _commit_review(self, uow: PortalUnitOfWork, song: Song) -> None:
        try:
            uow.commit()
        except ConflictError as exc:
            raise AlreadyReviewedError(song.id) from exc

    def _upload_media(
        self,
        owner_id: UUID,
        cover_art: MediaFile,
        audio_file: MediaFile,
    ) -> tuple[_Upload, _Upload]:
        uploaded_at = self.clock()
        uploads: list[_Upload] = []
        try:
            for bucket, media in (
                (MediaBucket.COVER_ART, cover_art),
                (MediaBucket.AUDIO_FILES, audio_file),
            ):
                key = media_key(owner_id, uploaded_at, media.extension)
                url = self.blob_store.put(
                    bucket, key, media.content, content_type=media.content_type
                )
                uploads.append(_Upload(bucket=bucket, key=key, url=url))
        except Exception:
            self._discard_uploads(uploads)
            raise
        return uploads[0], uploads[1]

    def _discard_uploads(self, uploads: tuple[_Upload, ...] | list[_Upload]) -> None:
        for upload in uploads:
            try:
                self.blob_store.remove(upload.bucket, upload.key)
            except TransientStoreError as exc:
                log.warning(
                    "Orphaned upload %s/%s left behind: %s", upload.bucket, upload.key, exc
                )

    def _log_transition(self, entry: StatusHistoryEntry) -> None:
        if entry.reason:
            log.info(
                "Song %s -> %s by %s (reason: %r)",
                entry.song_id,
                entry.status,
                entry.user_id,
                entry.reason,
            )
        else:
            log.info("Song %s -> %s by %s", entry.song_id, entry.status, entry.user_id)


def _usernames(uow: PortalUnitOfWork, profile_ids: set[UUID]) -> dict[UUID, str]:
    if not profile_ids:
        return {}
    profiles = uow.repositories.profiles.get_many(profile_ids)
    return {profile_id: profile.username for profile_id, profile in profiles.items()}
