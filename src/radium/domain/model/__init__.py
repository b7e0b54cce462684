"""Public domain model surface."""

from __future__ import annotations

from radium.domain.model.entity import Entity, new_id, utc_now
from radium.domain.model.enums import (
    Genre,
    MediaBucket,
    Platform,
    SongFilter,
    SongStatus,
    UserRole,
)
from radium.domain.model.media import MediaFile, media_key, media_key_from_url
from radium.domain.model.profile import PayoutDetails, Profile
from radium.domain.model.song import Song, StatusHistoryEntry

__all__ = [  # noqa: RUF022
    # base
    "Entity",
    "new_id",
    "utc_now",
    # profiles
    "PayoutDetails",
    "Profile",
    # songs
    "Song",
    "StatusHistoryEntry",
    # media
    "MediaFile",
    "media_key",
    "media_key_from_url",
    # enums
    "Genre",
    "MediaBucket",
    "Platform",
    "SongFilter",
    "SongStatus",
    "UserRole",
]
