"""Domain enums (pure, dependency-light)."""

from __future__ import annotations

from enum import StrEnum


class UserRole(StrEnum):
    USER = "USER"
    ADMIN = "ADMIN"


class SongStatus(StrEnum):
    PENDING = "PENDING"
    APPROVED = "APPROVED"
    REJECTED = "REJECTED"


class Genre(StrEnum):
    POP = "Pop"
    ROCK = "Rock"
    HIP_HOP = "Hip Hop / Rap"
    ELECTRONIC = "Electronic"
    JAZZ = "Jazz"
    CLASSICAL = "Classical"
    COUNTRY = "Country"
    METAL = "Metal"
    RNB = "R&B / Soul"
    REGGAE = "Reggae"
    FOLK = "Folk / Acoustic"
    OTHER = "Other"


class Platform(StrEnum):
    SPOTIFY = "Spotify"
    INSTAGRAM = "Instagram"
    TIKTOK = "TikTok"
    AMAZON = "Amazon"
    YOUTUBE = "YouTube"
    CONTENT_ID = "Content ID"
    APPLE_MUSIC = "Apple Music"
    ITUNES = "iTunes"


class MediaBucket(StrEnum):
    """Object storage buckets holding release media."""

    COVER_ART = "cover-art"
    AUDIO_FILES = "audio-files"


class SongFilter(StrEnum):
    """Admin listing views over the review queue."""

    PENDING = "pending"
    REVIEWED = "reviewed"
    ALL = "all"

    def statuses(self) -> frozenset[SongStatus]:
        if self is SongFilter.PENDING:
            return frozenset({SongStatus.PENDING})
        if self is SongFilter.REVIEWED:
            return frozenset({SongStatus.APPROVED, SongStatus.REJECTED})
        return frozenset(SongStatus)

    def matches(self, status: SongStatus) -> bool:
        return status in self.statuses()
