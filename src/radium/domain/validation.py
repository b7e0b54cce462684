"""Submission validation."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import TYPE_CHECKING

from radium.domain.errors import ValidationError
from radium.domain.model import Genre, Platform

if TYPE_CHECKING:
    from collections.abc import Iterable

    from radium.domain.model import MediaFile


@dataclass(slots=True)
class SongSubmission:
    """Release metadata as entered by the artist, before validation."""

    album_title: str
    artist_names: str
    release_date: date | str | None
    genre: Genre | str | None
    platforms: Iterable[Platform | str] = field(default_factory=tuple)
    upc: str | None = None
    isrc: str | None = None


@dataclass(frozen=True, slots=True)
class ValidSubmission:
    album_title: str
    artist_names: str
    release_date: date
    genre: Genre
    platforms: tuple[Platform, ...]
    upc: str | None
    isrc: str | None
    cover_art: MediaFile
    audio_file: MediaFile


def validate_submission(
    submission: SongSubmission,
    *,
    cover_art: MediaFile | None,
    audio_file: MediaFile | None,
) -> ValidSubmission:
    """Normalise a submission or raise :class:`ValidationError` listing every problem."""

    problems: list[str] = []

    album_title = (submission.album_title or "").strip()
    if not album_title:
        problems.append("album title is required")
    artist_names = (submission.artist_names or "").strip()
    if not artist_names:
        problems.append("artist names are required")

    release_date = _parse_release_date(submission.release_date, problems)
    genre = _parse_genre(submission.genre, problems)
    platforms = _parse_platforms(submission.platforms, problems)

    if cover_art is None or cover_art.is_empty:
        problems.append("cover art is required")
    if audio_file is None or audio_file.is_empty:
        problems.append("audio file is required")

    if (
        problems
        or release_date is None
        or genre is None
        or cover_art is None
        or audio_file is None
    ):
        raise ValidationError(problems)

    return ValidSubmission(
        album_title=album_title,
        artist_names=artist_names,
        release_date=release_date,
        genre=genre,
        platforms=platforms,
        upc=_optional_text(submission.upc),
        isrc=_optional_text(submission.isrc),
        cover_art=cover_art,
        audio_file=audio_file,
    )


def _optional_text(value: str | None) -> str | None:
    if value is None:
        return None
    return value.strip() or None


def _parse_release_date(value: date | str | None, problems: list[str]) -> date | None:
    if isinstance(value, date):
        return value
    if value is None or not value.strip():
        problems.append("release date is required")
        return None
    try:
        return date.fromisoformat(value.strip())
    except ValueError:
        problems.append(f"release date is not an ISO date: {value!r}")
        return None


def _parse_genre(value: Genre | str | None, problems: list[str]) -> Genre | None:
    if isinstance(value, Genre):
        return value
    if value is None or not value.strip():
        problems.append("genre is required")
        return None
    try:
        return Genre(value.strip())
    except ValueError:
        pass
    by_name = Genre.__members__.get(value.strip().upper())
    if by_name is None:
        problems.append(f"unknown genre: {value!r}")
    return by_name


def _parse_platforms(values: Iterable[Platform | str], problems: list[str]) -> tuple[Platform, ...]:
    selected: list[Platform] = []
    for value in values:
        platform = _parse_platform(value)
        if platform is None:
            problems.append(f"unknown platform: {value!r}")
            continue
        if platform not in selected:
            selected.append(platform)
    if not selected:
        problems.append("select at least one platform")
    return tuple(selected)


def _parse_platform(value: Platform | str) -> Platform | None:
    if isinstance(value, Platform):
        return value
    cleaned = value.strip()
    try:
        return Platform(cleaned)
    except ValueError:
        return Platform.__members__.get(cleaned.upper().replace(" ", "_"))
