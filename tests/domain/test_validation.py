from __future__ import annotations

from datetime import date

import pytest

from radium.domain.errors import ValidationError
from radium.domain.model import Genre, MediaFile, Platform
from radium.domain.validation import validate_submission
from tests.helpers.portal import make_audio, make_media, make_submission


def test_valid_submission_is_normalised() -> None:
    submission = make_submission(
        album_title="  Neon Dreams ",
        release_date="2024-06-01",
        genre="Hip Hop / Rap",
        platforms=["TikTok", Platform.SPOTIFY, "tiktok", "content id"],
        upc="  ",
        isrc=" USRC17607839 ",
    )

    valid = validate_submission(submission, cover_art=make_media(), audio_file=make_audio())

    assert valid.album_title == "Neon Dreams"
    assert valid.release_date == date(2024, 6, 1)
    assert valid.genre is Genre.HIP_HOP
    assert valid.platforms == (Platform.TIKTOK, Platform.SPOTIFY, Platform.CONTENT_ID)
    assert valid.upc is None
    assert valid.isrc == "USRC17607839"


def test_genre_accepts_member_names() -> None:
    valid = validate_submission(
        make_submission(genre="rnb"), cover_art=make_media(), audio_file=make_audio()
    )

    assert valid.genre is Genre.RNB


def test_empty_platform_set_is_rejected() -> None:
    with pytest.raises(ValidationError) as exc:
        validate_submission(
            make_submission(platforms=()), cover_art=make_media(), audio_file=make_audio()
        )

    assert exc.value.problems == ("select at least one platform",)


def test_every_problem_is_reported() -> None:
    submission = make_submission(
        album_title=" ",
        artist_names="",
        release_date="01/06/2024",
        genre="Polka",
        platforms=["Myspace"],
    )

    with pytest.raises(ValidationError) as exc:
        validate_submission(
            submission,
            cover_art=None,
            audio_file=MediaFile(filename="empty.wav", content=b""),
        )

    problems = exc.value.problems
    assert "album title is required" in problems
    assert "artist names are required" in problems
    assert any(problem.startswith("release date is not an ISO date") for problem in problems)
    assert "unknown genre: 'Polka'" in problems
    assert "unknown platform: 'Myspace'" in problems
    assert "select at least one platform" in problems
    assert "cover art is required" in problems
    assert "audio file is required" in problems


@pytest.mark.parametrize("release_date", [None, "", "  "])
def test_missing_release_date(release_date: str | None) -> None:
    with pytest.raises(ValidationError, match="release date is required"):
        validate_submission(
            make_submission(release_date=release_date),
            cover_art=make_media(),
            audio_file=make_audio(),
        )


def test_media_extension_falls_back_to_bin() -> None:
    assert make_audio().extension == "wav"
    assert MediaFile(filename="noext", content=b"x").extension == "bin"
