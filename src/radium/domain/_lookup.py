from __future__ import annotations

from typing import TYPE_CHECKING

from radium.domain.errors import NotFoundError

if TYPE_CHECKING:
    from uuid import UUID

    from radium.domain.model import Profile, Song
    from radium.domain.ports import PortalUnitOfWork


def require_profile(uow: PortalUnitOfWork, profile_id: UUID) -> Profile:
    profile = uow.repositories.profiles.get(profile_id)
    if profile is None:
        raise NotFoundError("profile", profile_id)
    return profile


def require_song(uow: PortalUnitOfWork, song_id: UUID) -> Song:
    song = uow.repositories.songs.get(song_id)
    if song is None:
        raise NotFoundError("song", song_id)
    return song
