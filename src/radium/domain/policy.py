"""Authorization rules, defined once for the engine and for presentation gating."""

from __future__ import annotations

from typing import TYPE_CHECKING

from radium.domain.errors import AccountBannedError, AuthorizationError

if TYPE_CHECKING:
    from radium.domain.model import Profile, Song


def can_moderate(profile: Profile) -> bool:
    return profile.is_admin and not profile.is_banned


def can_view(profile: Profile, song: Song) -> bool:
    if profile.is_banned:
        return False
    return profile.is_admin or song.user_id == profile.id


def can_submit(profile: Profile) -> bool:
    return not profile.is_banned


def can_edit_profile(actor: Profile, target: Profile) -> bool:
    if actor.is_banned:
        return False
    return actor.is_admin or actor.id == target.id


def require_active(profile: Profile) -> None:
    if profile.is_banned:
        raise AccountBannedError(profile.id)


def require_moderator(profile: Profile) -> None:
    require_active(profile)
    if not can_moderate(profile):
        raise AuthorizationError("You do not have permission to moderate releases.")


def require_viewer(profile: Profile, song: Song) -> None:
    require_active(profile)
    if not can_view(profile, song):
        raise AuthorizationError("You are not authorized to view this song.")


def require_submitter(profile: Profile) -> None:
    require_active(profile)


def require_profile_editor(actor: Profile, target: Profile) -> None:
    require_active(actor)
    if not can_edit_profile(actor, target):
        raise AuthorizationError("You may only edit your own profile.")
