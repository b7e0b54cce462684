"""Account management: registration, sign-in, usernames, bans and payouts."""

from __future__ import annotations

from dataclasses import dataclass
from logging import getLogger
from typing import TYPE_CHECKING

from radium.domain._lookup import require_profile
from radium.domain.errors import (
    AccountBannedError,
    AuthenticationError,
    ConflictError,
    UsernameTakenError,
    ValidationError,
)
from radium.domain.model import Profile, UserRole
from radium.domain.policy import require_active, require_moderator, require_profile_editor

if TYPE_CHECKING:
    from collections.abc import Sequence
    from uuid import UUID

    from radium.domain.model import PayoutDetails
    from radium.domain.ports import IdentityProvider, Session, UnitOfWorkFactory

log = getLogger(__name__)


@dataclass(frozen=True, slots=True)
class SignedIn:
    session: Session
    profile: Profile


@dataclass(slots=True)
class AccountService:
    unit_of_work_factory: UnitOfWorkFactory
    identity: IdentityProvider | None = None

    def register(self, *, email: str, password: str, username: str) -> Profile:
        """Create the identity and its USER profile."""

        cleaned = _clean_username(username)
        with self.unit_of_work_factory() as uow:
            if uow.repositories.profiles.get_by_username(cleaned) is not None:
                raise UsernameTakenError(cleaned)

        user_id = self._require_identity().sign_up(email, password, username=cleaned)

        with self.unit_of_work_factory() as uow:
            profile = Profile(id=user_id, username=cleaned, role=UserRole.USER)
            uow.repositories.profiles.add(profile)
            try:
                uow.commit()
            except ConflictError as exc:
                raise UsernameTakenError(cleaned) from exc

        log.info("Registered profile %s (%s)", profile.id, profile.username)
        return profile

    def sign_in(self, *, email: str, password: str) -> SignedIn:
        identity = self._require_identity()
        session = identity.sign_in(email, password)
        with self.unit_of_work_factory() as uow:
            profile = require_profile(uow, session.user_id)
        if profile.is_banned:
            identity.sign_out()
            raise AccountBannedError(profile.id)
        return SignedIn(session=session, profile=profile)

    def current_profile(self) -> Profile:
        session = self._require_identity().current_session()
        if session is None:
            raise AuthenticationError("Not signed in.")
        with self.unit_of_work_factory() as uow:
            profile = require_profile(uow, session.user_id)
        require_active(profile)
        return profile

    def get_profile(self, *, actor_id: UUID, target_id: UUID) -> Profile:
        """Profile as seen by its owner or an admin, payout details included."""

        with self.unit_of_work_factory() as uow:
            actor = require_profile(uow, actor_id)
            target = require_profile(uow, target_id)
            require_profile_editor(actor, target)
        return target

    def rename(self, *, actor_id: UUID, target_id: UUID, username: str) -> Profile:
        cleaned = _clean_username(username)
        with self.unit_of_work_factory() as uow:
            actor = require_profile(uow, actor_id)
            target = require_profile(uow, target_id)
            require_profile_editor(actor, target)

            holder = uow.repositories.profiles.get_by_username(cleaned)
            if holder is not None and holder.id != target.id:
                raise UsernameTakenError(cleaned)
            target.rename(cleaned)
            try:
                uow.commit()
            except ConflictError as exc:
                raise UsernameTakenError(cleaned) from exc
        return target

    def set_banned(self, *, actor_id: UUID, target_id: UUID, banned: bool) -> Profile:
        with self.unit_of_work_factory() as uow:
            actor = require_profile(uow, actor_id)
            require_moderator(actor)
            target = require_profile(uow, target_id)
            if banned:
                target.ban()
            else:
                target.unban()
            uow.commit()

        log.info("Profile %s %s by %s", target.id, "banned" if banned else "unbanned", actor_id)
        return target

    def update_payouts(
        self,
        *,
        actor_id: UUID,
        target_id: UUID,
        details: PayoutDetails,
    ) -> Profile:
        with self.unit_of_work_factory() as uow:
            actor = require_profile(uow, actor_id)
            require_moderator(actor)
            target = require_profile(uow, target_id)
            target.update_payouts(details)
            uow.commit()

        log.info("Payout details updated for %s by %s", target.id, actor_id)
        return target

    def list_profiles(self, *, actor_id: UUID) -> Sequence[Profile]:
        with self.unit_of_work_factory() as uow:
            actor = require_profile(uow, actor_id)
            require_moderator(actor)
            return uow.repositories.profiles.list()

    def _require_identity(self) -> IdentityProvider:
        if self.identity is None:
            raise AuthenticationError("No identity provider is configured.")
        return self.identity


def _clean_username(username: str) -> str:
    cleaned = username.strip()
    if not cleaned:
        raise ValidationError(["username is required"])
    return cleaned
