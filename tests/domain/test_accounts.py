from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from radium.domain.accounts import AccountService
from radium.domain.errors import (
    AccountBannedError,
    AuthenticationError,
    AuthorizationError,
    NotFoundError,
    UsernameTakenError,
    ValidationError,
)
from radium.domain.model import PayoutDetails, UserRole, new_id
from tests.helpers.portal import add_profile

if TYPE_CHECKING:
    from collections.abc import Callable

    from radium.adapters.sqlalchemy.unit_of_work import SqlAlchemyUnitOfWork
    from tests.helpers.portal import FakeIdentityProvider

    UowFactory = Callable[[], SqlAlchemyUnitOfWork]


@pytest.fixture
def accounts(
    sqlite_unit_of_work: UowFactory,
    identity: FakeIdentityProvider,
) -> AccountService:
    return AccountService(sqlite_unit_of_work, identity)


def test_register_creates_user_profile(
    accounts: AccountService,
    identity: FakeIdentityProvider,
    sqlite_unit_of_work: UowFactory,
) -> None:
    profile = accounts.register(email="alice@example.com", password="pw", username=" alice ")

    assert profile.username == "alice"
    assert profile.role is UserRole.USER
    assert identity.accounts["alice@example.com"][1] == profile.id
    with sqlite_unit_of_work() as uow:
        stored = uow.repositories.profiles.get_by_username("alice")
        assert stored is not None
        assert stored.id == profile.id


def test_register_refuses_taken_username(
    accounts: AccountService,
    identity: FakeIdentityProvider,
) -> None:
    accounts.register(email="alice@example.com", password="pw", username="alice")

    with pytest.raises(UsernameTakenError):
        accounts.register(email="other@example.com", password="pw", username="alice")

    assert "other@example.com" not in identity.accounts


def test_register_requires_username(accounts: AccountService) -> None:
    with pytest.raises(ValidationError):
        accounts.register(email="alice@example.com", password="pw", username="  ")


def test_sign_in_returns_session_and_profile(accounts: AccountService) -> None:
    profile = accounts.register(email="alice@example.com", password="pw", username="alice")

    signed_in = accounts.sign_in(email="alice@example.com", password="pw")

    assert signed_in.profile.id == profile.id
    assert signed_in.session.user_id == profile.id
    assert accounts.current_profile().id == profile.id


def test_sign_in_with_wrong_password(accounts: AccountService) -> None:
    accounts.register(email="alice@example.com", password="pw", username="alice")

    with pytest.raises(AuthenticationError):
        accounts.sign_in(email="alice@example.com", password="nope")


def test_banned_account_is_signed_out(
    accounts: AccountService,
    identity: FakeIdentityProvider,
    sqlite_unit_of_work: UowFactory,
) -> None:
    root = add_profile(sqlite_unit_of_work, "root", role=UserRole.ADMIN)
    profile = accounts.register(email="alice@example.com", password="pw", username="alice")
    accounts.set_banned(actor_id=root.id, target_id=profile.id, banned=True)

    with pytest.raises(AccountBannedError, match="banned"):
        accounts.sign_in(email="alice@example.com", password="pw")

    assert identity.session is None
    assert identity.sign_outs == 1


def test_current_profile_requires_session(accounts: AccountService) -> None:
    with pytest.raises(AuthenticationError):
        accounts.current_profile()


def test_without_identity_provider_sign_in_is_refused(sqlite_unit_of_work: UowFactory) -> None:
    service = AccountService(sqlite_unit_of_work)

    with pytest.raises(AuthenticationError, match="identity provider"):
        service.sign_in(email="alice@example.com", password="pw")


def test_rename_by_owner_and_admin(
    accounts: AccountService,
    sqlite_unit_of_work: UowFactory,
) -> None:
    alice = add_profile(sqlite_unit_of_work, "alice")
    bob = add_profile(sqlite_unit_of_work, "bob")
    root = add_profile(sqlite_unit_of_work, "root", role=UserRole.ADMIN)

    assert accounts.rename(actor_id=alice.id, target_id=alice.id, username="alicia").username == (
        "alicia"
    )
    assert accounts.rename(actor_id=root.id, target_id=bob.id, username="robert").username == (
        "robert"
    )
    with pytest.raises(AuthorizationError):
        accounts.rename(actor_id=alice.id, target_id=bob.id, username="hacked")
    with pytest.raises(UsernameTakenError):
        accounts.rename(actor_id=alice.id, target_id=alice.id, username="robert")


def test_ban_and_payouts_are_admin_only(
    accounts: AccountService,
    sqlite_unit_of_work: UowFactory,
) -> None:
    alice = add_profile(sqlite_unit_of_work, "alice")
    root = add_profile(sqlite_unit_of_work, "root", role=UserRole.ADMIN)
    details = PayoutDetails(paypal_email="alice@pay.example", bank_account_swift="COBADEFF")

    with pytest.raises(AuthorizationError):
        accounts.set_banned(actor_id=alice.id, target_id=alice.id, banned=False)
    with pytest.raises(AuthorizationError):
        accounts.update_payouts(actor_id=alice.id, target_id=alice.id, details=details)

    accounts.update_payouts(actor_id=root.id, target_id=alice.id, details=details)
    banned = accounts.set_banned(actor_id=root.id, target_id=alice.id, banned=True)

    assert banned.is_banned
    stored = accounts.get_profile(actor_id=root.id, target_id=alice.id)
    assert stored.is_banned
    assert stored.payout == details


def test_list_profiles_sorted_by_username(
    accounts: AccountService,
    sqlite_unit_of_work: UowFactory,
) -> None:
    root = add_profile(sqlite_unit_of_work, "root", role=UserRole.ADMIN)
    add_profile(sqlite_unit_of_work, "zoe")
    add_profile(sqlite_unit_of_work, "alice")

    usernames = [profile.username for profile in accounts.list_profiles(actor_id=root.id)]

    assert usernames == ["alice", "root", "zoe"]


def test_unknown_target_is_not_found(
    accounts: AccountService,
    sqlite_unit_of_work: UowFactory,
) -> None:
    root = add_profile(sqlite_unit_of_work, "root", role=UserRole.ADMIN)

    with pytest.raises(NotFoundError):
        accounts.set_banned(actor_id=root.id, target_id=new_id(), banned=True)
