from __future__ import annotations

import logging
from pathlib import Path  # noqa: TC003
from typing import TYPE_CHECKING

import pytest

from radium.adapters.local_storage import LocalBlobStore
from radium.app import create_portal, load_review_queue
from radium.config import PortalConfig
from radium.domain.errors import AuthenticationError, TransientStoreError
from radium.domain.model import SongFilter, SongStatus, UserRole
from radium.domain.review import ReviewWorkflow
from tests.helpers.portal import add_profile, make_audio, make_media, make_submission

if TYPE_CHECKING:
    from collections.abc import Callable

    from radium.adapters.sqlalchemy.unit_of_work import SqlAlchemyUnitOfWork
    from tests.helpers.portal import FakeBlobStore, FakeIdentityProvider, FrozenClock

    UowFactory = Callable[[], SqlAlchemyUnitOfWork]


def test_create_portal_shares_adapters(
    sqlite_unit_of_work: UowFactory,
    blob_store: FakeBlobStore,
    identity: FakeIdentityProvider,
    clock: FrozenClock,
) -> None:
    portal = create_portal(
        unit_of_work_factory=sqlite_unit_of_work,
        blob_store=blob_store,
        identity=identity,
        clock=clock,
        config=PortalConfig(),
    )
    owner = portal.accounts.register(email="alice@example.com", password="pw", username="alice")
    admin = add_profile(sqlite_unit_of_work, "root", role=UserRole.ADMIN)

    song = portal.review.submit(
        owner_id=owner.id,
        submission=make_submission(),
        cover_art=make_media(),
        audio_file=make_audio(),
    )
    approved = portal.review.approve(song_id=song.id, actor_id=admin.id)

    assert portal.blob_store is blob_store
    assert portal.identity is identity
    assert approved.status is SongStatus.APPROVED
    assert song.created_at == clock.now
    assert len(blob_store.puts) == 2


def test_create_portal_without_backend_disables_sign_in(
    monkeypatch: pytest.MonkeyPatch,
    tmp_path: Path,
    sqlite_unit_of_work: UowFactory,
) -> None:
    monkeypatch.delenv("RADIUM_BACKEND_URL", raising=False)
    monkeypatch.delenv("RADIUM_BACKEND_KEY", raising=False)
    monkeypatch.setenv("RADIUM_DATA_DIR", str(tmp_path))

    portal = create_portal(unit_of_work_factory=sqlite_unit_of_work, config=PortalConfig())

    assert portal.identity is None
    assert isinstance(portal.blob_store, LocalBlobStore)
    with pytest.raises(AuthenticationError):
        portal.accounts.sign_in(email="alice@example.com", password="pw")


def test_load_review_queue_lists_pending_songs(
    sqlite_unit_of_work: UowFactory,
    blob_store: FakeBlobStore,
    identity: FakeIdentityProvider,
) -> None:
    portal = create_portal(
        unit_of_work_factory=sqlite_unit_of_work,
        blob_store=blob_store,
        identity=identity,
        config=PortalConfig(),
    )
    owner = add_profile(sqlite_unit_of_work, "alice")
    admin = add_profile(sqlite_unit_of_work, "root", role=UserRole.ADMIN)
    song = portal.review.submit(
        owner_id=owner.id,
        submission=make_submission(),
        cover_art=make_media(),
        audio_file=make_audio(),
    )

    listings = load_review_queue(portal, actor_id=admin.id)

    assert [listing.song.id for listing in listings] == [song.id]
    assert listings[0].uploader_username == "alice"
    assert load_review_queue(portal, actor_id=admin.id, song_filter=SongFilter.REVIEWED) == []


def test_load_review_queue_degrades_on_store_failure(
    monkeypatch: pytest.MonkeyPatch,
    caplog: pytest.LogCaptureFixture,
    sqlite_unit_of_work: UowFactory,
    blob_store: FakeBlobStore,
    identity: FakeIdentityProvider,
) -> None:
    portal = create_portal(
        unit_of_work_factory=sqlite_unit_of_work,
        blob_store=blob_store,
        identity=identity,
        config=PortalConfig(),
    )
    admin = add_profile(sqlite_unit_of_work, "root", role=UserRole.ADMIN)

    def failing_list(*_: object, **__: object) -> list[object]:
        raise TransientStoreError("database is locked")

    monkeypatch.setattr(ReviewWorkflow, "list_songs", failing_list)

    with caplog.at_level(logging.ERROR, logger="radium.app"):
        assert load_review_queue(portal, actor_id=admin.id) == []

    assert "review queue" in caplog.text
