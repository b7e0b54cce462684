"""Application composition: wires adapters into the review and account services."""

from __future__ import annotations

from dataclasses import dataclass
from logging import getLogger
from typing import TYPE_CHECKING

from radium.adapters.local_storage import LocalBlobStore
from radium.adapters.sqlalchemy.unit_of_work import SqlAlchemyUnitOfWork, is_started, startup
from radium.adapters.supabase import HttpBlobStore, HttpIdentityProvider
from radium.config import MissingConfigurationError, get_backend_config, get_portal_config
from radium.domain.accounts import AccountService
from radium.domain.errors import TransientStoreError
from radium.domain.model import SongFilter
from radium.domain.review import ReviewWorkflow

if TYPE_CHECKING:
    from uuid import UUID

    from radium.config import PortalConfig
    from radium.domain.ports import BlobStore, IdentityProvider, UnitOfWorkFactory
    from radium.domain.review import Clock, SongListing

log = getLogger(__name__)


@dataclass(frozen=True, slots=True)
class Portal:
    """Services sharing one unit-of-work factory, blob store and identity provider."""

    review: ReviewWorkflow
    accounts: AccountService
    blob_store: BlobStore
    identity: IdentityProvider | None


def _build_identity() -> HttpIdentityProvider | None:
    try:
        backend = get_backend_config()
    except MissingConfigurationError as exc:
        log.info("Backend auth not configured, sign-in disabled: %s", exc)
        return None
    return HttpIdentityProvider(config=backend)


def _build_blob_store(config: PortalConfig, identity: IdentityProvider | None) -> BlobStore:
    if config.blob_backend == "backend":
        token = identity.access_token if isinstance(identity, HttpIdentityProvider) else None
        return HttpBlobStore(config=get_backend_config(), access_token=token)
    return LocalBlobStore()


def create_portal(
    *,
    unit_of_work_factory: UnitOfWorkFactory | None = None,
    blob_store: BlobStore | None = None,
    identity: IdentityProvider | None = None,
    clock: Clock | None = None,
    config: PortalConfig | None = None,
) -> Portal:
    """Build the portal services, starting the database adapter when needed."""

    if unit_of_work_factory is None:
        if not is_started():
            startup()
        unit_of_work_factory = SqlAlchemyUnitOfWork

    portal_config = config or get_portal_config()
    effective_identity = identity if identity is not None else _build_identity()
    effective_store = blob_store or _build_blob_store(portal_config, effective_identity)

    review = (
        ReviewWorkflow(unit_of_work_factory, effective_store, clock)
        if clock is not None
        else ReviewWorkflow(unit_of_work_factory, effective_store)
    )
    log.debug("Portal created: blob_backend=%s", portal_config.blob_backend)
    return Portal(
        review=review,
        accounts=AccountService(unit_of_work_factory, effective_identity),
        blob_store=effective_store,
        identity=effective_identity,
    )


def load_review_queue(
    portal: Portal,
    *,
    actor_id: UUID,
    song_filter: SongFilter = SongFilter.PENDING,
) -> list[SongListing]:
    """Admin listing for background refreshes: store failures degrade to an empty list."""

    try:
        return portal.review.list_songs(actor_id=actor_id, song_filter=song_filter)
    except TransientStoreError:
        log.exception("Could not load the %s review queue", song_filter)
        return []
