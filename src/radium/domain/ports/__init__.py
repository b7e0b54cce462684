"""Domain port definitions for adapters."""

from __future__ import annotations

from .identity import IdentityProvider, Session
from .media import BlobStore
from .persistence import (
    ProfileRepository,
    Repository,
    SongRepository,
    StatusHistoryRepository,
)
from .unit_of_work import (
    PortalRepositories,
    PortalUnitOfWork,
    RepositoryCollection,
    UnitOfWork,
    UnitOfWorkFactory,
)

__all__ = [
    "BlobStore",
    "IdentityProvider",
    "PortalRepositories",
    "PortalUnitOfWork",
    "ProfileRepository",
    "Repository",
    "RepositoryCollection",
    "Session",
    "SongRepository",
    "StatusHistoryRepository",
    "UnitOfWork",
    "UnitOfWorkFactory",
]
