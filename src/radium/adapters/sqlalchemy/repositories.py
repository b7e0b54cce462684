"""Repository implementations backed by SQLAlchemy sessions."""

from __future__ import annotations

from contextlib import contextmanager
from logging import getLogger
from typing import TYPE_CHECKING

from sqlalchemy import func, select
from sqlalchemy.exc import DBAPIError, IntegrityError, OperationalError
from sqlalchemy.orm.exc import StaleDataError

from radium.adapters.sqlalchemy.mappings import (
    profile_table,
    song_status_history_table,
    song_table,
)
from radium.domain.errors import ConflictError, TransientStoreError
from radium.domain.model import Profile, Song, StatusHistoryEntry

if TYPE_CHECKING:
    import uuid
    from collections.abc import Collection, Iterable, Iterator

    from sqlalchemy.orm import Session

    from radium.domain.model import SongStatus

log = getLogger(__name__)


@contextmanager
def translate_errors(action: str) -> Iterator[None]:
    """Re-raise driver failures as domain errors."""

    try:
        yield
    except StaleDataError as exc:
        raise ConflictError(f"{action}: row changed concurrently") from exc
    except IntegrityError as exc:
        raise ConflictError(f"{action}: {exc.orig}") from exc
    except (OperationalError, DBAPIError) as exc:
        log.warning("Database failure during %s: %s", action, exc)
        raise TransientStoreError(f"{action} failed: {exc.orig}") from exc


class SqlAlchemyProfileRepository:
    def __init__(self, session: Session) -> None:
        self.session = session

    def add(self, entity: Profile) -> None:
        self.session.add(entity)

    def get(self, entity_id: uuid.UUID) -> Profile | None:
        with translate_errors("load profile"):
            return self.session.get(Profile, entity_id)

    def get_many(self, profile_ids: Iterable[uuid.UUID]) -> dict[uuid.UUID, Profile]:
        ids = set(profile_ids)
        if not ids:
            return {}
        stmt = select(Profile).where(profile_table.c.id.in_(ids))
        with translate_errors("load profiles"):
            return {profile.id: profile for profile in self.session.scalars(stmt)}

    def get_by_username(self, username: str) -> Profile | None:
        stmt = select(Profile).where(profile_table.c.username == username)
        with translate_errors("load profile by username"):
            return self.session.scalars(stmt).one_or_none()

    def list(self) -> list[Profile]:
        stmt = select(Profile).order_by(profile_table.c.username)
        with translate_errors("list profiles"):
            return list(self.session.scalars(stmt))


class SqlAlchemySongRepository:
    def __init__(self, session: Session) -> None:
        self.session = session

    def add(self, entity: Song) -> None:
        self.session.add(entity)

    def get(self, entity_id: uuid.UUID) -> Song | None:
        with translate_errors("load song"):
            return self.session.get(Song, entity_id)

    def list(
        self,
        *,
        statuses: Collection[SongStatus] | None = None,
        owner_id: uuid.UUID | None = None,
    ) -> list[Song]:
        stmt = select(Song).order_by(song_table.c.created_at.desc())
        if statuses is not None:
            stmt = stmt.where(song_table.c._status.in_(list(statuses)))  # noqa: SLF001
        if owner_id is not None:
            stmt = stmt.where(song_table.c.user_id == owner_id)
        with translate_errors("list songs"):
            return list(self.session.scalars(stmt))

    def remove(self, song: Song) -> None:
        with translate_errors("remove song"):
            self.session.delete(song)


class SqlAlchemyStatusHistoryRepository:
    def __init__(self, session: Session) -> None:
        self.session = session

    def for_song(self, song_id: uuid.UUID) -> list[StatusHistoryEntry]:
        stmt = (
            select(StatusHistoryEntry)
            .where(song_status_history_table.c.song_id == song_id)
            .order_by(song_status_history_table.c.created_at)
        )
        with translate_errors("load status history"):
            return list(self.session.scalars(stmt))

    def count_for_song(self, song_id: uuid.UUID) -> int:
        stmt = (
            select(func.count())
            .select_from(song_status_history_table)
            .where(song_status_history_table.c.song_id == song_id)
        )
        with translate_errors("count status history"):
            return self.session.execute(stmt).scalar_one()
