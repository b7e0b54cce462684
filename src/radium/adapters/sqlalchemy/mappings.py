"""SQLAlchemy mapping metadata for the Radium domain model."""

from __future__ import annotations

import json
import logging
import uuid
from datetime import UTC, datetime
from functools import cache
from typing import TYPE_CHECKING, Any, cast

from sqlalchemy import (
    Boolean,
    Column,
    Date,
    DateTime,
    Dialect,
    Enum,
    ForeignKey,
    Index,
    Integer,
    String,
    Table,
    Text,
    TypeDecorator,
    Uuid,
    orm,
)
from sqlalchemy.orm import composite, configure_mappers, relationship

from radium.domain.model import (
    Genre,
    PayoutDetails,
    Platform,
    Profile,
    Song,
    SongStatus,
    StatusHistoryEntry,
    UserRole,
)

if TYPE_CHECKING:
    from sqlalchemy.engine import Engine

log = logging.getLogger(__name__)

UUIDColumnType = Uuid[uuid.UUID]


class UTCDateTime(TypeDecorator[datetime]):
    impl = DateTime(timezone=True)
    cache_ok = True

    def process_bind_param(self, value: datetime | None, dialect: Dialect) -> datetime | None:
        _ = dialect
        if value is None:
            return None
        if value.tzinfo is None:
            value = value.replace(tzinfo=UTC)
        return value.astimezone(UTC)

    def process_result_value(self, value: datetime | None, dialect: Dialect) -> datetime | None:
        _ = dialect
        if value is None:
            return None
        return value if value.tzinfo else value.replace(tzinfo=UTC)


class PlatformListType(TypeDecorator[tuple[Platform, ...]]):
    """Platforms as a JSON list; order is kept for display."""

    impl = String
    cache_ok = True

    def process_bind_param(
        self, value: tuple[Platform, ...] | None, dialect: Dialect
    ) -> str | None:
        _ = dialect
        if value is None:
            return None
        return json.dumps([platform.value for platform in value])

    def process_result_value(self, value: str | None, dialect: Dialect) -> tuple[Platform, ...]:
        _ = dialect
        if value is None:
            return ()
        loaded = json.loads(value)
        if not isinstance(loaded, list):
            return ()
        items = cast(list[Any], loaded)
        return tuple(Platform(item) for item in items if isinstance(item, str))


def _enum_values(enum_cls: type[Genre]) -> list[str]:
    return [member.value for member in enum_cls]


mapper_registry = orm.registry()
mapper_registry.metadata.naming_convention = {
    "ix": "ix_%(column_0_label)s",
    "uq": "uq_%(table_name)s_%(column_0_name)s",
    "ck": "ck_%(table_name)s_%(constraint_name)s",
    "fk": "fk_%(table_name)s_%(column_0_name)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s",
}

profile_table = Table(
    "profiles",
    mapper_registry.metadata,
    Column("id", UUIDColumnType, primary_key=True, default=uuid.uuid4),
    Column("username", String, nullable=False, unique=True),
    Column("role", Enum(UserRole, native_enum=False), nullable=False, default=UserRole.USER),
    Column("is_banned", Boolean, nullable=False, default=False),
    Column("paypal_email", String, nullable=True),
    Column("bank_account_iban", String, nullable=True),
    Column("bank_account_swift", String, nullable=True),
)

song_table = Table(
    "songs",
    mapper_registry.metadata,
    Column("id", UUIDColumnType, primary_key=True, default=uuid.uuid4),
    Column(
        "user_id",
        UUIDColumnType,
        ForeignKey("profiles.id", ondelete="CASCADE"),
        nullable=False,
    ),
    Column("created_at", UTCDateTime(), nullable=False),
    Column("release_date", Date, nullable=False),
    Column("album_title", String, nullable=False),
    Column("artist_names", String, nullable=False),
    Column(
        "genre",
        Enum(Genre, native_enum=False, values_callable=_enum_values),
        nullable=False,
    ),
    Column("upc", String, nullable=True),
    Column("isrc", String, nullable=True),
    Column("cover_art_url", String, nullable=False),
    Column("audio_file_url", String, nullable=False),
    Column("platforms", PlatformListType(), nullable=False),
    Column("status", Enum(SongStatus, native_enum=False), key="_status", nullable=False),
    Column("rejection_reason", Text, key="_rejection_reason", nullable=True),
    Column("revision", Integer, nullable=False),
)
Index("ix_songs_status_created_at", song_table.c._status, song_table.c.created_at)  # noqa: SLF001
Index("ix_songs_user_id", song_table.c.user_id)

song_status_history_table = Table(
    "song_status_history",
    mapper_registry.metadata,
    Column("id", UUIDColumnType, primary_key=True, default=uuid.uuid4),
    Column(
        "song_id",
        UUIDColumnType,
        ForeignKey("songs.id", ondelete="CASCADE"),
        nullable=False,
    ),
    Column("created_at", UTCDateTime(), nullable=False),
    Column("status", Enum(SongStatus, native_enum=False), nullable=False),
    Column("user_id", UUIDColumnType, ForeignKey("profiles.id"), nullable=False),
    Column("reason", Text, nullable=True),
)
Index(
    "ix_song_status_history_song_id",
    song_status_history_table.c.song_id,
    song_status_history_table.c.created_at,
)


@cache
def start_mappers() -> orm.registry:
    """Configure SQLAlchemy mappers for the domain model."""

    log.info("Starting SQLAlchemy mappers")

    mapper_registry.map_imperatively(
        Profile,
        profile_table,
        properties={
            "payout": composite(
                PayoutDetails,
                profile_table.c.paypal_email,
                profile_table.c.bank_account_iban,
                profile_table.c.bank_account_swift,
            ),
        },
    )

    mapper_registry.map_imperatively(
        Song,
        song_table,
        properties={
            "_history": relationship(
                StatusHistoryEntry,
                cascade="all, delete-orphan",
                order_by=song_status_history_table.c.created_at,
                lazy="selectin",
            ),
        },
        version_id_col=song_table.c.revision,
    )

    mapper_registry.map_imperatively(
        StatusHistoryEntry,
        song_status_history_table,
    )

    configure_mappers()
    return mapper_registry


def create_all_tables(engine: Engine) -> None:
    """Create database tables for the mapped metadata."""

    log.info("Creating all tables")
    mapper_registry.metadata.create_all(engine)
