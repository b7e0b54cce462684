"""Initial portal schema: profiles, songs and status history.

Revision ID: 0001
Revises:
Create Date: 2026-09-28 10:12:00
"""

from __future__ import annotations

from collections.abc import Sequence

import sqlalchemy as sa
from alembic import op

revision: str = "0001"
down_revision: str | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None

_USER_ROLE = sa.Enum("USER", "ADMIN", name="userrole", native_enum=False)
_SONG_STATUS = sa.Enum("PENDING", "APPROVED", "REJECTED", name="songstatus", native_enum=False)
_GENRE = sa.Enum(
    "Pop",
    "Rock",
    "Hip Hop / Rap",
    "Electronic",
    "Jazz",
    "Classical",
    "Country",
    "Metal",
    "R&B / Soul",
    "Reggae",
    "Folk / Acoustic",
    "Other",
    name="genre",
    native_enum=False,
)


def upgrade() -> None:
    op.create_table(
        "profiles",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("username", sa.String(), nullable=False),
        sa.Column("role", _USER_ROLE, nullable=False),
        sa.Column("is_banned", sa.Boolean(), nullable=False),
        sa.Column("paypal_email", sa.String(), nullable=True),
        sa.Column("bank_account_iban", sa.String(), nullable=True),
        sa.Column("bank_account_swift", sa.String(), nullable=True),
        sa.PrimaryKeyConstraint("id", name=op.f("pk_profiles")),
        sa.UniqueConstraint("username", name=op.f("uq_profiles_username")),
    )
    op.create_table(
        "songs",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("user_id", sa.Uuid(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("release_date", sa.Date(), nullable=False),
        sa.Column("album_title", sa.String(), nullable=False),
        sa.Column("artist_names", sa.String(), nullable=False),
        sa.Column("genre", _GENRE, nullable=False),
        sa.Column("upc", sa.String(), nullable=True),
        sa.Column("isrc", sa.String(), nullable=True),
        sa.Column("cover_art_url", sa.String(), nullable=False),
        sa.Column("audio_file_url", sa.String(), nullable=False),
        sa.Column("platforms", sa.String(), nullable=False),
        sa.Column("status", _SONG_STATUS, nullable=False),
        sa.Column("rejection_reason", sa.Text(), nullable=True),
        sa.Column("revision", sa.Integer(), nullable=False),
        sa.ForeignKeyConstraint(
            ["user_id"],
            ["profiles.id"],
            name=op.f("fk_songs_user_id_profiles"),
            ondelete="CASCADE",
        ),
        sa.PrimaryKeyConstraint("id", name=op.f("pk_songs")),
    )
    op.create_index("ix_songs_status_created_at", "songs", ["status", "created_at"])
    op.create_index("ix_songs_user_id", "songs", ["user_id"])
    op.create_table(
        "song_status_history",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("song_id", sa.Uuid(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("status", _SONG_STATUS, nullable=False),
        sa.Column("user_id", sa.Uuid(), nullable=False),
        sa.Column("reason", sa.Text(), nullable=True),
        sa.ForeignKeyConstraint(
            ["song_id"],
            ["songs.id"],
            name=op.f("fk_song_status_history_song_id_songs"),
            ondelete="CASCADE",
        ),
        sa.ForeignKeyConstraint(
            ["user_id"],
            ["profiles.id"],
            name=op.f("fk_song_status_history_user_id_profiles"),
        ),
        sa.PrimaryKeyConstraint("id", name=op.f("pk_song_status_history")),
    )
    op.create_index(
        "ix_song_status_history_song_id",
        "song_status_history",
        ["song_id", "created_at"],
    )


def downgrade() -> None:
    op.drop_index("ix_song_status_history_song_id", table_name="song_status_history")
    op.drop_table("song_status_history")
    op.drop_index("ix_songs_user_id", table_name="songs")
    op.drop_index("ix_songs_status_created_at", table_name="songs")
    op.drop_table("songs")
    op.drop_table("profiles")
