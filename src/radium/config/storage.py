"""Where the portal keeps its SQLite database and locally stored media."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Final

APP_DIR_NAME: Final[str] = "radium"
DEFAULT_DB_FILENAME: Final[str] = "radium.db"
MEDIA_DIRNAME: Final[str] = "media"


@dataclass(frozen=True, slots=True)
class StorageConfig:
    """Local storage layout.

    The database file lives directly in ``data_dir``. Media buckets live under
    ``media_dir`` when one is given (e.g. a separately mounted volume), otherwise
    under ``data_dir / "media"``. Directories are created on first access.
    """

    data_dir: Path
    media_dir: Path | None = None
    database_filename: str = DEFAULT_DB_FILENAME

    def database_file(self) -> Path:
        return _ensure_dir(self.data_dir) / self.database_filename

    def media_root(self) -> Path:
        if self.media_dir is not None:
            return _ensure_dir(self.media_dir)
        return _ensure_dir(self.data_dir / MEDIA_DIRNAME)

    def database_uri(self) -> str:
        return f"sqlite+pysqlite:///{self.database_file()}"


@dataclass(frozen=True, slots=True)
class DatabaseConfig:
    uri: str


def _ensure_dir(path: Path) -> Path:
    resolved = path.expanduser().resolve()
    resolved.mkdir(parents=True, exist_ok=True)
    return resolved


def _platform_data_home() -> Path:
    if os.name == "nt":
        local_app_data = os.getenv("LOCALAPPDATA")
        return Path(local_app_data) if local_app_data else Path.home() / "AppData" / "Local"
    xdg_data_home = os.getenv("XDG_DATA_HOME")
    return Path(xdg_data_home) if xdg_data_home else Path.home() / ".local" / "share"


def get_storage_config() -> StorageConfig:
    """Read ``RADIUM_DATA_DIR`` and ``RADIUM_MEDIA_DIR``; both are optional."""

    data_dir = os.getenv("RADIUM_DATA_DIR")
    media_dir = os.getenv("RADIUM_MEDIA_DIR")
    return StorageConfig(
        data_dir=Path(data_dir) if data_dir else _platform_data_home() / APP_DIR_NAME,
        media_dir=Path(media_dir) if media_dir else None,
    )


def get_database_config(*, storage: StorageConfig | None = None) -> DatabaseConfig:
    """``DATABASE_URI`` wins; otherwise a SQLite file in the data dir."""

    uri = os.getenv("DATABASE_URI") or (storage or get_storage_config()).database_uri()
    return DatabaseConfig(uri=uri)
