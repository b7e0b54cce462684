from __future__ import annotations

from pathlib import Path  # noqa: TC003

import pytest  # noqa: TC002

from radium.config import StorageConfig, get_database_config, get_storage_config
from radium.config.storage import DEFAULT_DB_FILENAME, MEDIA_DIRNAME


def test_media_lives_under_data_dir_by_default(
    monkeypatch: pytest.MonkeyPatch, tmp_path: Path
) -> None:
    monkeypatch.setenv("RADIUM_DATA_DIR", str(tmp_path / "custom-data"))
    monkeypatch.delenv("RADIUM_MEDIA_DIR", raising=False)

    media_root = get_storage_config().media_root()

    assert media_root == (tmp_path / "custom-data" / MEDIA_DIRNAME).resolve()
    assert media_root.is_dir()


def test_media_dir_override(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.setenv("RADIUM_DATA_DIR", str(tmp_path / "data"))
    monkeypatch.setenv("RADIUM_MEDIA_DIR", str(tmp_path / "volume"))

    config = get_storage_config()

    assert config.media_root() == (tmp_path / "volume").resolve()
    assert config.database_file() == (tmp_path / "data" / DEFAULT_DB_FILENAME).resolve()


def test_database_uri_uses_env_override(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("DATABASE_URI", "sqlite:///override.db")

    assert get_database_config().uri == "sqlite:///override.db"


def test_database_uri_creates_data_dir(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.delenv("DATABASE_URI", raising=False)

    uri = get_database_config(storage=StorageConfig(data_dir=tmp_path / "data-dir")).uri

    expected_path = (tmp_path / "data-dir" / DEFAULT_DB_FILENAME).resolve()
    assert uri == f"sqlite+pysqlite:///{expected_path}"
    assert expected_path.parent.exists()
