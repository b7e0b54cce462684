"""Top-level portal wiring options."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal, cast

from .env import optional_env_var
from .errors import ConfigurationError

type BlobBackend = Literal["local", "backend"]

_BLOB_BACKENDS: frozenset[str] = frozenset({"local", "backend"})


@dataclass(frozen=True, slots=True)
class PortalConfig:
    blob_backend: BlobBackend = "local"


def get_portal_config() -> PortalConfig:
    blob_backend = (optional_env_var("RADIUM_BLOB_BACKEND") or "local").lower()
    if blob_backend not in _BLOB_BACKENDS:
        raise ConfigurationError(
            f"Unsupported blob backend {blob_backend!r}; expected one of: "
            + ", ".join(sorted(_BLOB_BACKENDS))
        )
    return PortalConfig(blob_backend=cast("BlobBackend", blob_backend))
