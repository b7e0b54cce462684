"""Environment variable loaders for configuration."""

from __future__ import annotations

import os
from typing import TYPE_CHECKING

from .errors import MissingConfigurationError

if TYPE_CHECKING:
    from collections.abc import Sequence

PLACEHOLDER_PREFIX = "YOUR_"


def _is_unset(value: str) -> bool:
    stripped = value.strip()
    return not stripped or stripped.startswith(PLACEHOLDER_PREFIX)


def require_env_vars(names: Sequence[str]) -> dict[str, str]:
    """Return the given environment variables or raise if any are missing/blank.

    Values still holding a ``YOUR_...`` placeholder from the setup guide count as missing.
    """

    missing: list[str] = []
    values: dict[str, str] = {}
    for name in names:
        value = os.getenv(name)
        if value is None or _is_unset(value):
            missing.append(name)
            continue
        values[name] = value.strip()

    if missing:
        missing_list = ", ".join(sorted(missing))
        raise MissingConfigurationError(f"Missing configuration for: {missing_list}")

    return values


def require_env_var(name: str) -> str:
    """Return a required environment variable by name."""

    return require_env_vars([name])[name]


def optional_env_var(name: str, default: str | None = None) -> str | None:
    value = os.getenv(name)
    if value is None or _is_unset(value):
        return default
    return value.strip()
