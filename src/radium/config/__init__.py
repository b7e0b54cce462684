"""Application configuration helpers."""

from __future__ import annotations

from .backend import BackendConfig, get_backend_config
from .env import optional_env_var, require_env_var, require_env_vars
from .errors import ConfigurationError, MissingConfigurationError
from .http_resilience import RateLimit, ResilienceConfig, RetryPolicy
from .logging import configure_logging
from .portal import PortalConfig, get_portal_config
from .storage import DatabaseConfig, StorageConfig, get_database_config, get_storage_config

__all__ = [
    "BackendConfig",
    "ConfigurationError",
    "DatabaseConfig",
    "MissingConfigurationError",
    "PortalConfig",
    "RateLimit",
    "ResilienceConfig",
    "RetryPolicy",
    "StorageConfig",
    "configure_logging",
    "get_backend_config",
    "get_database_config",
    "get_portal_config",
    "get_storage_config",
    "optional_env_var",
    "require_env_var",
    "require_env_vars",
]
