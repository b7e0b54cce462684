"""SQLAlchemy adapter package for Radium."""

from __future__ import annotations

from .mappings import create_all_tables, mapper_registry, start_mappers
from .repositories import (
    SqlAlchemyProfileRepository,
    SqlAlchemySongRepository,
    SqlAlchemyStatusHistoryRepository,
)

__all__ = [
    "SqlAlchemyProfileRepository",
    "SqlAlchemySongRepository",
    "SqlAlchemyStatusHistoryRepository",
    "create_all_tables",
    "mapper_registry",
    "start_mappers",
]
