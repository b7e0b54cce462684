"""
Base building blocks:
identity and time helpers shared by all portal entities.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import UTC, datetime
from uuid import UUID, uuid4


def new_id() -> UUID:
    return uuid4()


def utc_now() -> datetime:
    return datetime.now(tz=UTC)


@dataclass(eq=False, kw_only=True)
class Entity:
    """Internal identity exists immediately in the domain."""

    id: UUID = field(default_factory=new_id)
