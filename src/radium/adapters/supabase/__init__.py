"""HTTP adapters for the hosted auth + object storage backend."""

from __future__ import annotations

from .auth import HttpIdentityProvider
from .schema import AuthSession, AuthUser, SignUpResponse, StorageUploadResponse
from .storage import HttpBlobStore

__all__ = [
    "AuthSession",
    "AuthUser",
    "HttpBlobStore",
    "HttpIdentityProvider",
    "SignUpResponse",
    "StorageUploadResponse",
]
