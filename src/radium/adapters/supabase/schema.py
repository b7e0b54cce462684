"""Minimal Pydantic models for the backend's auth and storage REST payloads."""

from __future__ import annotations

from uuid import UUID  # noqa: TC003

from pydantic import BaseModel, ConfigDict, Field


class BackendBaseModel(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class AuthUser(BackendBaseModel):
    id: UUID
    email: str | None = None
    user_metadata: dict[str, object] = Field(default_factory=dict)


class AuthSession(BackendBaseModel):
    access_token: str
    token_type: str = "bearer"
    expires_in: int | None = None
    refresh_token: str | None = None
    user: AuthUser


class SignUpResponse(BackendBaseModel):
    """Sign-up answers with a session when auto-confirm is on, otherwise the bare user."""

    id: UUID | None = None
    email: str | None = None
    access_token: str | None = None
    user: AuthUser | None = None

    @property
    def user_id(self) -> UUID | None:
        if self.user is not None:
            return self.user.id
        return self.id


class AuthErrorPayload(BackendBaseModel):
    error: str | None = None
    error_description: str | None = None
    error_code: str | None = None
    msg: str | None = None
    message: str | None = None

    @property
    def detail(self) -> str:
        return (
            self.error_description
            or self.msg
            or self.message
            or self.error_code
            or self.error
            or "authentication failed"
        )


class StorageUploadResponse(BackendBaseModel):
    key: str = Field(alias="Key")
    id: str | None = Field(default=None, alias="Id")


class StorageObject(BackendBaseModel):
    name: str
    bucket_id: str | None = None


class StorageErrorPayload(BackendBaseModel):
    status_code: str | None = Field(default=None, alias="statusCode")
    error: str | None = None
    message: str | None = None

    @property
    def detail(self) -> str:
        return self.message or self.error or "storage request failed"
