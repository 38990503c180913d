"""Request/response schemas for user administration endpoints."""

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, Field, field_validator

Role = Literal["admin", "user"]


def _blank_role_to_none(v: object) -> object:
    """An empty role means "not supplied"; unknown roles are still rejected."""
    if isinstance(v, str) and not v.strip():
        return None
    return v


class UserCreate(BaseModel):
    """
    Body for POST /users.

    Required fields are optional here so that missing values produce the
    service's 'Invalid data' error rather than a schema error.
    """

    username: str | None = Field(default=None, max_length=255)
    firstname: str | None = Field(default=None, max_length=255)
    lastname: str | None = Field(default=None, max_length=255)
    password: str | None = Field(default=None, max_length=128)
    role: Role | None = None

    @field_validator("role", mode="before")
    @classmethod
    def validate_role(cls, v: object) -> object:
        return _blank_role_to_none(v)


class UserUpdate(BaseModel):
    """Body for PUT /users/{id}; any subset of fields. Empty values are ignored."""

    username: str | None = Field(default=None, max_length=255)
    firstname: str | None = Field(default=None, max_length=255)
    lastname: str | None = Field(default=None, max_length=255)
    password: str | None = Field(default=None, max_length=128)
    role: Role | None = None

    @field_validator("role", mode="before")
    @classmethod
    def validate_role(cls, v: object) -> object:
        return _blank_role_to_none(v)


class UserPublic(BaseModel):
    """User as exposed over the API (no password hash)."""

    id: int
    username: str
    firstname: str
    lastname: str
    role: str
    created_at: datetime | None = None
    updated_at: datetime | None = None

    class Config:
        from_attributes = True


class UserCreatedResponse(BaseModel):
    """Minimal projection returned by POST /users."""

    id: int
    username: str
    role: str


class UserUpdatedResponse(BaseModel):
    """Response for PUT /users/{id}."""

    message: str = "User updated successfully"
    user: UserPublic


class MessageResponse(BaseModel):
    """Plain message body (deletes and errors)."""

    message: str
