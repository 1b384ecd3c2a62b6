"""Pydantic schemas for user API payloads."""

from __future__ import annotations

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel
from pydantic import ConfigDict
from pydantic import Field
from pydantic.alias_generators import to_camel

EMAIL_PATTERN = r"^[^@\s]+@[^@\s]+\.[^@\s]+$"
MOBILE_NUMBER_PATTERN = r"^\+?[0-9]{8,15}$"


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class UserCreate(CamelModel):
    """Payload to create a user."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="forbid")

    first_name: str = Field(min_length=1, max_length=100)
    last_name: str | None = Field(default=None, max_length=100)
    email: str = Field(max_length=255, pattern=EMAIL_PATTERN)
    mobile_number: str = Field(pattern=MOBILE_NUMBER_PATTERN)
    password: str = Field(min_length=8, max_length=128)
    role: UUID


class UserUpdate(CamelModel):
    """Payload to update the name fields of a user."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="forbid")

    first_name: str = Field(min_length=1, max_length=100)
    last_name: str | None = Field(default=None, max_length=100)


class Permission(CamelModel):
    """Permission response payload."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)

    id: UUID
    name: str
    is_active: bool


class Role(CamelModel):
    """Role response payload with its active permissions."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)

    id: UUID
    name: str
    is_active: bool
    permissions: list[Permission] = Field(default_factory=list)


class User(CamelModel):
    """Public user payload; the password hash is never exposed."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)

    id: UUID
    first_name: str
    last_name: str | None = None
    email: str
    mobile_number: str
    role_id: UUID
    created_at: datetime
    updated_at: datetime


class UserWithRole(User):
    """Public user payload with the populated role."""

    role: Role | None = None
