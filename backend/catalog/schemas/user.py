"""User-related schemas."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict


class UserCreate(BaseModel):
    """Registration body; shape only, rules live in the user service."""

    name: str | None = None
    email: str | None = None
    password: str | None = None

    model_config = ConfigDict(extra="forbid", strict=True)


class UserRead(BaseModel):
    """Serialized user; the password hash is never exposed."""

    id: int
    created_at: datetime
    name: str
    email: str
    activated: bool

    model_config = ConfigDict(from_attributes=True)


class UserEnvelope(BaseModel):
    user: UserRead
