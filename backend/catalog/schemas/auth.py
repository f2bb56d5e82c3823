"""Authentication schemas."""
from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict


class AuthenticationRequest(BaseModel):
    """Login payload."""

    email: str | None = None
    password: str | None = None

    model_config = ConfigDict(extra="forbid", strict=True)


class ActivationRequest(BaseModel):
    """Account activation payload."""

    token: str | None = None

    model_config = ConfigDict(extra="forbid", strict=True)


class TokenRead(BaseModel):
    """A freshly issued token; the only time its plaintext is returned."""

    token: str
    expiry: datetime


class AuthenticationTokenEnvelope(BaseModel):
    authentication_token: TokenRead
