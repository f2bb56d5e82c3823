"""Authentication token endpoints."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from catalog.api import deps
from catalog.api.json_body import json_body
from catalog.schemas.auth import (
    AuthenticationRequest,
    AuthenticationTokenEnvelope,
    TokenRead,
)
from catalog.services import auth_service

router = APIRouter()


@router.post(
    "/authentication",
    response_model=AuthenticationTokenEnvelope,
    status_code=status.HTTP_201_CREATED,
    summary="Obtain authentication token",
)
async def create_authentication_token(
    payload: Annotated[
        AuthenticationRequest, Depends(json_body(AuthenticationRequest))
    ],
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
) -> AuthenticationTokenEnvelope:
    """Validate credentials and issue a bearer token."""
    issued = await auth_service.authenticate(
        session, email=payload.email, password=payload.password
    )
    return AuthenticationTokenEnvelope(
        authentication_token=TokenRead(token=issued.plaintext, expiry=issued.expiry)
    )
