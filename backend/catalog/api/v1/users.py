"""User registration and activation endpoints."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from catalog.api import deps
from catalog.api.json_body import json_body
from catalog.schemas.auth import ActivationRequest
from catalog.schemas.user import UserCreate, UserEnvelope, UserRead
from catalog.services import user_service

router = APIRouter()


@router.post(
    "",
    response_model=UserEnvelope,
    status_code=status.HTTP_201_CREATED,
    summary="Register user",
)
async def register_user(
    payload: Annotated[UserCreate, Depends(json_body(UserCreate))],
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
) -> UserEnvelope:
    """Create an inactive account.

    An activation token is issued as part of registration; delivering it is
    outside this API, so it is not part of the response.
    """
    user, _activation = await user_service.register_user(
        session,
        name=payload.name,
        email=payload.email,
        password=payload.password,
    )
    return UserEnvelope(user=UserRead.model_validate(user))


@router.put("/activated", response_model=UserEnvelope, summary="Activate user")
async def activate_user(
    payload: Annotated[ActivationRequest, Depends(json_body(ActivationRequest))],
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
) -> UserEnvelope:
    """Activate the account that owns the supplied activation token."""
    user = await user_service.activate_user(session, token_plaintext=payload.token)
    return UserEnvelope(user=UserRead.model_validate(user))
