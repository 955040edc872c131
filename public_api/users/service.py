"""
Public user business logic: validate, then delegate to the User Service.
"""

from __future__ import annotations

import logging

from fastapi import HTTPException, status

from public_api.core import user_service
from public_api.core.user_service import User

from . import schemas

logger = logging.getLogger(__name__)


async def create_user(payload: schemas.CreateUserRequest) -> User:
    # Whitespace-only names are rejected; accepted names go upstream unchanged.
    if not (payload.name or "").strip():
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="User name is required",
        )

    try:
        return await user_service.create_user(payload.name)
    except user_service.UserServiceError as exc:
        logger.error("create_user_failed error=%s", exc)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to create user",
        ) from exc
