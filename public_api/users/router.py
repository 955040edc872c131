"""
Public user endpoints.
"""

from __future__ import annotations

from fastapi import APIRouter

from . import schemas, service

router = APIRouter()


@router.post("/public-api/users", response_model=schemas.CreateUserResponse)
async def create_user(request: schemas.CreateUserRequest) -> schemas.CreateUserResponse:
    user = await service.create_user(request)
    return schemas.CreateUserResponse(user=user)
