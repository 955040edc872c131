"""
Pydantic schemas for public user endpoints.
"""

from __future__ import annotations

from pydantic import BaseModel

from public_api.core.user_service import User


class CreateUserRequest(BaseModel):
    name: str = ""


class CreateUserResponse(BaseModel):
    user: User
