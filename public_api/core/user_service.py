"""
User Service HTTP client helpers.

Used endpoints:
- GET  /users/{id}  -> {"result": true, "user": {...}} or 404 when unknown
- POST /users       -> {"result": true, "user": {...}} (form-encoded `name`)
"""

from __future__ import annotations

import asyncio
from typing import Any

import httpx
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from . import http, settings


# User Service failures are explicit and separable from "user not found".
class UserServiceError(RuntimeError):
    pass


class User(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: int
    name: str = Field(..., min_length=1)
    created_at: int
    updated_at: int


def _base_url() -> str:
    base_url = http.normalize_base_url(settings.user_service_url())
    if not base_url:
        raise UserServiceError("USER_SERVICE_URL is empty.")
    return base_url


def _parse_user(resp: httpx.Response) -> User:
    try:
        data: dict[str, Any] = resp.json()
    except ValueError as e:
        raise UserServiceError("User Service returned a non-JSON body.") from e

    if not isinstance(data, dict):
        raise UserServiceError("User Service returned an unexpected payload.")
    if not data.get("result"):
        raise UserServiceError(f"User Service reported error: {data.get('error') or 'unknown'}")

    raw_user = data.get("user")
    if not isinstance(raw_user, dict):
        raise UserServiceError("User Service returned no user.")
    try:
        return User.model_validate(raw_user)
    except ValidationError as e:
        raise UserServiceError("User Service returned a malformed user.") from e


async def get_user_by_id(user_id: int) -> User | None:
    """
    Fetch one user. Returns None when the User Service answers 404.
    """
    url = f"{_base_url()}/users/{int(user_id)}"
    try:
        resp = await http.send("GET", url)
    except asyncio.TimeoutError as e:
        raise UserServiceError(f"User Service did not answer within {settings.upstream_timeout_s()}s.") from e
    except httpx.HTTPError as e:
        raise UserServiceError(f"User Service request failed: {e!r}") from e

    if resp.status_code == 404:
        return None
    if resp.status_code != 200:
        body = resp.text[:300]
        raise UserServiceError(f"User Service returned status {resp.status_code}: {body}")

    return _parse_user(resp)


async def create_user(name: str) -> User:
    url = f"{_base_url()}/users"
    try:
        resp = await http.send("POST", url, data={"name": name})
    except asyncio.TimeoutError as e:
        raise UserServiceError(f"User Service did not answer within {settings.upstream_timeout_s()}s.") from e
    except httpx.HTTPError as e:
        raise UserServiceError(f"User Service request failed: {e!r}") from e

    if resp.status_code != 200:
        body = resp.text[:300]
        raise UserServiceError(f"User Service returned status {resp.status_code}: {body}")

    return _parse_user(resp)
