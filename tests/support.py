"""
Shared helpers for gateway tests: record builders and a scoped mock upstream.
"""

from __future__ import annotations

from collections.abc import AsyncIterator, Callable
from contextlib import asynccontextmanager

import httpx

from public_api.core import http
from public_api.core.listing_service import Listing
from public_api.core.user_service import User, UserServiceError

TS = 1_700_000_000_000_000


def make_user(user_id: int, name: str | None = None) -> User:
    return User(id=user_id, name=name or f"user-{user_id}", created_at=TS, updated_at=TS)


def make_listing(listing_id: int, user_id: int, *, listing_type: str = "rent", price: int = 1000) -> Listing:
    return Listing(
        id=listing_id,
        user_id=user_id,
        listing_type=listing_type,
        price=price,
        created_at=TS + listing_id,
        updated_at=TS + listing_id,
    )


class FakeUserDirectory:
    """Async stand-in for `user_service.get_user_by_id` that records calls."""

    def __init__(
        self,
        users: dict[int, User] | None = None,
        *,
        failing: set[int] | None = None,
    ) -> None:
        self.users = users or {}
        self.failing = failing or set()
        self.calls: list[int] = []

    async def __call__(self, user_id: int) -> User | None:
        self.calls.append(user_id)
        if user_id in self.failing:
            raise UserServiceError(f"User Service returned status 503 for {user_id}")
        return self.users.get(user_id)


@asynccontextmanager
async def mock_upstream(handler: Callable[[httpx.Request], httpx.Response]) -> AsyncIterator[None]:
    """Install a MockTransport-backed shared client for the duration of the block."""

    await http.close_client()
    await http.init_client(transport=httpx.MockTransport(handler))
    try:
        yield
    finally:
        await http.close_client()
