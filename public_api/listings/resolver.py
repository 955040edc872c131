"""
Concurrent user resolution (fan-out).

One lookup task per distinct user id, bounded by a semaphore, joined with
`asyncio.gather`. Every task ends in exactly one outcome:

- Found(user)          the User Service returned the user
- NotFound()           the User Service answered 404
- LookupFailed(cause)  transport/status/decode failure, or anything unexpected

A failed lookup never raises out of `resolve_users` and never cancels its
siblings. Outcomes are returned by each task and collected into the mapping by
the caller after the join, so no task writes shared state.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable, Iterable
from dataclasses import dataclass

from public_api.core import settings, user_service
from public_api.core.user_service import User

logger = logging.getLogger(__name__)

UserFetcher = Callable[[int], Awaitable[User | None]]


@dataclass(frozen=True)
class Found:
    user: User


@dataclass(frozen=True)
class NotFound:
    pass


@dataclass(frozen=True)
class LookupFailed:
    cause: str


UserLookup = Found | NotFound | LookupFailed


async def _lookup(user_id: int, fetch: UserFetcher, semaphore: asyncio.Semaphore) -> tuple[int, UserLookup]:
    async with semaphore:
        try:
            user = await fetch(user_id)
        except user_service.UserServiceError as exc:
            logger.warning("user_lookup_failed user_id=%s error=%s", user_id, exc)
            return user_id, LookupFailed(cause=str(exc))
        except Exception as exc:
            logger.exception("user_lookup_failed user_id=%s unexpected error", user_id)
            return user_id, LookupFailed(cause=repr(exc))

    if user is None:
        logger.info("user_not_found user_id=%s", user_id)
        return user_id, NotFound()
    return user_id, Found(user=user)


async def resolve_users(
    user_ids: Iterable[int],
    *,
    fetch: UserFetcher | None = None,
    max_concurrency: int | None = None,
) -> dict[int, UserLookup]:
    """
    Look up every distinct user id concurrently and wait for all of them.

    `fetch` defaults to the User Service client; `max_concurrency` defaults to
    USER_LOOKUP_CONCURRENCY.
    """
    ids = set(user_ids)
    if not ids:
        return {}

    fetch = fetch or user_service.get_user_by_id
    limit = max_concurrency if max_concurrency and max_concurrency > 0 else settings.user_lookup_concurrency()
    semaphore = asyncio.Semaphore(limit)

    results = await asyncio.gather(*(_lookup(user_id, fetch, semaphore) for user_id in ids))
    return dict(results)
