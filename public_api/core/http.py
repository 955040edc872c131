"""
Shared upstream HTTP client (httpx).

This module owns the connection pool used for every call to the listing and
user services. FastAPI initializes it on startup and closes it on shutdown
(see `public_api/main.py`).

Timeouts:
- total: hard deadline for one whole call (request + full response body),
  enforced by `send()` around the transport
- connect: dial + TLS handshake
- read: wait for each response chunk; httpx restarts it on every chunk
- write/pool: fall back to the total value
"""

from __future__ import annotations

import asyncio
from typing import Any

import httpx

from . import settings

_client: httpx.AsyncClient | None = None


def build_timeout() -> httpx.Timeout:
    return httpx.Timeout(
        settings.upstream_timeout_s(),
        connect=settings.upstream_connect_timeout_s(),
        read=settings.upstream_read_timeout_s(),
    )


def build_limits() -> httpx.Limits:
    max_connections = settings.upstream_max_connections()
    return httpx.Limits(
        max_connections=max_connections,
        max_keepalive_connections=max_connections,
        keepalive_expiry=settings.upstream_keepalive_expiry_s(),
    )


async def init_client(*, transport: httpx.AsyncBaseTransport | None = None) -> None:
    global _client
    if _client is not None:
        return None
    _client = httpx.AsyncClient(
        timeout=build_timeout(),
        limits=build_limits(),
        transport=transport,
    )


async def close_client() -> None:
    global _client
    if _client is None:
        return None
    await _client.aclose()
    _client = None


def client() -> httpx.AsyncClient:
    if _client is None:
        raise RuntimeError("HTTP client is not initialized. Call init_client() on startup.")
    return _client


def normalize_base_url(base_url: str) -> str:
    return (base_url or "").strip().rstrip("/")


async def send(method: str, url: str, **kwargs: Any) -> httpx.Response:
    """
    Issue one upstream request and read its body within UPSTREAM_TIMEOUT_S.

    Raises `httpx.HTTPError` for transport failures and `asyncio.TimeoutError`
    when the total deadline passes.
    """
    return await asyncio.wait_for(
        client().request(method, url, **kwargs),
        timeout=settings.upstream_timeout_s(),
    )
