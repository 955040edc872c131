"""
Runtime settings for the public API gateway.

Everything is read from the environment at call time so tests can
monkeypatch env vars without reloading modules.
"""

from __future__ import annotations

import os

DEFAULT_USER_SERVICE_URL = "http://localhost:7000"
DEFAULT_LISTING_SERVICE_URL = "http://localhost:6000"
DEFAULT_PAGE_SIZE = 10
DEFAULT_USER_LOOKUP_CONCURRENCY = 10


def _env_str(name: str, default: str) -> str:
    return os.environ.get(name, "").strip() or default


def _env_int(name: str, default: int) -> int:
    raw = os.environ.get(name, "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _env_float(name: str, default: float) -> float:
    raw = os.environ.get(name, "").strip()
    if not raw:
        return default
    try:
        return float(raw)
    except ValueError:
        return default


def _env_list(name: str) -> list[str]:
    raw = os.environ.get(name, "")
    return [item.strip() for item in raw.split(",") if item.strip()]


def user_service_url() -> str:
    return _env_str("USER_SERVICE_URL", DEFAULT_USER_SERVICE_URL)


def listing_service_url() -> str:
    return _env_str("LISTING_SERVICE_URL", DEFAULT_LISTING_SERVICE_URL)


def upstream_timeout_s() -> float:
    return _env_float("UPSTREAM_TIMEOUT_S", 10.0)


def upstream_connect_timeout_s() -> float:
    # httpx folds the TLS handshake into the connect phase.
    return _env_float("UPSTREAM_CONNECT_TIMEOUT_S", 5.0)


def upstream_read_timeout_s() -> float:
    return _env_float("UPSTREAM_READ_TIMEOUT_S", 5.0)


def upstream_max_connections() -> int:
    return max(1, _env_int("UPSTREAM_MAX_CONNECTIONS", 100))


def upstream_keepalive_expiry_s() -> float:
    return _env_float("UPSTREAM_KEEPALIVE_EXPIRY_S", 90.0)


def user_lookup_concurrency() -> int:
    """
    Max number of user lookups in flight for one aggregation request.
    """
    value = _env_int("USER_LOOKUP_CONCURRENCY", DEFAULT_USER_LOOKUP_CONCURRENCY)
    return value if value >= 1 else DEFAULT_USER_LOOKUP_CONCURRENCY


def default_page_size() -> int:
    value = _env_int("DEFAULT_PAGE_SIZE", DEFAULT_PAGE_SIZE)
    return value if value >= 1 else DEFAULT_PAGE_SIZE


def allowed_origins() -> list[str]:
    return _env_list("API_ALLOWED_ORIGINS")


def log_level() -> str:
    return _env_str("LOG_LEVEL", "INFO").upper()


def port() -> int:
    return _env_int("PORT", 8000)
