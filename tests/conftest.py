"""
Shared test configuration.

Upstream URLs point at placeholder hosts; tests either patch the client
functions or inject an `httpx.MockTransport`, so nothing leaves the process.
"""

from __future__ import annotations

import pytest


@pytest.fixture(autouse=True)
def base_test_env(monkeypatch: pytest.MonkeyPatch) -> None:
    defaults = {
        "USER_SERVICE_URL": "http://users.test",
        "LISTING_SERVICE_URL": "http://listings.test",
        "USER_LOOKUP_CONCURRENCY": "10",
        "DEFAULT_PAGE_SIZE": "10",
        "LOG_LEVEL": "INFO",
    }
    for key, value in defaults.items():
        monkeypatch.setenv(key, value)
