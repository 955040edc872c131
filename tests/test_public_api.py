"""Public HTTP surface: response envelopes, status codes, and create validation."""

from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from public_api.core import listing_service, user_service
from public_api.core.listing_service import ListingServiceError
from public_api.core.user_service import UserServiceError
from public_api.main import app
from tests.support import FakeUserDirectory, make_listing, make_user


@pytest.fixture()
def client():
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture()
def upstream_calls(monkeypatch: pytest.MonkeyPatch) -> list[tuple]:
    """Record create calls that reach an upstream service."""

    calls: list[tuple] = []

    async def create_user(name: str):
        calls.append(("create_user", name))
        return make_user(1, name)

    async def create_listing(**kwargs):
        calls.append(("create_listing", kwargs))
        return make_listing(1, kwargs["user_id"], listing_type=kwargs["listing_type"], price=kwargs["price"])

    monkeypatch.setattr(user_service, "create_user", create_user)
    monkeypatch.setattr(listing_service, "create_listing", create_listing)
    return calls


# -- GET /public-api/listings ---------------------------------------------------------


def test_get_listings_embeds_users(client: TestClient, monkeypatch: pytest.MonkeyPatch):
    page = [make_listing(1, 5), make_listing(2, 5), make_listing(3, 9)]

    async def list_listings(**_: object):
        return page

    monkeypatch.setattr(listing_service, "list_listings", list_listings)
    monkeypatch.setattr(
        user_service, "get_user_by_id", FakeUserDirectory({5: make_user(5, "A")}, failing={9})
    )

    resp = client.get("/public-api/listings", params={"page_num": "1", "page_size": "3"})

    assert resp.status_code == 200
    body = resp.json()
    assert body["result"] is True
    assert [item["id"] for item in body["listings"]] == [1, 2, 3]
    assert body["listings"][0]["user"]["name"] == "A"
    assert body["listings"][1]["user"] == body["listings"][0]["user"]
    assert body["listings"][2]["user"] is None
    assert body["listings"][2]["user_id"] == 9
    assert "error" not in body


def test_get_listings_upstream_failure_returns_500(client: TestClient, monkeypatch: pytest.MonkeyPatch):
    async def list_listings(**_: object):
        raise ListingServiceError("Listing Service request failed")

    monkeypatch.setattr(listing_service, "list_listings", list_listings)

    resp = client.get("/public-api/listings")

    assert resp.status_code == 500
    body = resp.json()
    assert body["result"] is False
    assert body["listings"] == []
    assert body["error"] == "Failed to retrieve listings"


def test_get_listings_empty_page(client: TestClient, monkeypatch: pytest.MonkeyPatch):
    directory = FakeUserDirectory()

    async def list_listings(**_: object):
        return []

    monkeypatch.setattr(listing_service, "list_listings", list_listings)
    monkeypatch.setattr(user_service, "get_user_by_id", directory)

    resp = client.get("/public-api/listings", params={"page_num": "x", "page_size": "0"})

    assert resp.status_code == 200
    assert resp.json() == {"result": True, "listings": []}
    assert directory.calls == []


# -- POST /public-api/users --------------------------------------------------------------


def test_create_user(client: TestClient, upstream_calls: list[tuple]):
    resp = client.post("/public-api/users", json={"name": "Alice"})

    assert resp.status_code == 200
    assert resp.json()["user"]["name"] == "Alice"
    assert upstream_calls == [("create_user", "Alice")]


@pytest.mark.parametrize("payload", [{"name": ""}, {"name": "   "}, {}])
def test_create_user_requires_name(client: TestClient, upstream_calls: list[tuple], payload: dict):
    resp = client.post("/public-api/users", json=payload)

    assert resp.status_code == 400
    assert resp.json() == {"error": "User name is required"}
    assert upstream_calls == []


def test_create_user_rejects_malformed_body(client: TestClient, upstream_calls: list[tuple]):
    resp = client.post(
        "/public-api/users",
        content="{not json",
        headers={"Content-Type": "application/json"},
    )

    assert resp.status_code == 400
    assert resp.json() == {"error": "Invalid request body"}
    assert upstream_calls == []


def test_create_user_upstream_failure(client: TestClient, monkeypatch: pytest.MonkeyPatch):
    async def create_user(name: str):
        raise UserServiceError("User Service returned status 500")

    monkeypatch.setattr(user_service, "create_user", create_user)

    resp = client.post("/public-api/users", json={"name": "Alice"})

    assert resp.status_code == 500
    assert resp.json() == {"error": "Failed to create user"}


# -- POST /public-api/listings -----------------------------------------------------------


def test_create_listing(client: TestClient, upstream_calls: list[tuple]):
    resp = client.post(
        "/public-api/listings",
        json={"user_id": 5, "listing_type": "sale", "price": 250000},
    )

    assert resp.status_code == 200
    listing = resp.json()["listing"]
    assert listing["listing_type"] == "sale"
    assert listing["price"] == 250000
    assert upstream_calls == [
        ("create_listing", {"user_id": 5, "listing_type": "sale", "price": 250000})
    ]


@pytest.mark.parametrize(
    ("payload", "message"),
    [
        ({"listing_type": "rent", "price": 100}, "User ID, listing type, and price are required and valid"),
        ({"user_id": 5, "price": 100}, "User ID, listing type, and price are required and valid"),
        ({"user_id": 5, "listing_type": "rent", "price": 0}, "User ID, listing type, and price are required and valid"),
        ({"user_id": 5, "listing_type": "rent", "price": -3}, "User ID, listing type, and price are required and valid"),
        ({"user_id": 5, "listing_type": "lease", "price": 100}, "Listing type must be 'rent' or 'sale'"),
    ],
)
def test_create_listing_validation(
    client: TestClient, upstream_calls: list[tuple], payload: dict, message: str
):
    resp = client.post("/public-api/listings", json=payload)

    assert resp.status_code == 400
    assert resp.json() == {"error": message}
    assert upstream_calls == []


def test_create_listing_rejects_wrong_types(client: TestClient, upstream_calls: list[tuple]):
    resp = client.post(
        "/public-api/listings",
        json={"user_id": "abc", "listing_type": "rent", "price": 100},
    )

    assert resp.status_code == 400
    assert resp.json()["error"].startswith("user_id:")
    assert upstream_calls == []


def test_create_listing_upstream_failure(client: TestClient, monkeypatch: pytest.MonkeyPatch):
    async def create_listing(**_: object):
        raise ListingServiceError("Listing Service returned status 500")

    monkeypatch.setattr(listing_service, "create_listing", create_listing)

    resp = client.post(
        "/public-api/listings",
        json={"user_id": 5, "listing_type": "rent", "price": 100},
    )

    assert resp.status_code == 500
    assert resp.json() == {"error": "Failed to create listing"}


# -- misc ---------------------------------------------------------------------------------


def test_health(client: TestClient):
    assert client.get("/health").json() == {"status": "ok"}


def test_create_user_forwards_name_unchanged(client: TestClient, upstream_calls: list[tuple]):
    resp = client.post("/public-api/users", json={"name": "  Alice Smith "})

    assert resp.status_code == 200
    assert upstream_calls == [("create_user", "  Alice Smith ")]
