"""
Listing Service HTTP client helpers.

Used endpoints:
- GET  /listings?page_num=&page_size=[&user_id=]  -> {"result": true, "listings": [...]}
- POST /listings (form-encoded user_id, listing_type, price) -> {"result": true, "listing": {...}}
"""

from __future__ import annotations

import asyncio
from typing import Any, Literal

import httpx
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from . import http, settings

ListingType = Literal["rent", "sale"]
LISTING_TYPES = ("rent", "sale")


# Listing Service failures are explicit and separable from an empty page.
class ListingServiceError(RuntimeError):
    pass


class Listing(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: int
    user_id: int
    listing_type: ListingType
    price: int = Field(..., gt=0)
    created_at: int
    updated_at: int


def _base_url() -> str:
    base_url = http.normalize_base_url(settings.listing_service_url())
    if not base_url:
        raise ListingServiceError("LISTING_SERVICE_URL is empty.")
    return base_url


def _decode(resp: httpx.Response) -> dict[str, Any]:
    if resp.status_code != 200:
        body = resp.text[:300]
        raise ListingServiceError(f"Listing Service returned status {resp.status_code}: {body}")

    try:
        data = resp.json()
    except ValueError as e:
        raise ListingServiceError("Listing Service returned a non-JSON body.") from e

    if not isinstance(data, dict):
        raise ListingServiceError("Listing Service returned an unexpected payload.")
    if not data.get("result"):
        raise ListingServiceError(f"Listing Service reported error: {data.get('error') or 'unknown'}")
    return data


async def list_listings(
    *,
    page_num: int,
    page_size: int,
    user_id: str | None = None,
) -> list[Listing]:
    """
    Fetch one page of listings, in the order the Listing Service returns them.

    An empty page is a valid result; any transport/status/decode problem raises.
    """
    params: dict[str, Any] = {"page_num": page_num, "page_size": page_size}
    if user_id:
        params["user_id"] = user_id

    try:
        resp = await http.send("GET", f"{_base_url()}/listings", params=params)
    except asyncio.TimeoutError as e:
        raise ListingServiceError(f"Listing Service did not answer within {settings.upstream_timeout_s()}s.") from e
    except httpx.HTTPError as e:
        raise ListingServiceError(f"Listing Service request failed: {e!r}") from e

    data = _decode(resp)
    raw_listings = data.get("listings") or []
    if not isinstance(raw_listings, list):
        raise ListingServiceError("Listing Service returned a non-list `listings` field.")

    try:
        return [Listing.model_validate(item) for item in raw_listings]
    except ValidationError as e:
        raise ListingServiceError("Listing Service returned a malformed listing.") from e


async def create_listing(*, user_id: int, listing_type: str, price: int) -> Listing:
    form = {
        "user_id": str(user_id),
        "listing_type": listing_type,
        "price": str(price),
    }
    try:
        resp = await http.send("POST", f"{_base_url()}/listings", data=form)
    except asyncio.TimeoutError as e:
        raise ListingServiceError(f"Listing Service did not answer within {settings.upstream_timeout_s()}s.") from e
    except httpx.HTTPError as e:
        raise ListingServiceError(f"Listing Service request failed: {e!r}") from e

    data = _decode(resp)
    raw_listing = data.get("listing")
    if not isinstance(raw_listing, dict):
        raise ListingServiceError("Listing Service returned no listing.")
    try:
        return Listing.model_validate(raw_listing)
    except ValidationError as e:
        raise ListingServiceError("Listing Service returned a malformed listing.") from e
