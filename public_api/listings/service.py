"""
Public listings service (orchestration).

This is where we:
- fetch one listing page from the Listing Service (the only fatal step)
- resolve the distinct users of that page concurrently (per-user failures degrade)
- merge users back into the page in the original order
- validate and pass through listing creation
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from fastapi import HTTPException, status

from public_api.core import listing_service, settings
from public_api.core.listing_service import LISTING_TYPES, Listing

from . import references, resolver, schemas
from .merger import merge_users

LISTINGS_UNAVAILABLE = "Failed to retrieve listings"

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PageRequest:
    page_num: int
    page_size: int
    user_id: str | None = None


def _positive_int(raw: str | None, default: int) -> int:
    try:
        value = int((raw or "").strip())
    except ValueError:
        return default
    return value if value >= 1 else default


def page_request(
    page_num: str | None,
    page_size: str | None,
    user_id: str | None = None,
) -> PageRequest:
    """
    Lenient query parsing: invalid or missing paging values fall back to defaults.
    """
    return PageRequest(
        page_num=_positive_int(page_num, 1),
        page_size=_positive_int(page_size, settings.default_page_size()),
        user_id=(user_id or "").strip() or None,
    )


async def enriched_listings(request: PageRequest) -> schemas.ListingsPageResponse:
    try:
        listings = await listing_service.list_listings(
            page_num=request.page_num,
            page_size=request.page_size,
            user_id=request.user_id,
        )
    except listing_service.ListingServiceError:
        logger.exception(
            "listing_page_failed page_num=%s page_size=%s user_id=%s",
            request.page_num,
            request.page_size,
            request.user_id,
        )
        return schemas.ListingsPageResponse(result=False, error=LISTINGS_UNAVAILABLE)

    if not listings:
        return schemas.ListingsPageResponse(result=True, listings=[])

    user_ids = references.distinct_user_ids(listings)
    lookups = await resolver.resolve_users(user_ids)
    enriched = merge_users(listings, lookups)

    found = sum(1 for outcome in lookups.values() if isinstance(outcome, resolver.Found))
    failed = sum(1 for outcome in lookups.values() if isinstance(outcome, resolver.LookupFailed))
    logger.info(
        "listings_enriched listings=%s users=%s found=%s missing=%s failed=%s",
        len(enriched),
        len(user_ids),
        found,
        len(lookups) - found - failed,
        failed,
    )
    return schemas.ListingsPageResponse(result=True, listings=enriched)


def validate_create_listing(payload: schemas.CreateListingRequest) -> None:
    if payload.user_id == 0 or not payload.listing_type or payload.price <= 0:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="User ID, listing type, and price are required and valid",
        )
    if payload.listing_type not in LISTING_TYPES:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Listing type must be 'rent' or 'sale'",
        )


async def create_listing(payload: schemas.CreateListingRequest) -> Listing:
    validate_create_listing(payload)
    try:
        return await listing_service.create_listing(
            user_id=payload.user_id,
            listing_type=payload.listing_type,
            price=payload.price,
        )
    except listing_service.ListingServiceError as exc:
        logger.error("create_listing_failed user_id=%s error=%s", payload.user_id, exc)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to create listing",
        ) from exc
