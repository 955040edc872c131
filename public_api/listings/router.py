"""
Public listing endpoints.
"""

from __future__ import annotations

from fastapi import APIRouter, Query, Response, status

from . import schemas, service

router = APIRouter()


@router.get("/public-api/listings", response_model=schemas.ListingsPageResponse)
async def get_listings(
    response: Response,
    page_num: str | None = Query(default=None),
    page_size: str | None = Query(default=None),
    user_id: str | None = Query(default=None),
) -> schemas.ListingsPageResponse:
    """
    One page of listings, each with its user embedded (or null).
    """
    page = await service.enriched_listings(service.page_request(page_num, page_size, user_id))
    if not page.result:
        response.status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    return page


@router.post("/public-api/listings", response_model=schemas.CreateListingResponse)
async def create_listing(request: schemas.CreateListingRequest) -> schemas.CreateListingResponse:
    listing = await service.create_listing(request)
    return schemas.CreateListingResponse(listing=listing)
