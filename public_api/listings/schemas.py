"""
Pydantic schemas for public listing endpoints.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field, SerializerFunctionWrapHandler, model_serializer

from public_api.core.listing_service import Listing
from public_api.core.user_service import User


class EnrichedListing(Listing):
    # None when the user was not found or could not be fetched.
    user: User | None = None


class ListingsPageResponse(BaseModel):
    result: bool
    listings: list[EnrichedListing] = Field(default_factory=list)
    error: str | None = None

    @model_serializer(mode="wrap")
    def omit_empty_error(self, handler: SerializerFunctionWrapHandler) -> dict[str, Any]:
        # `error` only appears on failed pages; `user: null` inside listings stays.
        data = handler(self)
        if data.get("error") is None:
            data.pop("error", None)
        return data


class CreateListingRequest(BaseModel):
    # Defaults let the service report missing fields with one message.
    user_id: int = 0
    listing_type: str = ""
    price: int = 0


class CreateListingResponse(BaseModel):
    listing: Listing
