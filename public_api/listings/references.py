"""
User-reference extraction for a page of listings.
"""

from __future__ import annotations

from collections.abc import Iterable

from public_api.core.listing_service import Listing


def distinct_user_ids(listings: Iterable[Listing]) -> set[int]:
    return {listing.user_id for listing in listings}
