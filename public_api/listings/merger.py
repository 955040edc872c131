"""
Join a listing page with resolved users.

Output order and length always match the input page. A listing whose user
was not found or failed to resolve gets `user=None`.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence

from public_api.core.listing_service import Listing

from .resolver import Found, UserLookup
from .schemas import EnrichedListing


def merge_users(
    listings: Sequence[Listing],
    lookups: Mapping[int, UserLookup],
) -> list[EnrichedListing]:
    enriched: list[EnrichedListing] = []
    for listing in listings:
        outcome = lookups.get(listing.user_id)
        user = outcome.user.model_copy() if isinstance(outcome, Found) else None
        enriched.append(EnrichedListing(**listing.model_dump(), user=user))
    return enriched
