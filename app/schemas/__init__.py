"""
app/schemas package marker.
"""

from app.schemas.listing_feed import ListingPage, ListingRecord, PagingInfo

__all__ = [
    "ListingPage",
    "ListingRecord",
    "PagingInfo",
]
