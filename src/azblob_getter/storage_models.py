"""Data models exchanged with blob store clients."""

from typing import List, Optional

from pydantic import BaseModel, Field


class ListingItem(BaseModel):
    """One object returned by a prefix listing."""
    name: str                      # Full object name within the container
    is_prefix_match: bool = False  # name starts with "<prefix>/"
    size: Optional[int] = None     # Content length when the store reports it


class ListingPage(BaseModel):
    """
    One page of a prefix listing.

    Pages are produced by a single store call and consumed once. The
    continuation marker threads into the request for the next page; None
    means the listing is exhausted.
    """
    items: List[ListingItem] = Field(default_factory=list)
    continuation_marker: Optional[str] = None

    @property
    def is_last(self) -> bool:
        return not self.continuation_marker
