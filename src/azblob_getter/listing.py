"""Lazy, paginated prefix listings."""

import logging
from typing import Iterable, Iterator, Optional

from .constants import SEPARATOR
from .storage.base import StoreClient
from .storage_models import ListingItem, ListingPage

logger = logging.getLogger(__name__)


def is_under(name: str, prefix: str) -> bool:
    """True when name lies below prefix as a path ("fold" is not under "folder/x")."""
    return name.startswith(prefix + SEPARATOR)


def list_by_prefix(
    client: StoreClient,
    container: str,
    prefix: str,
    page_size: Optional[int] = None,
) -> Iterator[ListingPage]:
    """
    Yield listing pages for every object whose name starts with prefix.

    The generator is forward-only: each request carries the marker of the
    page before it, and only one page is held at a time. A transport error
    on any page ends the iteration and propagates to the caller.

    Args:
        client: Store client scoped to the account
        container: Container to list
        prefix: Object name prefix
        page_size: Maximum items per page (store default if None)

    Yields:
        ListingPage, in store order
    """
    marker: Optional[str] = None
    page_number = 0
    while True:
        page = client.list_page(container, prefix, marker=marker, page_size=page_size)
        page_number += 1
        logger.debug(
            "Listed page %d of %s/%s: %d item(s)",
            page_number, container, prefix, len(page.items),
        )
        yield page

        if page.is_last:
            return
        marker = page.continuation_marker


def iter_items(pages: Iterable[ListingPage]) -> Iterator[ListingItem]:
    """Flatten listing pages into their items without buffering."""
    for page in pages:
        yield from page.items
