"""Base protocol for blob store clients."""

from typing import Iterator, Optional, Protocol

from ..storage_models import ListingPage


class StoreClient(Protocol):
    """
    Protocol for blob store clients scoped to one account.

    Implementations translate their transport failures into
    TransportError subclasses. Retries, TLS and authentication handshakes
    are the implementation's concern, not the caller's.
    """

    def list_page(
        self,
        container: str,
        prefix: str,
        marker: Optional[str] = None,
        page_size: Optional[int] = None,
    ) -> ListingPage:
        """
        Fetch one page of objects whose names start with prefix.

        Args:
            container: Container name
            prefix: Object name prefix
            marker: Continuation marker from the previous page, None for the first
            page_size: Maximum items in the page

        Returns:
            ListingPage with the next marker, or None when exhausted
        """
        ...

    def download(self, container: str, name: str) -> Iterator[bytes]:
        """
        Open the full body of an object.

        The object is requested when this method is called, so a missing
        object raises here rather than on first iteration.

        Args:
            container: Container name
            name: Object name

        Returns:
            Iterator over the body's chunks
        """
        ...
