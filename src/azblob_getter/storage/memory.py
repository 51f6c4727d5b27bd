"""In-memory blob store client for testing."""

from typing import Dict, Iterator, Optional

from ..constants import SEPARATOR
from ..errors import ObjectNotFoundError
from ..storage_models import ListingItem, ListingPage


class MemoryStoreClient:
    """
    Dictionary-backed store for unit tests (avoids Azurite dependency).

    Listings come back in lexical name order like the Azure service, and
    markers are the index of the next item. Unlike a filesystem, both
    "a/b" and "a/b/c" can exist at the same time.
    """

    def __init__(
        self,
        containers: Optional[Dict[str, Dict[str, bytes]]] = None,
        page_size: int = 5000,
        chunk_size: int = 4,
    ):
        self.containers: Dict[str, Dict[str, bytes]] = {
            name: dict(objects) for name, objects in (containers or {}).items()
        }
        self.page_size = page_size
        self.chunk_size = chunk_size
        self.list_calls = 0
        self.download_calls = 0

    def put(self, container: str, name: str, data: bytes) -> None:
        self.containers.setdefault(container, {})[name] = data

    def delete(self, container: str, name: str) -> None:
        del self.containers[container][name]

    def list_page(
        self,
        container: str,
        prefix: str,
        marker: Optional[str] = None,
        page_size: Optional[int] = None,
    ) -> ListingPage:
        self.list_calls += 1
        if container not in self.containers:
            raise ObjectNotFoundError(container, prefix)

        names = sorted(n for n in self.containers[container] if n.startswith(prefix))
        start = int(marker) if marker else 0
        end = start + (page_size or self.page_size)

        items = [
            ListingItem(
                name=name,
                is_prefix_match=name.startswith(prefix + SEPARATOR),
                size=len(self.containers[container][name]),
            )
            for name in names[start:end]
        ]
        return ListingPage(
            items=items,
            continuation_marker=str(end) if end < len(names) else None,
        )

    def download(self, container: str, name: str) -> Iterator[bytes]:
        self.download_calls += 1
        try:
            data = self.containers[container][name]
        except KeyError:
            raise ObjectNotFoundError(container, name) from None
        chunks = [data[i:i + self.chunk_size] for i in range(0, len(data), self.chunk_size)]
        return iter(chunks)
