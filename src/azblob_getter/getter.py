"""Azure Blob getter: classify an address and materialize it locally.

Every public operation parses the address, builds a store client scoped to
its account and credential, then either probes listings (directory cases)
or downloads directly (single object).
"""

import functools
import logging
import shutil
from concurrent.futures import ThreadPoolExecutor
from enum import Enum
from pathlib import Path, PurePosixPath
from typing import Callable, Iterable, Iterator, List, Optional, Protocol, Tuple, runtime_checkable

from .address import AddressReference, parse_address
from .config import GetterSettings
from .constants import SEPARATOR
from .download import download_object
from .errors import UnsafePathError
from .listing import is_under, iter_items, list_by_prefix
from .storage.base import StoreClient
from .storage.factory import make_store_client
from .storage_models import ListingItem

logger = logging.getLogger(__name__)

ClientFactory = Callable[[AddressReference, GetterSettings], StoreClient]


class ClientMode(str, Enum):
    """What an address names."""
    FILE = "file"
    DIR = "dir"


@runtime_checkable
class Getter(Protocol):
    """Operations a getter backend exposes to the dispatch framework."""

    def client_mode(self, address: str) -> ClientMode: ...

    def get(self, dst: Path, address: str) -> List[Path]: ...

    def get_file(self, dst: Path, address: str) -> Path: ...


def relative_destination(root: Path, object_path: str, name: str) -> Path:
    """
    Map an object name under object_path to a path under root.

    Pure path algebra: nothing is resolved against the filesystem.

    Args:
        root: Local destination root
        object_path: Queried object path (the directory address)
        name: Full object name from the listing

    Returns:
        root joined with name relative to object_path

    Raises:
        UnsafePathError: If name is not below object_path or would escape root
    """
    base = object_path.rstrip(SEPARATOR)
    if not is_under(name, base):
        raise UnsafePathError(name)

    rel = PurePosixPath(name[len(base) + 1:])
    if not rel.parts or rel.is_absolute() or ".." in rel.parts or "\\" in name:
        raise UnsafePathError(name)

    return Path(root).joinpath(*rel.parts)


def plan_transfer(
    root: Path, object_path: str, items: Iterable[ListingItem]
) -> Iterator[Tuple[str, Path]]:
    """
    Yield (object name, destination) pairs for a directory fetch.

    Items must come from a listing whose prefix is object_path without a
    trailing "/". Directory marker entries (names ending in "/") are skipped,
    as are items that are not prefix matches: names that share only a
    lexical prefix with object_path, or equal it.
    """
    base = object_path.rstrip(SEPARATOR)
    for item in items:
        if item.name.endswith(SEPARATOR):
            continue
        if not item.is_prefix_match:
            logger.debug("Skipping %s: not below %s/", item.name, base)
            continue
        yield item.name, relative_destination(root, base, item.name)


def _reset_destination(dst: Path) -> None:
    """Remove dst entirely and create its parent directories."""
    if dst.is_dir() and not dst.is_symlink():
        shutil.rmtree(dst)
    elif dst.exists() or dst.is_symlink():
        dst.unlink()
    dst.parent.mkdir(parents=True, exist_ok=True)


class AzureBlobGetter:
    """Download a file or a directory tree from Azure Blob Storage."""

    def __init__(
        self,
        client_factory: Optional[ClientFactory] = None,
        settings: Optional[GetterSettings] = None,
        credential=None,
    ):
        """
        Initialize the getter.

        Args:
            client_factory: Builds a store client for a parsed address
                (make_store_client if None)
            settings: Getter settings (defaults if None)
            credential: Token credential for addresses that carry none;
                used by the default client factory only
        """
        if client_factory is None:
            client_factory = functools.partial(make_store_client, credential_override=credential)
        self.client_factory = client_factory
        self.settings = settings or GetterSettings()

    def _connect(self, address: str) -> Tuple[AddressReference, StoreClient]:
        ref = parse_address(address, self.settings.access_key_param)
        return ref, self.client_factory(ref, self.settings)

    def client_mode(self, address: str) -> ClientMode:
        """
        Decide whether an address names a single object or a directory.

        Only the first listed object is inspected. An exact name match wins
        over a directory of the same name. A missing object is reported as
        FILE so that the download step surfaces the not-found error.

        Raises:
            InvalidAddressError: If the address is malformed
            TransportError: If the listing fails
        """
        ref, client = self._connect(address)
        mode = ClientMode.FILE

        pages = list_by_prefix(client, ref.container, ref.object_path, self.settings.page_size)
        first = next(iter_items(pages), None)
        # Only the first listed object decides; an exact match sorts before
        # its "/"-children, and a lexical sibling ("fold" vs "folder/...") is a file.
        if first is not None and first.is_prefix_match:
            mode = ClientMode.DIR

        logger.debug("Client mode for %s/%s: %s", ref.container, ref.object_path, mode.value)
        return mode

    def get(self, dst: Path, address: str) -> List[Path]:
        """
        Download every object below a directory address into dst.

        dst is removed first, so the result mirrors the remote tree. The
        first failed download aborts the fetch; files already written stay.

        Args:
            dst: Local destination root
            address: Directory address

        Returns:
            Paths written, in listing order

        Raises:
            InvalidAddressError: If the address is malformed
            TransportError: If a listing or download fails
            OSError: If the local tree cannot be written
        """
        dst = Path(dst)
        ref = parse_address(address, self.settings.access_key_param)

        _reset_destination(dst)

        client = self.client_factory(ref, self.settings)
        written: List[Path] = []

        base = ref.object_path.rstrip(SEPARATOR)
        for page in list_by_prefix(client, ref.container, base, self.settings.page_size):
            plan = list(plan_transfer(dst, base, page.items))
            written.extend(self._download_all(client, ref.container, plan))

        logger.info(
            "Fetched %d object(s) from %s/%s into %s",
            len(written), ref.container, ref.object_path, dst,
        )
        return written

    def _download_all(
        self, client: StoreClient, container: str, plan: List[Tuple[str, Path]]
    ) -> List[Path]:
        if self.settings.max_workers <= 1 or len(plan) <= 1:
            return [download_object(client, container, name, dest) for name, dest in plan]

        with ThreadPoolExecutor(max_workers=self.settings.max_workers) as executor:
            futures = [
                executor.submit(download_object, client, container, name, dest)
                for name, dest in plan
            ]
            try:
                # Collected in plan order; the first failure propagates
                return [future.result() for future in futures]
            except BaseException:
                for future in futures:
                    future.cancel()
                raise

    def get_file(self, dst: Path, address: str) -> Path:
        """
        Download the single object an address names to dst.

        Only dst is touched; parent directories are created as needed.

        Raises:
            InvalidAddressError: If the address is malformed
            TransportError: If the download fails (including not found)
            OSError: If dst cannot be written
        """
        ref, client = self._connect(address)
        return download_object(client, ref.container, ref.object_path, Path(dst))
