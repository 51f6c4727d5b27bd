"""Single-object downloads."""

import logging
from pathlib import Path

from .storage.base import StoreClient

logger = logging.getLogger(__name__)


def download_object(client: StoreClient, container: str, name: str, dest: Path) -> Path:
    """
    Download one object to dest, replacing any file already there.

    The body is requested before dest is opened, so a missing object
    leaves the filesystem untouched. A failure part-way through the body
    leaves a partial file; cleaning it up is the caller's decision.

    Args:
        client: Store client scoped to the account
        container: Container name
        name: Object name
        dest: Local destination file

    Returns:
        dest

    Raises:
        TransportError: If the store reports a failure
        OSError: If dest cannot be written
    """
    dest = Path(dest)
    chunks = client.download(container, name)

    dest.parent.mkdir(parents=True, exist_ok=True)
    size = 0
    with open(dest, "wb") as f:
        for chunk in chunks:
            f.write(chunk)
            size += len(chunk)

    logger.debug("Downloaded %s/%s -> %s (%d bytes)", container, name, dest, size)
    return dest
