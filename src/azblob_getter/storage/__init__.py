"""Storage package for blob store clients."""

from .base import StoreClient
from .factory import make_store_client
from .memory import MemoryStoreClient

__all__ = ["StoreClient", "MemoryStoreClient", "make_store_client"]
