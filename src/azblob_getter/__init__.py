"""Azure Blob Storage getter: download a blob or a blob "directory" by URL."""

from .address import AddressReference, parse_address
from .config import GetterSettings, load_settings
from .constants import GETTER_VERSION as __version__
from .errors import (
    AuthError,
    GetterError,
    InvalidAddressError,
    NetworkError,
    ObjectNotFoundError,
    TransportError,
    UnsafePathError,
)
from .getter import AzureBlobGetter, ClientMode

__all__ = [
    "AddressReference",
    "AuthError",
    "AzureBlobGetter",
    "ClientMode",
    "GetterError",
    "GetterSettings",
    "InvalidAddressError",
    "NetworkError",
    "ObjectNotFoundError",
    "TransportError",
    "UnsafePathError",
    "load_settings",
    "parse_address",
]
