"""Factory for creating blob store clients."""

from typing import Optional

from ..address import AddressReference
from ..config import GetterSettings
from .azure import AzureStoreClient
from .base import StoreClient


def make_store_client(
    ref: AddressReference,
    settings: Optional[GetterSettings] = None,
    credential_override=None,
) -> StoreClient:
    """
    Create a store client scoped to the account and credential of an address.

    Args:
        ref: Parsed address
        settings: Getter settings (defaults if None)
        credential_override: Token credential used when the address carries none

    Returns:
        StoreClient for the account

    Raises:
        AuthError: If the address credential is malformed
        TransportError: If the client cannot be constructed
    """
    settings = settings or GetterSettings()
    return AzureStoreClient(
        ref,
        credential_override=credential_override,
        **settings.client_kwargs(),
    )
