"""Parsing of Azure Blob addresses.

An address looks like::

    https://<account>.blob.<base-domain>/<container>/<object-path>?access_key=<key>

Only the shape of the host and path is validated here; whether the account,
container or object exist is left to the store.
"""

import urllib.parse
from typing import Literal, Union

from pydantic import BaseModel, ConfigDict, Field

from .constants import (
    ACCESS_KEY_PARAM,
    BLOB_HOST_MARKER,
    SAS_SIGNATURE_PARAM,
    SEPARATOR,
)
from .errors import InvalidAddressError


class NoCredential(BaseModel):
    """Anonymous access, or whatever credential the client picks up implicitly."""
    model_config = ConfigDict(frozen=True)

    kind: Literal["none"] = "none"


class SharedKeyCredential(BaseModel):
    """Storage account shared key."""
    model_config = ConfigDict(frozen=True)

    kind: Literal["shared_key"] = "shared_key"
    secret: str = Field(repr=False)


class SasCredential(BaseModel):
    """Shared access signature passed as the raw query string."""
    model_config = ConfigDict(frozen=True)

    kind: Literal["sas"] = "sas"
    token: str = Field(repr=False)


Credential = Union[NoCredential, SharedKeyCredential, SasCredential]


class AddressReference(BaseModel):
    """Structured form of a blob address. Immutable once parsed."""
    model_config = ConfigDict(frozen=True)

    scheme: str = "https"
    account: str
    base_domain: str                # "core.windows.net", port included when given
    container: str
    object_path: str                # never starts with "/"
    credential: Credential = Field(default_factory=NoCredential, discriminator="kind")

    @property
    def access_token(self) -> str | None:
        """Shared key carried by the address, if any."""
        if isinstance(self.credential, SharedKeyCredential):
            return self.credential.secret
        return None

    @property
    def account_url(self) -> str:
        """Blob service endpoint for the account."""
        return f"{self.scheme}://{self.account}.{BLOB_HOST_MARKER}.{self.base_domain}"


def _credential_from_query(query: str, access_key_param: str) -> Credential:
    params = urllib.parse.parse_qs(query, keep_blank_values=True)

    access_key = params.get(access_key_param, [""])[0]
    if access_key:
        return SharedKeyCredential(secret=access_key)

    if SAS_SIGNATURE_PARAM in params:
        # Keep the token exactly as given; the signature covers its encoding
        return SasCredential(token=query)

    return NoCredential()


def parse_address(address: str, access_key_param: str = ACCESS_KEY_PARAM) -> AddressReference:
    """
    Parse a blob address into its parts.

    Args:
        address: URL such as https://acct.blob.core.windows.net/container/a/b
        access_key_param: Query parameter holding the shared key

    Returns:
        AddressReference for the address

    Raises:
        InvalidAddressError: If the host or path does not have the expected shape
    """
    parsed = urllib.parse.urlsplit(address)

    # Expected host style: accountname.blob.core.windows.net.
    # Everything after the second label differs across clouds and emulators,
    # and keeps any port (":10000" for Azurite).
    host = parsed.netloc.rpartition("@")[2]
    host_parts = host.split(".", 2)
    if len(host_parts) != 3 or not all(host_parts):
        raise InvalidAddressError(address, "host must be <account>.blob.<domain>")

    path_parts = parsed.path.removeprefix(SEPARATOR).split(SEPARATOR, 1)
    if (
        len(path_parts) != 2
        or not path_parts[0]
        or not path_parts[1]
        or path_parts[1].startswith(SEPARATOR)
    ):
        raise InvalidAddressError(address, "path must be /<container>/<object-path>")

    return AddressReference(
        scheme=parsed.scheme or "https",
        account=host_parts[0],
        base_domain=host_parts[2],
        container=path_parts[0],
        object_path=path_parts[1],
        credential=_credential_from_query(parsed.query, access_key_param),
    )
