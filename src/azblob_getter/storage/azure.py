"""Azure blob storage client implementation."""

import base64
import binascii
import contextlib
import logging
from typing import Iterator, Optional

from azure.core.exceptions import (
    AzureError,
    ClientAuthenticationError,
    HttpResponseError,
    ResourceNotFoundError,
    ServiceRequestError,
    ServiceResponseError,
)
from azure.storage.blob import BlobServiceClient

from ..address import (
    AddressReference,
    Credential,
    SasCredential,
    SharedKeyCredential,
)
from ..constants import SEPARATOR
from ..errors import AuthError, NetworkError, ObjectNotFoundError, TransportError
from ..storage_models import ListingItem, ListingPage

logger = logging.getLogger(__name__)


@contextlib.contextmanager
def translate_errors(container: str, name: str) -> Iterator[None]:
    """Re-raise Azure SDK exceptions as TransportError subclasses."""
    try:
        yield
    except ResourceNotFoundError as e:
        raise ObjectNotFoundError(container, name) from e
    except ClientAuthenticationError as e:
        raise AuthError(f"Access denied to {container}/{name}: {e.message}") from e
    except (ServiceRequestError, ServiceResponseError) as e:
        raise NetworkError(f"Network failure on {container}/{name}: {e.message}") from e
    except HttpResponseError as e:
        if e.status_code == 404:
            raise ObjectNotFoundError(container, name) from e
        if e.status_code in (401, 403):
            raise AuthError(f"Access denied to {container}/{name}: {e.message}") from e
        raise TransportError(f"Request for {container}/{name} failed: {e.message}") from e
    except AzureError as e:
        raise TransportError(f"Request for {container}/{name} failed: {e.message}") from e


def sdk_credential(account: str, credential: Credential):
    """
    Map an address credential to what BlobServiceClient accepts.

    Raises:
        AuthError: If a shared key is not valid base64
    """
    if isinstance(credential, SharedKeyCredential):
        try:
            base64.b64decode(credential.secret, validate=True)
        except (binascii.Error, ValueError):
            raise AuthError(f"Shared key for account '{account}' is not valid base64")
        return {"account_name": account, "account_key": credential.secret}

    if isinstance(credential, SasCredential):
        return credential.token

    # NoCredential: anonymous access to public containers
    return None


class AzureStoreClient:
    """
    Azure Blob Storage client scoped to one account.

    Only reads are performed: prefix listings and full-object downloads.
    Retry and timeout behavior is the SDK's pipeline, configured through
    the keyword arguments given at construction.
    """

    def __init__(self, ref: AddressReference, credential_override=None, **client_kwargs):
        """
        Initialize Azure store client.

        Args:
            ref: Parsed address naming the account and credential
            credential_override: Token credential used when the address carries none
            **client_kwargs: Passed to BlobServiceClient (timeouts, retry policy)

        Raises:
            AuthError: If the credential is malformed
            TransportError: If the client cannot be constructed
        """
        credential = sdk_credential(ref.account, ref.credential)
        if credential is None:
            credential = credential_override

        try:
            self.client = BlobServiceClient(
                account_url=ref.account_url,
                credential=credential,
                **client_kwargs,
            )
        except (ValueError, AzureError) as e:
            raise TransportError(f"Cannot create client for {ref.account_url}: {e}") from e

        logger.debug(
            "Created blob client for %s (%s credential)",
            ref.account_url, ref.credential.kind,
        )

    def list_page(
        self,
        container: str,
        prefix: str,
        marker: Optional[str] = None,
        page_size: Optional[int] = None,
    ) -> ListingPage:
        """
        Fetch one page of a flat listing.

        Args:
            container: Container name
            prefix: Object name prefix
            marker: Continuation token from the previous page
            page_size: Maximum items in the page

        Returns:
            ListingPage for this request
        """
        container_client = self.client.get_container_client(container)

        with translate_errors(container, prefix):
            pages = container_client.list_blobs(
                name_starts_with=prefix or None,
                results_per_page=page_size,
            ).by_page(continuation_token=marker)

            items = []
            for blob in next(pages, []):
                items.append(ListingItem(
                    name=blob.name,
                    is_prefix_match=blob.name.startswith(prefix + SEPARATOR),
                    size=blob.size,
                ))

        return ListingPage(
            items=items,
            continuation_marker=pages.continuation_token or None,
        )

    def download(self, container: str, name: str) -> Iterator[bytes]:
        """
        Start downloading an object.

        Args:
            container: Container name
            name: Object name

        Returns:
            Iterator over the object's chunks
        """
        blob_client = self.client.get_blob_client(container=container, blob=name)

        with translate_errors(container, name):
            downloader = blob_client.download_blob()

        return self._chunks(downloader, container, name)

    @staticmethod
    def _chunks(downloader, container: str, name: str) -> Iterator[bytes]:
        with translate_errors(container, name):
            yield from downloader.chunks()
