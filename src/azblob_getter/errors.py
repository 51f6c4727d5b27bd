"""Custom exceptions for azblob-getter.

Every layer raises these to its immediate caller. Nothing in the library
terminates the process; the CLI is the only place that turns an error into
an exit status. Local filesystem failures surface as the builtin OSError.
"""


class GetterError(RuntimeError):
    """Base class for all getter errors."""
    pass


class InvalidAddressError(GetterError, ValueError):
    """Address does not decompose into account/container/object path."""

    def __init__(self, address: str, reason: str):
        self.address = address
        self.reason = reason
        super().__init__(f"URL is not a valid Azure Blob URL: {address} ({reason})")


class ConfigError(GetterError):
    """Invalid getter settings."""
    pass


# Transport Errors
class TransportError(GetterError):
    """Base class for failures originating from the blob store client."""
    pass


class NetworkError(TransportError):
    """Network connectivity issue with the blob endpoint."""
    pass


class AuthError(TransportError):
    """Credential rejected or malformed (401/403)."""
    pass


class ObjectNotFoundError(TransportError):
    """Object or container not found in the store (404)."""

    def __init__(self, container: str, name: str):
        self.container = container
        self.name = name
        super().__init__(f"Blob not found: {container}/{name}")


class UnsafePathError(GetterError, ValueError):
    """Object name would land outside the destination root."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Unsafe object name for local path: {name}")
