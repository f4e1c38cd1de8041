"""Errors raised while loading a directory listing."""

from typing import Optional, Tuple


class ListingError(Exception):
    """Base class for everything that ends a load."""


class InvalidLocation(ListingError):
    """The location is not under the mount prefix; send the user there."""

    def __init__(self, path: str, redirect_to: str):
        super().__init__(f"Invalid path {path!r}, expected it under {redirect_to!r}")
        self.path = path
        self.redirect_to = redirect_to


class TransportError(ListingError):
    """The listing endpoint could not be reached or answered non-2xx."""

    def __init__(self, status_code: Optional[int], reason: str):
        if status_code is None:
            message = f"Error: {reason}"
        else:
            message = f"Error: {status_code} {reason}"
        super().__init__(message)
        self.status_code = status_code
        self.reason = reason


class ProtocolMismatch(ListingError):
    """The listing speaks a protocol version this client does not support."""

    def __init__(self, received, supported: Tuple[int, int]):
        major, minor = supported
        super().__init__(
            f"Client supports {major}.{minor}.*, server sent version {received!r}. "
            "Please update your client."
        )
        self.received = received
        self.supported = supported


class InvalidTimestamp(ListingError):
    """A timestamp is missing or cannot be parsed."""

    def __init__(self, value):
        super().__init__(f"Invalid timestamp: {value!r}")
        self.value = value


class MalformedEntry(ListingError):
    """A listed entry is not an object or lacks url, thumb_url or name."""

    def __init__(self, data):
        super().__init__(f"Malformed entry in listing: {data!r}")
        self.data = data
