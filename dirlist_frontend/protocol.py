"""Listing protocol version negotiation."""

import logging
from typing import Tuple

from .errors import ProtocolMismatch

logger = logging.getLogger(__name__)

# Bump together with the wire format (0.1.x was flat, 0.2.x nests under "listing").
SUPPORTED_VERSION: Tuple[int, int] = (0, 2)


def parse_version(version) -> Tuple[int, int, int]:
    """Split "020" or "0.2.0" into (major, minor, patch)."""
    if not isinstance(version, str):
        raise ValueError(f"version is not a string: {version!r}")

    if "." in version:
        fields = version.split(".")
    else:
        fields = list(version)
    if len(fields) != 3 or not all(f.isdigit() and f.isascii() for f in fields):
        raise ValueError(f"malformed version: {version!r}")

    major, minor, patch = (int(f) for f in fields)
    return major, minor, patch


def negotiate(version, supported: Tuple[int, int] = SUPPORTED_VERSION) -> Tuple[int, int, int]:
    """Check that the server's version matches the supported major and minor.

    The patch number is never checked. Raises ProtocolMismatch otherwise.
    """
    try:
        major, minor, patch = parse_version(version)
    except ValueError as e:
        logger.warning(f"Rejecting listing: {e}")
        raise ProtocolMismatch(version, supported) from e

    if (major, minor) != tuple(supported):
        logger.warning(f"Rejecting listing version {version!r}, supported {supported}")
        raise ProtocolMismatch(version, supported)
    return major, minor, patch
