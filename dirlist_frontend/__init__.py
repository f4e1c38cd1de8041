"""Browse a versioned JSON directory-listing API as a file browser."""

from .api import ListingClient
from .errors import (
    InvalidLocation, InvalidTimestamp, ListingError, MalformedEntry, ProtocolMismatch, TransportError,
)
from .listing import normalize_listing
from .models import BrowseState, Entry, Listing, LoadResult, LoadState, Navigation
from .paths import resolve_location
from .protocol import SUPPORTED_VERSION, negotiate
from .timefmt import format_relative

__version__ = "0.2.0"
