"""Normalize and order listing payloads."""

import logging
from datetime import datetime, timezone
from typing import Iterable, List, Tuple, Union

from .errors import InvalidTimestamp, MalformedEntry
from .models import Entry, Listing
from .timefmt import parse_timestamp

logger = logging.getLogger(__name__)

_UNDATED = datetime.min.replace(tzinfo=timezone.utc)


def _sort_key(entry: Entry) -> Tuple[bool, datetime]:
    try:
        return True, parse_timestamp(entry.last_modified)
    except InvalidTimestamp:
        # Undated entries sink to the bottom; formatting them fails later.
        return False, _UNDATED


def sort_entries(entries: Iterable[Entry]) -> List[Entry]:
    """Most recently modified first. Equal timestamps keep their order."""
    return sorted(entries, key=_sort_key, reverse=True)


def _entries(items, is_directory: bool) -> List[Entry]:
    if not items:
        return []
    if not isinstance(items, list):
        raise MalformedEntry(items)
    return [
        item if isinstance(item, Entry) else Entry.from_dict(item, is_directory)
        for item in items
    ]


def normalize_listing(payload: Union[dict, Listing]) -> Listing:
    """Build a sorted Listing from a decoded payload.

    Both the flat 0.1.x shape ({version, files, directories}) and the nested
    0.2.x shape ({version, listing: {files, directories}}) are accepted.
    Missing collections become empty lists; entries that are not objects
    with url, thumb_url and name raise MalformedEntry.
    """
    if isinstance(payload, Listing):
        return Listing(
            version=payload.version,
            files=sort_entries(payload.files or []),
            directories=sort_entries(payload.directories or []),
        )

    container = payload["listing"] if "listing" in payload else payload
    if not isinstance(container, dict):
        container = {}

    listing = Listing(
        version=payload.get("version", ""),
        files=sort_entries(_entries(container.get("files"), False)),
        directories=sort_entries(_entries(container.get("directories"), True)),
    )
    logger.debug(
        f"Normalized listing: {len(listing.directories)} directories, {len(listing.files)} files"
    )
    return listing
