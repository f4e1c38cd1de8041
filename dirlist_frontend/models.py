"""Data models for the directory listing front-end."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import List, Optional, Union

from .errors import ListingError, MalformedEntry

Timestamp = Union[str, datetime]

REQUIRED_FIELDS = ("url", "thumb_url", "name")


@dataclass
class Entry:
    """A file or directory as returned by the listing API."""

    url: str
    thumb_url: str
    name: str
    last_modified: Optional[Timestamp] = None  # None only for ".." and "/"
    is_directory: bool = False

    @classmethod
    def from_dict(cls, data: dict, is_directory: bool = False) -> "Entry":
        """Create Entry from API response dict.

        Raises MalformedEntry unless url, thumb_url and name are strings.
        """
        if not isinstance(data, dict):
            raise MalformedEntry(data)
        if not all(isinstance(data.get(key), str) for key in REQUIRED_FIELDS):
            raise MalformedEntry(data)
        return cls(
            url=data["url"],
            thumb_url=data["thumb_url"],
            name=data["name"],
            last_modified=data.get("last_modified"),
            is_directory=is_directory,
        )


@dataclass
class Listing:
    """Normalized listing of one logical path."""

    version: str
    files: List[Entry] = field(default_factory=list)
    directories: List[Entry] = field(default_factory=list)

    def entries(self) -> List[Entry]:
        """Directories first, then files."""
        return self.directories + self.files


@dataclass(frozen=True)
class BrowseState:
    """Where the user is browsing, derived from the location once per load."""

    logical_path: str
    parent_path: str

    @property
    def is_root(self) -> bool:
        return self.logical_path == "/"


@dataclass(frozen=True)
class Navigation:
    """What the renderer needs to draw the ".." and "/" shortcuts."""

    path: str
    show_root: bool
    show_parent: bool
    parent_url: Optional[str] = None
    parent_path: Optional[str] = None


class LoadState(str, Enum):
    """Stage of a single load."""
    IDLE = "idle"
    RESOLVING = "resolving"
    FETCHING = "fetching"
    NEGOTIATING = "negotiating"
    NORMALIZING = "normalizing"
    RENDERING = "rendering"
    RENDERED = "rendered"
    FAILED = "failed"
    REDIRECTED = "redirected"  # Location was outside the mount prefix
    DISCARDED = "discarded"    # A newer load superseded this one


@dataclass
class LoadResult:
    """Outcome of one load."""
    state: LoadState
    browse: Optional[BrowseState] = None
    listing: Optional[Listing] = None
    error: Optional[ListingError] = None
    redirect_to: Optional[str] = None
