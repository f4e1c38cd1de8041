"""Map the location path to the logical path being browsed."""

from .errors import InvalidLocation
from .models import BrowseState, Navigation

DEFAULT_MOUNT_PREFIX = "/user"


def resolve_location(path: str, mount_prefix: str = DEFAULT_MOUNT_PREFIX) -> BrowseState:
    """Resolve a location path like "/user/a/b" into a BrowseState.

    Raises InvalidLocation when the path is not under the mount prefix.
    """
    if not path.startswith(mount_prefix):
        raise InvalidLocation(path, mount_prefix)

    logical = path[len(mount_prefix):]
    if logical and not logical.startswith("/"):
        # "/username" is not under "/user"
        raise InvalidLocation(path, mount_prefix)

    logical = logical.rstrip("/") or "/"
    if logical == "/":
        return BrowseState(logical_path="/", parent_path="")

    parent = logical[:logical.rfind("/")]
    return BrowseState(logical_path=logical, parent_path=parent)


def href_for(logical_path: str, mount_prefix: str = DEFAULT_MOUNT_PREFIX) -> str:
    """Browse URL for a logical path. The root is the mount prefix itself."""
    if logical_path in ("", "/"):
        return mount_prefix
    return mount_prefix + logical_path


def navigation_for(state: BrowseState, mount_prefix: str = DEFAULT_MOUNT_PREFIX) -> Navigation:
    if state.is_root:
        return Navigation(path=state.logical_path, show_root=False, show_parent=False)
    return Navigation(
        path=state.logical_path,
        show_root=True,
        show_parent=True,
        parent_url=href_for(state.parent_path, mount_prefix),
        parent_path=state.parent_path or "/",
    )
