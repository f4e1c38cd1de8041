"""Directory listing API client."""

import os
import logging
from typing import Optional, Tuple
from urllib.parse import quote

import httpx

from .errors import InvalidLocation, ListingError, ProtocolMismatch, TransportError
from .listing import normalize_listing
from .models import BrowseState, Listing, LoadResult, LoadState
from .paths import DEFAULT_MOUNT_PREFIX, navigation_for, resolve_location
from .protocol import SUPPORTED_VERSION, negotiate
from .render import Renderer

logger = logging.getLogger(__name__)


class ListingClient:
    """Loads listings for browse locations and hands them to a renderer.

    One client tracks one browsing session: when a newer load starts before
    an older one's response arrives, the older result is discarded.
    """

    def __init__(
        self,
        list_origin: Optional[str] = None,
        mount_prefix: Optional[str] = None,
        supported: Tuple[int, int] = SUPPORTED_VERSION,
        timeout: float = 30.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.list_origin = (list_origin or os.environ.get("DIRLIST_LIST_ORIGIN", "")).rstrip("/")
        self.mount_prefix = (
            mount_prefix or os.environ.get("DIRLIST_MOUNT_PREFIX", DEFAULT_MOUNT_PREFIX)
        ).rstrip("/")
        self.supported = supported
        self.timeout = timeout
        self.transport = transport
        self._generation = 0

        if not self.list_origin:
            raise ValueError("DIRLIST_LIST_ORIGIN environment variable required")

    def _url(self, logical_path: str) -> str:
        return f"{self.list_origin}{quote(logical_path)}"

    async def _request(self, logical_path: str) -> dict:
        """GET the raw listing payload for a logical path."""
        url = self._url(logical_path)
        logger.info(f"Listing request: GET {url}")

        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
                response = await client.get(url)
        except httpx.RequestError as e:
            logger.warning(f"Listing request failed: {e}")
            raise TransportError(None, str(e) or type(e).__name__) from e

        if not response.is_success:
            logger.warning(f"Listing returned {response.status_code} for {logical_path}")
            raise TransportError(response.status_code, response.reason_phrase)

        try:
            payload = response.json()
        except ValueError as e:
            raise ProtocolMismatch(None, self.supported) from e
        if not isinstance(payload, dict):
            raise ProtocolMismatch(None, self.supported)
        return payload

    async def fetch_listing(self, logical_path: str) -> Listing:
        """Fetch, check and normalize the listing of a logical path."""
        payload = await self._request(logical_path)
        negotiate(payload.get("version"), self.supported)
        return normalize_listing(payload)

    async def load(self, location: str, renderer: Renderer) -> LoadResult:
        """Run one page load for `location` and render the outcome.

        Exactly one of render, render_error or redirect is called on the
        renderer, unless a newer load made this one stale.
        """
        self._generation += 1
        generation = self._generation
        state = LoadState.RESOLVING

        try:
            browse = resolve_location(location, self.mount_prefix)
        except InvalidLocation as e:
            logger.info(f"Redirecting {location!r} to {e.redirect_to!r}")
            renderer.redirect(e.redirect_to)
            return LoadResult(LoadState.REDIRECTED, error=e, redirect_to=e.redirect_to)

        listing = None
        try:
            state = LoadState.FETCHING
            payload = await self._request(browse.logical_path)

            if generation != self._generation:
                return self._discard(browse, location)

            state = LoadState.NEGOTIATING
            negotiate(payload.get("version"), self.supported)

            state = LoadState.NORMALIZING
            listing = normalize_listing(payload)

            state = LoadState.RENDERING
            renderer.render(listing.entries(), navigation_for(browse, self.mount_prefix))
        except ListingError as e:
            if generation != self._generation:
                return self._discard(browse, location)
            logger.warning(f"Load of {location!r} failed while {state.value}: {e}")
            renderer.render_error(str(e))
            return LoadResult(LoadState.FAILED, browse=browse, error=e)

        logger.debug(f"Rendered {location!r}")
        return LoadResult(LoadState.RENDERED, browse=browse, listing=listing)

    def _discard(self, browse: BrowseState, location: str) -> LoadResult:
        logger.debug(f"Discarding stale response for {location!r}")
        return LoadResult(LoadState.DISCARDED, browse=browse)
