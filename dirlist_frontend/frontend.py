"""WSGI front-end that serves listing pages under the mount prefix."""

import asyncio
import logging
from email.utils import formatdate
from typing import Callable, Optional
from urllib.parse import parse_qs, quote

from .api import ListingClient
from .errors import TransportError
from .models import LoadResult, LoadState
from .render import HtmlRenderer, UiState

logger = logging.getLogger(__name__)


class BrowseFrontend:
    """WSGI application: every request is one page load of the listing client.

    A fresh ListingClient is made per request so concurrent visitors never
    discard each other's responses.
    """

    def __init__(
        self,
        client_factory: Callable[[], ListingClient],
        thumb_origin: str = "",
        download_origin: Optional[str] = None,
    ):
        self.client_factory = client_factory
        self.thumb_origin = thumb_origin.rstrip("/")
        # With a download origin configured, a 404 listing may be a file.
        self.download_origin = download_origin.rstrip("/") if download_origin else None

    def __call__(self, environ, start_response):
        # PEP 3333 hands PATH_INFO over as latin-1 decoded bytes
        path = environ.get("PATH_INFO", "/").encode("latin-1").decode("utf-8", "replace")
        method = environ.get("REQUEST_METHOD", "GET")

        logger.info(f"Request: {method} {path}")

        if method not in ("GET", "HEAD"):
            return self.send_response(
                start_response, "405 Method Not Allowed", b"", headers=[("Allow", "GET, HEAD")]
            )

        try:
            client = self.client_factory()
            params = parse_qs(environ.get("QUERY_STRING", ""))
            renderer = HtmlRenderer(
                client.mount_prefix,
                download_origin=self.download_origin or client.list_origin,
                thumb_origin=self.thumb_origin,
                ui=UiState.from_query(params.get("theme", [None])[0]),
            )
            result = asyncio.run(client.load(path, renderer))
        except Exception:
            logger.exception("Front-end error")
            return self.send_response(
                start_response, "500 Internal Server Error", b"Internal Server Error", "text/plain"
            )

        return self.respond(start_response, result, renderer, method)

    def respond(self, start_response, result: LoadResult, renderer: HtmlRenderer, method: str = "GET"):
        if result.state == LoadState.REDIRECTED:
            return self.send_redirect(start_response, renderer.location)

        if result.state == LoadState.FAILED:
            error = result.error
            if isinstance(error, TransportError):
                if error.status_code == 404 and self.download_origin:
                    target = self.download_origin + quote(result.browse.logical_path)
                    return self.send_redirect(start_response, target, "307 Temporary Redirect")
                if error.status_code is not None:
                    renderer.status = f"{error.status_code} {error.reason}".strip()

        body = renderer.body if method != "HEAD" else b""
        return self.send_response(start_response, renderer.status, body, content_length=len(renderer.body))

    def send_response(self, start_response, status, content, content_type="text/html; charset=utf-8",
                      headers=None, content_length=None):
        resp_headers = [
            ("Content-Type", content_type),
            ("Content-Length", str(len(content) if content_length is None else content_length)),
            ("Date", formatdate(usegmt=True)),
            ("Server", "dirlist-frontend"),
        ]
        if headers:
            resp_headers.extend(headers)
        start_response(status, resp_headers)
        return [content]

    def send_redirect(self, start_response, location, status="302 Found"):
        logger.info(f"Redirect: {location}")
        return self.send_response(start_response, status, b"", headers=[("Location", location)])
