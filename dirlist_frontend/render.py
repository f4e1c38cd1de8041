"""Renderers turn an ordered list of entries into something to show.

A renderer receives exactly one of `render`, `render_error` or `redirect`
per load. Two implementations are provided: `HtmlRenderer` for the WSGI
front-end and `TextRenderer` for the command line.
"""

from dataclasses import dataclass
from typing import List, Optional, Protocol, Sequence, Tuple
from xml.etree.ElementTree import Element, SubElement, tostring

from .models import Entry, Navigation
from .paths import DEFAULT_MOUNT_PREFIX, href_for
from .timefmt import format_relative

DIRECTORY_THUMB = "/thumbdir"
THEMES = ("light", "dark")

# (entry, href, thumbnail src, byline)
Row = Tuple[Entry, str, str, Optional[str]]


class Renderer(Protocol):
    def render(self, entries: Sequence[Entry], nav: Navigation) -> None: ...

    def render_error(self, message: str) -> None: ...

    def redirect(self, location: str) -> None: ...


@dataclass
class UiState:
    """Page chrome owned by the front-end, never by the listing client."""
    theme: str = "light"

    @classmethod
    def from_query(cls, theme: Optional[str]) -> "UiState":
        return cls(theme=theme if theme in THEMES else "light")


def navigation_entries(nav: Navigation) -> List[Entry]:
    """Synthetic ".." and "/" entries, in display order."""
    entries = []
    if nav.show_parent:
        entries.append(Entry(nav.parent_path or "/", DIRECTORY_THUMB, "..", None, True))
    if nav.show_root:
        entries.append(Entry("/", DIRECTORY_THUMB, "/", None, True))
    return entries


class _RowRenderer:
    """Resolves entry URLs against the configured origins."""

    def __init__(
        self,
        mount_prefix: str = DEFAULT_MOUNT_PREFIX,
        download_origin: str = "",
        thumb_origin: str = "",
    ):
        self.mount_prefix = mount_prefix
        self.download_origin = download_origin
        self.thumb_origin = thumb_origin

    def href(self, entry: Entry) -> str:
        if entry.is_directory:
            return href_for(entry.url, self.mount_prefix)
        return self.download_origin + entry.url

    def rows(self, entries: Sequence[Entry], nav: Navigation) -> List[Row]:
        """Navigation rows first, then entries with their relative times.

        Formatting happens before anything is emitted, so an InvalidTimestamp
        leaves the renderer untouched.
        """
        rows = [
            (entry, self.href(entry), self.thumb_origin + entry.thumb_url, None)
            for entry in navigation_entries(nav)
        ]
        for entry in entries:
            byline = format_relative(entry.last_modified)
            rows.append((entry, self.href(entry), self.thumb_origin + entry.thumb_url, byline))
        return rows


class HtmlRenderer(_RowRenderer):
    """Renders a listing page as HTML."""

    def __init__(self, *args, ui: Optional[UiState] = None, **kwargs):
        super().__init__(*args, **kwargs)
        self.ui = ui or UiState()
        self.status = "200 OK"
        self.location: Optional[str] = None
        self.body = b""

    def _page(self, path: Optional[str]) -> Tuple[Element, Element]:
        text = f"File Server ({path})" if path else "File Server"
        html = Element("html", lang="en")
        head = SubElement(html, "head")
        SubElement(head, "meta", charset="utf-8")
        SubElement(head, "title").text = text
        body = SubElement(html, "body", {"class": self.ui.theme})
        SubElement(body, "h1").text = text
        listfile = SubElement(body, "ul", id="listfile")
        return html, listfile

    def _finish(self, html: Element):
        self.body = b"<!DOCTYPE html>\n" + tostring(html, encoding="unicode", method="html").encode("utf-8")

    def render(self, entries: Sequence[Entry], nav: Navigation) -> None:
        rows = self.rows(entries, nav)
        html, listfile = self._page(nav.path)
        for entry, href, thumb, byline in rows:
            li = SubElement(listfile, "li")
            item = SubElement(li, "div", {"class": "file"})
            link = SubElement(item, "a", {"class": "thumb", "href": href})
            SubElement(link, "img", src=thumb, alt="", width="32", height="32", loading="lazy")
            info = SubElement(item, "div", {"class": "info"})
            SubElement(info, "a", {"class": "filename", "href": href}).text = entry.name
            if byline is not None:
                SubElement(info, "div", {"class": "byline"}).text = byline
        self.status = "200 OK"
        self._finish(html)

    def render_error(self, message: str, status: str = "502 Bad Gateway") -> None:
        html, listfile = self._page(None)
        SubElement(listfile, "li", {"class": "error"}).text = message
        self.status = status
        self._finish(html)

    def redirect(self, location: str) -> None:
        self.status = "302 Found"
        self.location = location
        self.body = b""


class TextRenderer(_RowRenderer):
    """Renders a listing as lines of text for the terminal."""

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.lines: List[str] = []

    def render(self, entries: Sequence[Entry], nav: Navigation) -> None:
        rows = self.rows(entries, nav)
        names = [
            entry.name + "/" if entry.is_directory and entry.last_modified is not None else entry.name
            for entry, _, _, _ in rows
        ]
        width = max((len(name) for name in names), default=0)
        lines = [f"File Server ({nav.path})"]
        for name, (_, href, _, byline) in zip(names, rows):
            lines.append(f"{name:<{width}}  {byline or '':<16}  {href}".rstrip())
        self.lines = lines

    def render_error(self, message: str) -> None:
        self.lines = [message]

    def redirect(self, location: str) -> None:
        self.lines = [f"Redirect: {location}"]

    def __str__(self):
        return "\n".join(self.lines)
