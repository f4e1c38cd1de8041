"""Shared fixtures for the listing front-end tests."""

import json

import httpx
import pytest

LIST_ORIGIN = "http://list.test"


def make_payload(version="020", files=None, directories=None, nested=True):
    body = {}
    if files is not None:
        body["files"] = files
    if directories is not None:
        body["directories"] = directories
    if nested:
        return {"version": version, "listing": body}
    return {"version": version, **body}


def entry(name, last_modified="2021-01-01T00:00:00Z", directory=False):
    return {
        "name": name,
        "url": f"/{name}" if directory else f"/root/{name}",
        "thumb_url": "/thumbdir" if directory else "/thumb",
        "last_modified": last_modified,
    }


class RecordingRenderer:
    """Renderer that remembers what it was asked to do."""

    def __init__(self):
        self.calls = []

    def render(self, entries, nav):
        self.calls.append(("render", list(entries), nav))

    def render_error(self, message):
        self.calls.append(("error", message))

    def redirect(self, location):
        self.calls.append(("redirect", location))


class FakeListingServer:
    """Serves canned responses by path and records every request."""

    def __init__(self):
        self.routes = {}
        self.requests = []

    def add(self, path, payload=None, status=200, content=None):
        if content is None:
            content = json.dumps(payload).encode()
        self.routes[path] = (status, content)

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        status, content = self.routes.get(request.url.path, (404, b"Not Found"))
        return httpx.Response(status, content=content, headers={"Content-Type": "application/json"})

    @property
    def transport(self):
        return httpx.MockTransport(self.handler)


@pytest.fixture
def server():
    return FakeListingServer()


@pytest.fixture
def renderer():
    return RecordingRenderer()
