# Tests for the command line

import functools
import sys

import pytest

from dirlist_frontend import __main__ as cli
from dirlist_frontend.api import ListingClient

from conftest import entry, make_payload


@pytest.fixture
def fake_client(monkeypatch, server):
    monkeypatch.setattr(cli, "ListingClient", functools.partial(ListingClient, transport=server.transport))
    return server


def run(monkeypatch, *argv):
    monkeypatch.setattr(sys, "argv", ["dirlist-frontend", *argv])
    with pytest.raises(SystemExit) as exc:
        cli.main()
    return exc.value.code


class TestLs:
    """The ls command."""

    def test_lists_root(self, monkeypatch, capsys, fake_client):
        fake_client.add("/", make_payload(files=[entry("notes.txt")], directories=[entry("pics", directory=True)]))

        code = run(monkeypatch, "--list-origin", "http://list.test", "ls")

        out = capsys.readouterr().out.splitlines()
        assert code == 0
        assert out[0] == "File Server (/)"
        assert out[1].startswith("pics/")
        assert out[2].startswith("notes.txt")
        assert out[2].endswith("http://list.test/root/notes.txt")

    def test_logical_path(self, monkeypatch, capsys, fake_client):
        fake_client.add("/pics/2021", make_payload())

        code = run(monkeypatch, "--list-origin", "http://list.test", "ls", "/pics/2021")

        assert code == 0
        assert [r.url.path for r in fake_client.requests] == ["/pics/2021"]
        assert capsys.readouterr().out.splitlines()[0] == "File Server (/pics/2021)"

    def test_path_sharing_prefix_text(self, monkeypatch, capsys, fake_client):
        fake_client.add("/username", make_payload())

        code = run(monkeypatch, "--list-origin", "http://list.test", "ls", "/username")

        assert code == 0
        assert [r.url.path for r in fake_client.requests] == ["/username"]
        assert capsys.readouterr().out.splitlines()[0] == "File Server (/username)"

    def test_full_location(self, monkeypatch, capsys, fake_client):
        fake_client.add("/pics", make_payload())

        code = run(monkeypatch, "--list-origin", "http://list.test", "ls", "/user/pics")

        assert code == 0
        assert [r.url.path for r in fake_client.requests] == ["/pics"]

    def test_failure_exit_code(self, monkeypatch, capsys, fake_client):
        code = run(monkeypatch, "--list-origin", "http://list.test", "ls", "/missing")

        assert code == 1
        assert "Error: 404 Not Found" in capsys.readouterr().out


def test_missing_origin(monkeypatch, capsys):
    monkeypatch.delenv("DIRLIST_LIST_ORIGIN", raising=False)

    assert run(monkeypatch, "ls") == 1
    assert "DIRLIST_LIST_ORIGIN" in capsys.readouterr().err


def test_no_command(monkeypatch):
    assert run(monkeypatch) == 1
