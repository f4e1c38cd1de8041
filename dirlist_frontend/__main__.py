"""CLI entrypoint for the directory listing front-end."""

import argparse
import asyncio
import functools
import logging
import os
import sys

from cheroot.wsgi import Server as WSGIServer

from .api import ListingClient
from .frontend import BrowseFrontend
from .models import LoadState
from .render import TextRenderer


def serve(args, client_factory):
    app = BrowseFrontend(
        client_factory,
        thumb_origin=args.thumb_origin,
        download_origin=args.download_origin,
    )
    server = WSGIServer((args.host, args.port), app)

    print(f"Directory listing front-end running on http://{args.host}:{args.port}{client_factory().mount_prefix}")
    print("Press Ctrl+C to stop")

    try:
        server.start()
    except KeyboardInterrupt:
        server.stop()
        print("\nShutdown complete")


def ls(args, client_factory) -> int:
    client = client_factory()
    renderer = TextRenderer(
        client.mount_prefix,
        download_origin=args.download_origin or client.list_origin,
        thumb_origin=args.thumb_origin,
    )
    location = args.location
    prefix = client.mount_prefix
    if location != prefix and not location.startswith(prefix + "/"):
        location = prefix + "/" + location.lstrip("/")

    result = asyncio.run(client.load(location, renderer))
    print(renderer)
    return 0 if result.state == LoadState.RENDERED else 1


def main():
    parser = argparse.ArgumentParser(description="Directory listing front-end")
    parser.add_argument("--list-origin", default=None,
                        help="Listing API origin (default: $DIRLIST_LIST_ORIGIN)")
    parser.add_argument("--thumb-origin", default=os.environ.get("DIRLIST_THUMB_ORIGIN", ""),
                        help="Thumbnail origin (default: $DIRLIST_THUMB_ORIGIN)")
    parser.add_argument("--download-origin", default=os.environ.get("DIRLIST_DOWNLOAD_ORIGIN"),
                        help="Download origin for files (default: the listing origin)")
    parser.add_argument("--mount-prefix", default=None,
                        help="Path prefix of browse locations (default: $DIRLIST_MOUNT_PREFIX or /user)")
    parser.add_argument("--timeout", type=float, default=30.0, help="Listing request timeout in seconds")
    parser.add_argument("--debug", action="store_true", help="Enable debug logging")

    subparsers = parser.add_subparsers(dest="command", help="Commands")

    serve_parser = subparsers.add_parser("serve", help="Serve listing pages over HTTP")
    serve_parser.add_argument("--host", default="127.0.0.1", help="Host to bind (default: 127.0.0.1)")
    serve_parser.add_argument("--port", type=int, default=8080, help="Port to bind (default: 8080)")

    ls_parser = subparsers.add_parser("ls", help="Print the listing of one location")
    ls_parser.add_argument("location", nargs="?", default="/", help="Logical path or full location")

    args = parser.parse_args()

    if not args.command:
        parser.print_help()
        sys.exit(1)

    logging.basicConfig(
        level=logging.DEBUG if args.debug else logging.INFO,
        format="%(asctime)s - %(levelname)s - %(message)s"
    )

    client_factory = functools.partial(
        ListingClient,
        list_origin=args.list_origin,
        mount_prefix=args.mount_prefix,
        timeout=args.timeout,
    )
    try:
        client_factory()
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        print("Set DIRLIST_LIST_ORIGIN or pass --list-origin", file=sys.stderr)
        sys.exit(1)

    if args.command == "serve":
        serve(args, client_factory)
    elif args.command == "ls":
        sys.exit(ls(args, client_factory))


if __name__ == "__main__":
    main()
