# SPDX-License-Identifier: LGPL-3.0-only
# Copyright (c) 2026 Mirrowel

"""streaming-twitter command line: open a stream or look up users.

Entry point registered as ``streaming-twitter`` in ``pyproject.toml``::

    [project.scripts]
    streaming-twitter = "streaming_twitter.cli:main"
"""

import argparse
import asyncio
import logging
import sys
from typing import Any, Dict, List, Optional, TextIO

from .auth import ClientTokens, FileTokenStore
from .client import FILTER, FIREHOSE, SAMPLE, StreamClient, StreamHandle
from .client.streams import validate_filter_form
from .core import APIError, ClientConfig, Endpoint, StreamingTwitterError, load_config
from .core.constants import USERS_LOOKUP_URL
from .models import TwitterStatus, TwitterUser


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="streaming-twitter",
        description="Read the Twitter streaming API from the terminal.",
    )
    parser.add_argument(
        "--config",
        default=None,
        help="Token storage file location (default: tokens.json)",
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Log debug output to stderr"
    )
    subparsers = parser.add_subparsers(dest="command")

    # -- streaming-twitter stream -----------------------------------------
    stream_parser = subparsers.add_parser("stream", help="Open a stream and print statuses")
    stream_parser.add_argument(
        "stream",
        nargs="?",
        default=FILTER,
        choices=[FILTER, FIREHOSE, SAMPLE],
        help="Type of stream to open (default: Filter)",
    )
    stream_parser.add_argument(
        "--follow", default="", help="Twitter screen names to follow, separated by commas"
    )
    stream_parser.add_argument(
        "--track", default="", help="Keywords to track, separated by commas"
    )
    stream_parser.add_argument(
        "--locations",
        default="",
        help="Longitude and latitude pairs to track, separated by commas",
    )

    # -- streaming-twitter lookup -----------------------------------------
    lookup_parser = subparsers.add_parser("lookup", help="Look up users by screen name")
    lookup_parser.add_argument("names", help="Screen names, separated by commas")

    return parser


def format_status(status: TwitterStatus) -> str:
    return f"@{status.user.screen_name}: {status.text}"


def format_user(user: TwitterUser) -> str:
    return f"@{user.screen_name} ({user.id}) {user.name}"


async def lookup_users(client: StreamClient, names: str) -> Optional[List[TwitterUser]]:
    """
    Resolve comma separated screen names through users/lookup.

    Returns None on failure, after printing the error to stderr.
    """
    users = await client.rest(
        Endpoint.get(USERS_LOOKUP_URL),
        {"screen_name": names},
        model=TwitterUser.list_from,
    )
    _drain(client.finished)
    if users is not None:
        return users

    for error in _drain(client.errors):
        if isinstance(error, APIError) and error.code == 404:
            print(f"User {names} doesn't exist", file=sys.stderr)
        else:
            print(f"ERROR: {error}", file=sys.stderr)
    return None


async def _print_queue(queue: "asyncio.Queue[Any]", render, out: TextIO) -> None:
    while True:
        item = await queue.get()
        print(render(item), file=out, flush=True)


def _drain(queue: "asyncio.Queue[Any]") -> List[Any]:
    items = []
    while not queue.empty():
        items.append(queue.get_nowait())
    return items


async def consume(client: StreamClient, handle: StreamHandle) -> bool:
    """
    Print records and errors until the stream's task exits.

    Returns True if the stream ran to its Finished signal.
    """
    printers = [
        asyncio.create_task(_print_queue(handle.records, format_status, sys.stdout)),
        asyncio.create_task(
            _print_queue(client.errors, lambda e: f"ERROR: {e}", sys.stderr)
        ),
    ]
    try:
        await handle.wait()
    finally:
        for printer in printers:
            printer.cancel()
        await asyncio.gather(*printers, return_exceptions=True)

    for record in _drain(handle.records):
        print(format_status(record), flush=True)
    for error in _drain(client.errors):
        print(f"ERROR: {error}", file=sys.stderr)
    return bool(_drain(client.finished))


async def run_stream_command(args: argparse.Namespace, config: ClientConfig) -> int:
    form: Dict[str, str] = {}
    if args.stream == FILTER:
        try:
            validate_filter_form(
                {"follow": args.follow, "track": args.track, "locations": args.locations}
            )
        except ValueError:
            print(
                "Either --follow, --track or --locations must be specified "
                "when using the Filter stream.",
                file=sys.stderr,
            )
            return 2

    async with StreamClient(config) as client:
        await client.authenticate(
            ClientTokens(FileTokenStore(config.token_file), config=config)
        )

        if args.stream == FILTER:
            if args.follow:
                # The stream wants user IDs, not screen names
                users = await lookup_users(client, args.follow)
                if users is None:
                    return 1
                form["follow"] = ",".join(user.id for user in users)
            if args.track:
                form["track"] = args.track
            if args.locations:
                form["locations"] = args.locations

        handle = client.stream(client.resolve(args.stream), form)
        try:
            finished = await consume(client, handle)
        except asyncio.CancelledError:
            handle.cancel()
            await handle.wait()
            raise
    return 0 if finished else 1


async def run_lookup_command(args: argparse.Namespace, config: ClientConfig) -> int:
    async with StreamClient(config) as client:
        await client.authenticate(
            ClientTokens(FileTokenStore(config.token_file), config=config)
        )
        users = await lookup_users(client, args.names)
    if users is None:
        return 1
    for user in users:
        print(format_user(user))
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    """CLI entry point for the ``streaming-twitter`` command."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 0

    if args.verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        )

    config = load_config(token_file=args.config)
    command = run_stream_command if args.command == "stream" else run_lookup_command

    try:
        return asyncio.run(command(args, config))
    except StreamingTwitterError as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return 1
    except KeyboardInterrupt:
        return 130


if __name__ == "__main__":
    sys.exit(main())
