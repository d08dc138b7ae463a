"""Command line demo: call a GitHub endpoint and print the outcome.

Examples::

    python -m requestable user octocat
    python -m requestable search "snug language:python" --sort stars
    GITHUB_TOKEN=... python -m requestable gist notes.txt --public
"""
import argparse
import asyncio
import dataclasses
import json
import logging
import sys
from pathlib import Path

import aiohttp

from . import github
from .config import load_settings
from .dispatch import Dispatcher
from .http import bearer_auth
from .log import setup_logging
from .outcome import HttpError

logger = logging.getLogger(__name__)


def build_parser():
    parser = argparse.ArgumentParser(
        prog="requestable", description="Call a GitHub REST endpoint"
    )
    parser.add_argument("--timeout", type=float, help="seconds per request")
    parser.add_argument("--log-level", help="e.g. DEBUG")
    commands = parser.add_subparsers(dest="command", required=True)

    user = commands.add_parser("user", help="look up a user account")
    user.add_argument("username")

    search = commands.add_parser("search", help="search repositories")
    search.add_argument("query")
    search.add_argument("--sort")
    search.add_argument("--order", choices=["asc", "desc"])

    gist = commands.add_parser("gist", help="create a gist from files")
    gist.add_argument("files", nargs="+", type=Path)
    gist.add_argument("--description")
    gist.add_argument("--public", action="store_true")
    return parser


def make_descriptor(args, settings):
    """Build the descriptor for the parsed command line"""
    if args.command == "user":
        return github.user(args.username)
    elif args.command == "search":
        return github.search_repos(args.query, args.sort, args.order)
    if not settings.github_token:
        raise SystemExit("creating a gist requires GITHUB_TOKEN to be set")
    gist = github.create_gist(
        {path.name: path.read_text() for path in args.files},
        description=args.description,
        public=args.public,
    )
    return bearer_auth(settings.github_token)(gist)


async def run(descriptor, timeout):
    async with aiohttp.ClientSession() as session:
        return await Dispatcher(session, timeout=timeout).send(descriptor)


def main(argv=None):
    args = build_parser().parse_args(argv)
    settings = load_settings()
    setup_logging(args.log_level or settings.log_level)
    descriptor = make_descriptor(args, settings)
    outcome = asyncio.run(
        run(descriptor, args.timeout or settings.timeout_seconds)
    )
    if outcome.ok:
        json.dump(dataclasses.asdict(outcome.value), sys.stdout, indent=2)
        sys.stdout.write("\n")
        return 0
    logger.error("request failed: %r", outcome)
    if isinstance(outcome, HttpError) and outcome.content:
        sys.stderr.write(outcome.content.decode("utf-8", "replace") + "\n")
    return 1


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
