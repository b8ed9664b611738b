#!/usr/bin/env python3
"""Command-line entry point for the roster explorer.

Without flags, fetches the first page of users and prints a short summary.
``-i`` starts the interactive explorer; ``--user ID`` fetches one user.
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from dataclasses import replace

from ..clients import RosterClient
from ..config import DEFAULT_PAGE_SIZE, RosterSettings
from ..core.exceptions import ConfigError, RosterError
from ..session import ExplorerSession
from .render import Renderer
from .repl import ExplorerRepl

DEMO_ROWS = 3


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(prog="roster", description="Browse a paginated user directory")
    p.add_argument("-i", "--interactive", action="store_true", help="Start the interactive explorer")
    p.add_argument("--user", metavar="ID", help="Fetch a single user by id")
    p.add_argument(
        "--page-size",
        type=int,
        default=None,
        help=f"Records per page (1-100, default {DEFAULT_PAGE_SIZE})",
    )
    p.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging verbosity",
    )
    p.add_argument("--no-color", action="store_true", help="Disable ANSI colors")
    return p.parse_args(argv)


async def demo(client: RosterClient, page_size: int) -> None:
    page = await client.fetch_page(0, page_size)
    print(f"Fetched {page.item_count} users (more={page.has_more}, total={page.total})")
    for record in page.items[:DEMO_ROWS]:
        print(f"  {record.id} | {record.name or 'Unknown'} | {record.email or 'N/A'}")


async def show_user(client: RosterClient, record_id: str) -> None:
    record = await client.fetch_one(record_id)
    print(f"{record.id} | {record.name or 'Unknown'} | {record.email or 'N/A'}")
    print(f"  Role: {record.role or 'N/A'} | Time Zone: {record.timezone or 'N/A'}")
    if record.status is not None:
        print(f"  Status: {record.status}")
    if record.has_unknown_fields:
        print(f"  Unknown fields: {', '.join(record.unknown_fields)}")


async def interactive(client: RosterClient, settings: RosterSettings, color: bool) -> None:
    session = ExplorerSession(
        client,
        page_size=settings.page_size,
        backoff_seconds=settings.backoff_seconds,
        bulk_pacing=settings.bulk_pacing,
        export_dir=settings.export_dir,
    )
    await ExplorerRepl(session, renderer=Renderer(color=color)).run()


async def main_async(args: argparse.Namespace, settings: RosterSettings) -> None:
    async with RosterClient.from_settings(settings) as client:
        if args.user:
            await show_user(client, args.user)
        elif args.interactive:
            await interactive(client, settings, color=not args.no_color)
        else:
            await demo(client, settings.page_size)


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        settings = RosterSettings.from_env()
        if args.page_size is not None:
            settings = replace(settings, page_size=args.page_size)
    except ConfigError as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        return 1

    try:
        asyncio.run(main_async(args, settings))
    except RosterError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except KeyboardInterrupt:
        return 130
    return 0


def run() -> None:
    sys.exit(main())


if __name__ == "__main__":
    run()
