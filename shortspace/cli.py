"""
Command-line interface for the short URL service.

Usage:
    shortspace shorten <url> [--custom-id ID] [--no-scrape]
    shortspace get <space> <id>
    shortspace list <space> [--page N] [--per-page N]
    shortspace delete <space> <id>
    shortspace stats <space>
    shortspace label [--year YEAR]
    shortspace health
"""

import argparse
import asyncio
import json
import sys
from datetime import datetime, timezone
from typing import Optional

from config import Config
from .bootstrap import build_service
from .common.logging_config import setup_logging
from .common.url_builder import build_short_path
from .errors import ShortSpaceError
from .partition import label_for_year


def _fail(message: str) -> int:
    print(json.dumps({"success": False, "error": message}, indent=2), file=sys.stderr)
    return 1


class ShortSpaceCLI:
    """Command-line interface for the short URL service."""

    def __init__(self, config: Config, verbose: bool = False):
        self.config = config
        self.logger = setup_logging(level="DEBUG" if verbose else "WARNING", stream=sys.stderr)
        self.service = None

    async def initialize(self):
        """Initialize storage and service."""
        self.service = build_service(self.config, self.logger)

    async def cleanup(self):
        if self.service:
            await self.service.close()

    async def shorten(self, url: str, custom_id: Optional[str] = None):
        """Shorten a URL."""
        try:
            record = await self.service.create_short_url(url, custom_id)
        except ShortSpaceError as e:
            return _fail(str(e))

        print(json.dumps({
            "success": True,
            "path": build_short_path(record.space, record.id),
            **record.to_dict(),
        }, indent=2))
        return 0

    async def get(self, space: str, short_id: str):
        """Show a record without counting a visit."""
        try:
            record = await self.service.get_url_info(space, short_id)
        except ShortSpaceError as e:
            return _fail(str(e))

        print(json.dumps({"success": True, **record.to_dict()}, indent=2))
        return 0

    async def list_urls(self, space: str, page: int = 1, per_page: int = 10):
        """List records in a space."""
        try:
            records = await self.service.list_urls(space, page, per_page)
        except ShortSpaceError as e:
            return _fail(str(e))

        print(json.dumps({
            "success": True,
            "space": space,
            "count": len(records),
            "urls": [record.to_dict() for record in records],
        }, indent=2))
        return 0

    async def delete(self, space: str, short_id: str):
        """Delete a record."""
        try:
            await self.service.delete_short_url(space, short_id)
        except ShortSpaceError as e:
            return _fail(str(e))

        print(json.dumps({"success": True, "message": f"Deleted /{space}/{short_id}"}, indent=2))
        return 0

    async def stats(self, space: str):
        """Show statistics for a space."""
        try:
            stats = await self.service.get_statistics(space)
        except ShortSpaceError as e:
            return _fail(str(e))

        print(json.dumps({"success": True, **stats}, indent=2))
        return 0

    async def health(self):
        """Check service health."""
        health_status = await self.service.health_check()
        print(json.dumps({"success": True, "health": health_status}, indent=2))
        return 0 if health_status["overall"] else 1


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="shortspace",
        description="ShortSpace CLI",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Shorten a URL into the current year's space
  %(prog)s shorten https://example.com/long/url

  # Shorten with a custom ID, without scraping the page
  %(prog)s shorten https://example.com/long/url --custom-id mylink --no-scrape

  # Show a record
  %(prog)s get d mylink

  # List the second page of a space
  %(prog)s list d --page 2 --per-page 20

  # Which space does 2031 map to?
  %(prog)s label --year 2031
        """
    )

    parser.add_argument("--data-dir", help="Directory holding the space files (default: DATA_DIR or ./output)")
    parser.add_argument("-v", "--verbose", action="store_true", help="Verbose output")

    subparsers = parser.add_subparsers(dest="command", help="Command to execute")

    shorten_parser = subparsers.add_parser("shorten", help="Shorten a URL")
    shorten_parser.add_argument("url", help="URL to shorten")
    shorten_parser.add_argument("--custom-id", help="Custom short ID")
    shorten_parser.add_argument("--no-scrape", action="store_true", help="Do not scrape page metadata")

    get_parser = subparsers.add_parser("get", help="Show a short URL")
    get_parser.add_argument("space", help="Space label")
    get_parser.add_argument("short_id", help="Short ID")

    list_parser = subparsers.add_parser("list", help="List short URLs in a space")
    list_parser.add_argument("space", help="Space label")
    list_parser.add_argument("--page", type=int, default=1, help="Page number")
    list_parser.add_argument("--per-page", type=int, default=10, help="Records per page")

    delete_parser = subparsers.add_parser("delete", help="Delete a short URL")
    delete_parser.add_argument("space", help="Space label")
    delete_parser.add_argument("short_id", help="Short ID")

    stats_parser = subparsers.add_parser("stats", help="Show statistics for a space")
    stats_parser.add_argument("space", help="Space label")

    label_parser = subparsers.add_parser("label", help="Show the space label for a year")
    label_parser.add_argument("--year", type=int, help="Calendar year (default: current)")

    subparsers.add_parser("health", help="Check service health")

    return parser


async def run(args: argparse.Namespace, config: Config) -> int:
    """Execute a parsed command."""
    if args.command == "label":
        year = args.year or datetime.now(timezone.utc).year
        try:
            label = label_for_year(year, config.label_epoch_year)
        except ShortSpaceError as e:
            return _fail(str(e))
        print(json.dumps({"success": True, "year": year, "space": label}, indent=2))
        return 0

    if args.command == "shorten" and args.no_scrape:
        config = config.model_copy(update={"scrape_metadata": False})

    cli = ShortSpaceCLI(config, verbose=args.verbose)

    try:
        await cli.initialize()

        if args.command == "shorten":
            return await cli.shorten(args.url, args.custom_id)
        elif args.command == "get":
            return await cli.get(args.space, args.short_id)
        elif args.command == "list":
            return await cli.list_urls(args.space, args.page, args.per_page)
        elif args.command == "delete":
            return await cli.delete(args.space, args.short_id)
        elif args.command == "stats":
            return await cli.stats(args.space)
        elif args.command == "health":
            return await cli.health()
        return 1

    finally:
        await cli.cleanup()


def main(argv=None) -> int:
    """Console script entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 1

    config = Config()
    if args.data_dir:
        config = config.model_copy(update={"data_dir": args.data_dir})

    return asyncio.run(run(args, config))


if __name__ == "__main__":
    sys.exit(main())
