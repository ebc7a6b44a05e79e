#!/usr/bin/env python3
"""
Command line interface for feedcore.

Commands:
    feedcore parse FILE --url URL [--json]
    feedcore dates VALUE...
    feedcore schedule --average SECONDS [--date ISO] [--not-viewed]
"""

import argparse
import json
import logging
import sys
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import List, Optional

from .config import Config, load_config, setup_logging
from .dates import DateResolver
from .exceptions import DateParseError, FeedCoreError
from .failures import LoggingFailureSink
from .icons import FaviconResolver, NullIconResolver, RequestsFetcher
from .models.feed import Feed
from .parser import FeedParser
from .scheduler import PollScheduler

logger = logging.getLogger(__name__)


class CLIRouter:
    """Builds the argument parser and dispatches to command handlers."""

    def __init__(self, config: Config):
        self.config = config
        self.parser = self._create_parser()

    def _create_parser(self) -> argparse.ArgumentParser:
        common = argparse.ArgumentParser(add_help=False)
        common.add_argument('--verbose', action='store_true', help='Verbose logging')

        parser = argparse.ArgumentParser(
            prog='feedcore',
            description="Feed decoding, normalization and poll scheduling",
            formatter_class=argparse.RawDescriptionHelpFormatter,
            epilog=self._get_examples_text()
        )
        subparsers = parser.add_subparsers(dest='command', metavar='{parse,dates,schedule}')

        parse_parser = subparsers.add_parser('parse', parents=[common], help='Decode and normalize a feed document')
        parse_parser.add_argument('file', help='Path to the feed document')
        parse_parser.add_argument('--url', required=True, help='Source URL of the feed')
        parse_parser.add_argument('--json', action='store_true', help='Print feed and stories as JSON')
        parse_parser.add_argument('--fetch-icon', action='store_true', help='Look up the feed favicon over HTTP')

        dates_parser = subparsers.add_parser('dates', parents=[common], help='Resolve raw date strings')
        dates_parser.add_argument('values', nargs='+', help='Date strings as found in feeds')

        schedule_parser = subparsers.add_parser('schedule', parents=[common], help='Compute the next poll time')
        schedule_parser.add_argument('--average', type=float, required=True, help='Average update interval in seconds')
        schedule_parser.add_argument('--date', help='Last content timestamp (ISO 8601, UTC if no offset)')
        schedule_parser.add_argument('--not-viewed', action='store_true', help='Feed has no active readers')

        return parser

    def _get_examples_text(self) -> str:
        return """
Examples:
  feedcore parse feed.xml --url https://example.com/feed --json
  feedcore dates "Mon, 02 Jan 2006 15:04:05 -0700" "2006-01-02T15:04:05Z"
  feedcore schedule --average 7200 --date 2024-05-01T12:00:00
"""

    def route_command(self, args: Optional[List[str]] = None) -> int:
        """
        Parse arguments and run the selected command.

        Returns:
            Exit code
        """
        try:
            parsed_args = self.parser.parse_args(args)
        except SystemExit as e:
            return e.code if e.code is not None else 0

        if not parsed_args.command:
            self.parser.print_help()
            return 1

        setup_logging(self.config.log_level, parsed_args.verbose or self.config.verbose_logging)
        handler = getattr(self, f"_cmd_{parsed_args.command}")
        try:
            return handler(parsed_args)
        except FeedCoreError as e:
            logger.error(f"{parsed_args.command} failed: {e.message}")
            print(f"Error: {e.message}", file=sys.stderr)
            return 1

    def _cmd_parse(self, args: argparse.Namespace) -> int:
        data = Path(args.file).read_bytes()
        if args.fetch_icon:
            icon_resolver = FaviconResolver(RequestsFetcher(self.config.fetch))
        else:
            icon_resolver = NullIconResolver()

        parser = FeedParser(config=self.config, icon_resolver=icon_resolver, failure_sink=LoggingFailureSink())
        feed, stories = parser.parse(args.url, data)

        if args.json:
            output = {
                'feed': feed.to_dict(),
                'stories': [story.to_dict() for story in stories],
            }
            print(json.dumps(output, indent=2, ensure_ascii=False))
            return 0

        print(f"{feed.title or '(untitled)'} <{feed.link}>")
        if feed.date:
            print(f"Last content: {feed.date.isoformat()}")
        print(f"{len(stories)} stories")
        for story in stories:
            print(f"  - {story.title} ({story.link})")
        return 0

    def _cmd_dates(self, args: argparse.Namespace) -> int:
        resolver = DateResolver(failure_sink=LoggingFailureSink(), config=self.config.dates)
        exit_code = 0
        for value in args.values:
            try:
                print(f"{value} -> {resolver.resolve(value).isoformat()}")
            except DateParseError:
                print(f"{value} -> unparsed")
                exit_code = 1
        return exit_code

    def _cmd_schedule(self, args: argparse.Namespace) -> int:
        feed = Feed(url='', average=timedelta(seconds=args.average), not_viewed=args.not_viewed)
        if args.date:
            try:
                date = datetime.fromisoformat(args.date)
            except ValueError:
                print(f"Error: invalid --date {args.date!r}", file=sys.stderr)
                return 1
            if date.tzinfo is None:
                date = date.replace(tzinfo=timezone.utc)
            feed.date = date.astimezone(timezone.utc)

        next_update = PollScheduler(self.config.scheduler).schedule_next_update(feed)
        print(next_update.isoformat())
        return 0


def main(args: Optional[List[str]] = None) -> int:
    """Console entry point."""
    try:
        config = load_config()
    except FeedCoreError as e:
        print(f"Error: {e.message}", file=sys.stderr)
        return 1
    return CLIRouter(config).route_command(args)


if __name__ == '__main__':
    sys.exit(main())
