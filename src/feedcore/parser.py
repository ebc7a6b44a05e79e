#!/usr/bin/env python3
"""
Feed Parser - entry point for turning raw feed bytes into records.

Wires the format decoders and the normalizer together with their
collaborators. A parser holds no per-feed state; one instance can serve
every feed, provided its collaborators can.
"""

import logging
import random
from datetime import datetime
from typing import Callable, List, Optional, Tuple

from .charset import CharsetReader, CharsetReaderProtocol
from .config import Config
from .dates import DateResolver
from .decoders import FormatDecoder, default_decoders
from .failures import FailureSink
from .icons import IconResolver
from .models.feed import Feed, Story
from .normalizer import FeedNormalizer
from .sanitizer import HTMLSanitizer, Sanitizer

logger = logging.getLogger(__name__)


class FeedParser:
    """Decodes and normalizes feed documents."""

    def __init__(self,
                 config: Optional[Config] = None,
                 sanitizer: Optional[Sanitizer] = None,
                 icon_resolver: Optional[IconResolver] = None,
                 failure_sink: Optional[FailureSink] = None,
                 charset_reader: Optional[CharsetReaderProtocol] = None,
                 rng: Optional[random.Random] = None,
                 clock: Optional[Callable[[], datetime]] = None):
        self.config = config or Config()
        self.dates = DateResolver(failure_sink=failure_sink, config=self.config.dates, rng=rng)
        self.decoder = FormatDecoder(default_decoders(self.dates, charset_reader or CharsetReader()))
        self.normalizer = FeedNormalizer(
            sanitizer=sanitizer or HTMLSanitizer(),
            icon_resolver=icon_resolver,
            config=self.config.normalizer,
            clock=clock,
        )

    def parse(self, url: str, data: bytes) -> Tuple[Feed, List[Story]]:
        """
        Parse a fetched feed document.

        Args:
            url: The feed's source URL
            data: Raw document bytes

        Returns:
            Tuple of (feed, stories in document order)

        Raises:
            FeedDecodeError: If no format could read the document
            StoryValidationError: If a story cannot be identified
        """
        logger.debug(f"Parsing {len(data)} bytes from {url}")
        feed, stories = self.decoder.decode(data, url)
        feed, stories = self.normalizer.normalize(feed, stories)
        logger.info(f"Parsed {len(stories)} stories from {url}")
        return feed, stories


def parse_feed(url: str, data: bytes, **kwargs) -> Tuple[Feed, List[Story]]:
    """Parse one document with a parser built from ``kwargs``."""
    return FeedParser(**kwargs).parse(url, data)
