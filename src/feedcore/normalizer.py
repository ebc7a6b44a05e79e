#!/usr/bin/env python3
"""
Feed normalization.

Turns the draft Feed and Stories produced by a format decoder into canonical
records: resolved links, reconciled timestamps, a guaranteed story id,
sanitized content with a bounded summary, and a feed icon.
"""

import html
import logging
from datetime import datetime, timezone
from typing import Callable, List, Optional, Tuple

from .config import NormalizerConfig
from .exceptions import ResourceLimitError, StoryValidationError
from .icons import IconResolver, NullIconResolver
from .links import parse_base, resolve, split_url
from .models.feed import Feed, Story
from .sanitizer import Sanitizer

logger = logging.getLogger(__name__)


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def story_key(feed_url: str, story_id: str) -> str:
    """Persistence key of a story: the owning feed's URL plus the story id."""
    return f"{feed_url}/{story_id}"


class FeedNormalizer:
    """Post-processes decoded feeds into their stored form."""

    def __init__(self,
                 sanitizer: Sanitizer,
                 icon_resolver: Optional[IconResolver] = None,
                 config: Optional[NormalizerConfig] = None,
                 clock: Optional[Callable[[], datetime]] = None):
        """
        Initialize normalizer.

        Args:
            sanitizer: Cleans story content and builds summaries
            icon_resolver: Finds the feed icon; no icon if omitted
            config: Key and snippet limits
            clock: Returns the current aware UTC time
        """
        self.sanitizer = sanitizer
        self.icon_resolver = icon_resolver or NullIconResolver()
        self.config = config or NormalizerConfig()
        self.clock = clock or utc_now

    def normalize(self, feed: Feed, stories: List[Story]) -> Tuple[Feed, List[Story]]:
        """
        Finalize a decoded feed and its stories.

        Args:
            feed: Draft feed from a decoder
            stories: Draft stories in document order

        Returns:
            Tuple of (feed, kept stories in document order)

        Raises:
            StoryValidationError: If any story has no id, link or title
        """
        feed.checked = self.clock()
        feed.link = feed.link.strip()
        feed.title = html.unescape(feed.title)

        link, ok = resolve(feed.url, feed.link)
        if ok:
            feed.link = link
        else:
            logger.warning(f"Unable to resolve feed link {feed.link!r} for {feed.url}")
        base = parse_base(feed.link)

        feed.image = self._resolve_icon(feed.link or feed.url)

        result = []
        for story in stories:
            if self._normalize_story(feed, story, base):
                result.append(story)

        latest = self._latest_story_date(result)
        if latest is not None:
            feed.date = latest

        return feed, result

    def _resolve_icon(self, page_url: str) -> str:
        try:
            return self.icon_resolver.resolve(page_url) or ""
        except Exception as e:
            logger.warning(f"Icon lookup failed for {page_url}: {e}")
            return ""

    def _normalize_story(self, feed: Feed, story: Story, base: str) -> bool:
        """Normalize one story in place; returns False if it must be dropped."""
        story.feed_url = feed.url
        story.created = feed.checked
        story.link = story.link.strip()

        if story.updated is not None and story.published is None:
            story.published = story.updated
        if story.published is None or story.published > feed.checked:
            story.published = feed.checked
        instant = story.updated or story.published
        story.date = int(instant.timestamp())

        if not story.id:
            story.id = story.link or story.title
        if not story.id:
            error = StoryValidationError(feed.url, repr(story))
            logger.error(f"{error.message}: {story!r}")
            raise error

        if not story.link and split_url(story.id) is not None:
            story.link = story.id

        if story.link:
            link, ok = resolve(base, story.link)
            if ok:
                story.link = link
            else:
                logger.warning(f"Unable to resolve story link {story.link!r} in {feed.url}")

        key = story_key(feed.url, story.id)
        key_size = len(key.encode('utf-8'))
        if key_size > self.config.max_key_length:
            error = ResourceLimitError(
                'story key', key_size, self.config.max_key_length,
                context={'feed_url': feed.url, 'story_id': story.id[:100]},
            )
            logger.warning(f"Skipping story: {error.message} ({feed.url})")
            return False

        if story.link and split_url(story.link) is None:
            story.link = ""

        content, summary_source = self.sanitizer.sanitize(story.content, story.link)
        story.content = content
        story.summary = self.sanitizer.snip(summary_source, self.config.snippet_length)
        story.title = html.unescape(self.sanitizer.strip_tags(story.title))
        return True

    @staticmethod
    def _latest_story_date(stories: List[Story]) -> Optional[datetime]:
        dates = [s.updated or s.published for s in stories if (s.updated or s.published)]
        return max(dates) if dates else None
