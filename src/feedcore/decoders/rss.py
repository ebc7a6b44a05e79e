#!/usr/bin/env python3
"""
RSS 0.9x/2.0 decoder.
"""

import logging
from typing import List, Tuple

from ..models.feed import Feed, Story
from .base import (
    CONTENT_NS, DC_NS, MEDIA_NS, NO_NS, FeedDecoder, find_child, local_name, markup_of, text_of
)

logger = logging.getLogger(__name__)

AUDIO_PREFIX = 'audio/'


def _plain(parent, name: str):
    # atom:link and friends share local names with RSS elements
    return find_child(parent, name, (NO_NS,))


class RSSDecoder(FeedDecoder):
    """Decodes ``<rss><channel>...</channel></rss>`` documents."""

    name = 'rss'
    expected_root = 'rss'

    def matches_root(self, root) -> bool:
        return local_name(root) == 'rss'

    def extract(self, root, feed_url: str) -> Tuple[Feed, List[Story]]:
        channel = _plain(root, 'channel')
        feed = Feed(url=feed_url)
        feed.title = text_of(_plain(channel, 'title'))
        feed.link = text_of(_plain(channel, 'link'))
        feed.updated = self.parse_date(
            feed_url,
            text_of(_plain(channel, 'lastBuildDate')),
            text_of(_plain(channel, 'pubDate')),
        )
        if feed.updated is None:
            logger.warning(f"no rss feed date: {feed.link or feed_url}")

        stories = []
        if channel is not None:
            for item in channel.iterchildren('item'):
                stories.append(self._extract_item(item, feed_url))

        return feed, stories

    def _extract_item(self, item, feed_url: str) -> Story:
        title = text_of(_plain(item, 'title'))
        description = markup_of(_plain(item, 'description'))
        content = markup_of(find_child(item, 'encoded', (CONTENT_NS,)))

        story = Story(
            link=text_of(_plain(item, 'link')),
            author=text_of(_plain(item, 'author')),
        )

        # an item may consist of nothing but a description
        story.title = title or description
        if content:
            story.content = content
        elif story.title and description:
            story.content = description

        guid = _plain(item, 'guid')
        if guid is not None:
            story.id = text_of(guid)

        enclosure = _plain(item, 'enclosure')
        media = find_child(item, 'content', (MEDIA_NS,))
        if enclosure is not None and enclosure.get('type', '').startswith(AUDIO_PREFIX):
            story.media_content = enclosure.get('url', '')
        elif media is not None and media.get('type', '').startswith(AUDIO_PREFIX):
            story.media_content = media.get('url', '')

        date = self.parse_date(
            feed_url,
            text_of(_plain(item, 'pubDate')),
            text_of(find_child(item, 'date', (DC_NS,))),
            text_of(find_child(item, 'published')),
        )
        story.published = date
        story.updated = date

        return story
