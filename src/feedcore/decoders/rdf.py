#!/usr/bin/env python3
"""
RDF Site Summary (RSS 0.90 / 1.0) decoder.
"""

import html
import logging
from typing import List, Tuple

from ..models.feed import Feed, Story
from .base import CONTENT_NS, DC_NS, FeedDecoder, find_child, local_name, markup_of, text_of

logger = logging.getLogger(__name__)

RDF_NS = 'http://www.w3.org/1999/02/22-rdf-syntax-ns#'


class RDFDecoder(FeedDecoder):
    """Decodes ``<rdf:RDF>`` documents with sibling channel and item elements."""

    name = 'rdf'
    expected_root = 'RDF'

    def matches_root(self, root) -> bool:
        return root.tag == f'{{{RDF_NS}}}RDF'

    def extract(self, root, feed_url: str) -> Tuple[Feed, List[Story]]:
        feed = Feed(url=feed_url)
        channel = find_child(root, 'channel')
        if channel is not None:
            feed.title = text_of(find_child(channel, 'title'))
            feed.link = text_of(find_child(channel, 'link'))
            feed.updated = self.parse_date(feed_url, text_of(find_child(channel, 'date', (DC_NS,))))

        stories = [
            self._extract_item(item, feed_url)
            for item in root
            if local_name(item) == 'item'
        ]
        return feed, stories

    def _extract_item(self, item, feed_url: str) -> Story:
        story = Story(
            id=item.get(f'{{{RDF_NS}}}about', ''),
            title=text_of(find_child(item, 'title')),
            link=text_of(find_child(item, 'link')),
            author=text_of(find_child(item, 'creator', (DC_NS,))),
        )

        description = markup_of(find_child(item, 'description'))
        content = markup_of(find_child(item, 'encoded', (CONTENT_NS,)))
        if description:
            story.content = html.unescape(description)
        elif content:
            story.content = html.unescape(content)

        date = self.parse_date(feed_url, text_of(find_child(item, 'date', (DC_NS,))))
        story.published = date
        story.updated = date

        return story
