#!/usr/bin/env python3
"""
Atom 1.0 decoder.
"""

import logging
from typing import List, Tuple

from ..links import parse_base, pick_best_link, resolve, resolve_base
from ..models.feed import DecodedLink, Feed, Story
from .base import FeedDecoder, XML_BASE, chardata, find_child, inner_xml, text_of

logger = logging.getLogger(__name__)

ATOM_NS = 'http://www.w3.org/2005/Atom'


def _atom(parent, name: str):
    return find_child(parent, name, (ATOM_NS,))


def _links(parent) -> List[DecodedLink]:
    return [
        DecodedLink(href=el.get('href', ''), rel=el.get('rel', ''), type=el.get('type', ''))
        for el in parent.iterchildren(f'{{{ATOM_NS}}}link')
    ]


def _text_construct(element) -> str:
    """Body of an Atom text construct: character data if non-blank, else inner markup."""
    if element is None:
        return ''
    body = chardata(element)
    if body.strip():
        return body
    return inner_xml(element)


class AtomDecoder(FeedDecoder):
    """Decodes ``<feed xmlns="http://www.w3.org/2005/Atom">`` documents."""

    name = 'atom'
    expected_root = 'feed'

    def matches_root(self, root) -> bool:
        return root.tag == f'{{{ATOM_NS}}}feed'

    def extract(self, root, feed_url: str) -> Tuple[Feed, List[Story]]:
        feed = Feed(url=feed_url)
        feed.title = text_of(_atom(root, 'title'))
        feed.updated = self.parse_date(feed_url, text_of(_atom(root, 'updated')))

        feed_base = parse_base(root.get(XML_BASE))
        best = pick_best_link(_links(root))
        if best is not None:
            feed.link, _ = resolve(feed_base, best.href)

        stories = []
        for entry in root.iterchildren(f'{{{ATOM_NS}}}entry'):
            stories.append(self._extract_entry(entry, feed_url, feed_base))

        return feed, stories

    def _extract_entry(self, entry, feed_url: str, feed_base: str) -> Story:
        entry_base = resolve_base(feed_base, entry.get(XML_BASE))
        story = Story(
            id=text_of(_atom(entry, 'id')),
            title=text_of(_atom(entry, 'title')),
        )
        story.updated = self.parse_date(feed_url, text_of(_atom(entry, 'updated')))
        story.published = self.parse_date(feed_url, text_of(_atom(entry, 'published')))

        best = pick_best_link(_links(entry))
        if best is not None:
            story.link, _ = resolve(entry_base, best.href)

        author = _atom(entry, 'author')
        if author is not None:
            story.author = text_of(_atom(author, 'name'))

        story.content = _text_construct(_atom(entry, 'content'))
        if not story.content:
            story.content = chardata(_atom(entry, 'summary'))

        return story
