#!/usr/bin/env python3
"""
Feed and Story data models.

Both records are built fresh on every parse of a feed's bytes. Timestamps
are timezone-aware UTC datetimes; ``None`` means unset.
"""

from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Dict, Any, Optional


def _iso(value: Optional[datetime]) -> Optional[str]:
    return value.isoformat() if value else None


@dataclass(frozen=True)
class DecodedLink:
    """An Atom-style link candidate."""
    href: str = ""
    rel: str = ""
    type: str = ""


@dataclass
class Feed:
    """
    A syndication source identified by its URL.

    ``date`` is the last known content timestamp, ``updated`` the date the
    document itself declares. ``average`` and ``next_update`` belong to the
    poll scheduler.
    """
    url: str
    title: str = ""
    link: str = ""
    updated: Optional[datetime] = None
    date: Optional[datetime] = None
    checked: Optional[datetime] = None
    average: timedelta = timedelta(0)
    next_update: Optional[datetime] = None
    image: str = ""
    not_viewed: bool = False

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            'url': self.url,
            'title': self.title,
            'link': self.link,
            'updated': _iso(self.updated),
            'date': _iso(self.date),
            'checked': _iso(self.checked),
            'average': self.average.total_seconds(),
            'next_update': _iso(self.next_update),
            'image': self.image,
            'not_viewed': self.not_viewed,
        }


@dataclass
class Story:
    """
    A single entry of a feed.

    ``date`` is epoch seconds used for ordering: updated when set, else
    published. ``feed_url`` references the owning Feed.
    """
    id: str = ""
    title: str = ""
    link: str = ""
    author: str = ""
    published: Optional[datetime] = None
    updated: Optional[datetime] = None
    date: int = 0
    content: str = ""
    summary: str = ""
    media_content: str = ""
    created: Optional[datetime] = None
    feed_url: str = ""

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            'id': self.id,
            'title': self.title,
            'link': self.link,
            'author': self.author,
            'published': _iso(self.published),
            'updated': _iso(self.updated),
            'date': self.date,
            'content': self.content,
            'summary': self.summary,
            'media_content': self.media_content,
            'created': _iso(self.created),
            'feed_url': self.feed_url,
        }

    def __repr__(self):
        return f"Story(id='{self.id[:50]}', title='{self.title[:50]}', link='{self.link[:80]}')"
