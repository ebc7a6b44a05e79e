#!/usr/bin/env python3
"""
Syndication format decoders.

Each decoder reads one format; ``FormatDecoder`` chains them in priority order.
"""

from .base import FeedDecoder, UnmarshalError
from .atom import AtomDecoder
from .rss import RSSDecoder
from .rdf import RDFDecoder
from .registry import FormatDecoder, default_decoders

__all__ = [
    'FeedDecoder',
    'UnmarshalError',
    'AtomDecoder',
    'RSSDecoder',
    'RDFDecoder',
    'FormatDecoder',
    'default_decoders',
]
