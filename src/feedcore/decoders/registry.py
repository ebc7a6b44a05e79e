#!/usr/bin/env python3
"""
Ordered chain of format decoders.

``FormatDecoder`` tries each strategy in turn and returns the first
successful extraction; later strategies are never tried.
"""

import logging
from typing import Dict, List, Optional, Sequence, Tuple

from ..charset import CharsetReaderProtocol
from ..dates import DateResolver
from ..exceptions import FeedDecodeError
from ..models.feed import Feed, Story
from .atom import AtomDecoder
from .base import FeedDecoder, UnmarshalError
from .rdf import RDFDecoder
from .rss import RSSDecoder

logger = logging.getLogger(__name__)


def default_decoders(dates: DateResolver,
                     charset_reader: Optional[CharsetReaderProtocol] = None) -> List[FeedDecoder]:
    """Atom, then RSS, then RDF."""
    return [
        AtomDecoder(dates, charset_reader),
        RSSDecoder(dates, charset_reader),
        RDFDecoder(dates, charset_reader),
    ]


class FormatDecoder:
    """Decodes a document with the first decoder that accepts it."""

    def __init__(self, decoders: Sequence[FeedDecoder]):
        if not decoders:
            raise ValueError("FormatDecoder needs at least one decoder")
        self.decoders = tuple(decoders)

    def decode(self, data: bytes, feed_url: str = "") -> Tuple[Feed, List[Story]]:
        """
        Decode raw document bytes into a draft Feed and its Stories.

        Args:
            data: Raw document bytes
            feed_url: Source URL of the document

        Returns:
            Tuple of (feed, stories) in document order

        Raises:
            FeedDecodeError: If no decoder could read the document
        """
        errors: Dict[str, str] = {}
        for decoder in self.decoders:
            try:
                root = decoder.unmarshal(data)
            except UnmarshalError as e:
                errors[decoder.name] = str(e)
                continue

            logger.debug(f"Decoded {feed_url} as {decoder.name}")
            return decoder.extract(root, feed_url)

        for name, error in errors.items():
            logger.warning(f"{name} parse error for {feed_url}: {error}")
        raise FeedDecodeError(feed_url, errors)
