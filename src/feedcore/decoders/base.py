#!/usr/bin/env python3
"""
Base class for syndication format decoders.

A decoder first unmarshals the document (well-formed XML whose root element
is the decoder's own) and then extracts a draft Feed and Stories following
its format's fallback rules. Decoders are interchangeable strategies tried in
order by ``FormatDecoder``.
"""

import html
import logging
from abc import ABC, abstractmethod
from datetime import datetime
from typing import Iterable, List, Optional, Tuple

from lxml import etree

from ..charset import CharsetReader, CharsetReaderProtocol
from ..dates import DateResolver
from ..exceptions import DateParseError
from ..models.feed import Feed, Story

logger = logging.getLogger(__name__)

XML_BASE = '{http://www.w3.org/XML/1998/namespace}base'
DC_NS = 'http://purl.org/dc/elements/1.1/'
CONTENT_NS = 'http://purl.org/rss/1.0/modules/content/'
MEDIA_NS = 'http://search.yahoo.com/mrss/'

# Sentinel for "element without a namespace"
NO_NS = ''


class UnmarshalError(Exception):
    """The document is not one this decoder can read."""
    pass


def local_name(element) -> str:
    if not isinstance(element.tag, str):
        return ''
    return etree.QName(element).localname


def namespace(element) -> str:
    if not isinstance(element.tag, str):
        return ''
    return etree.QName(element).namespace or NO_NS


def find_child(parent, name: str, namespaces: Optional[Iterable[str]] = None):
    """
    First child element called ``name``.

    Args:
        parent: Element to search (may be None)
        name: Local element name
        namespaces: Acceptable namespaces, ``NO_NS`` for none; None accepts any

    Returns:
        The matching element or None
    """
    if parent is None:
        return None
    allowed = None if namespaces is None else set(namespaces)
    for child in parent:
        if local_name(child) != name:
            continue
        if allowed is None or namespace(child) in allowed:
            return child
    return None


def text_of(element) -> str:
    """All character data inside ``element``, markup removed."""
    if element is None:
        return ''
    return ''.join(element.itertext())


def chardata(element) -> str:
    """Character data directly inside ``element``, not in its children."""
    if element is None:
        return ''
    parts = [element.text or '']
    parts.extend(child.tail or '' for child in element)
    return ''.join(parts)


def inner_xml(element) -> str:
    """Serialized content of ``element`` without its own start and end tags."""
    if element is None:
        return ''
    parts = [html.escape(element.text, quote=False)] if element.text else []
    for child in element:
        parts.append(etree.tostring(child, encoding='unicode', with_tail=False))
        if child.tail:
            parts.append(html.escape(child.tail, quote=False))
    return ''.join(parts)


def markup_of(element) -> str:
    """Text of an element that may hold escaped or unescaped HTML."""
    if element is None:
        return ''
    if len(element):
        return inner_xml(element)
    return element.text or ''


class FeedDecoder(ABC):
    """
    Abstract base class for format decoders.

    Subclasses set ``name`` and implement ``matches_root`` and ``extract``.
    """

    name = ''
    expected_root = ''

    def __init__(self, dates: DateResolver, charset_reader: Optional[CharsetReaderProtocol] = None):
        """
        Initialize decoder.

        Args:
            dates: Resolver for every date field
            charset_reader: Converts declared encodings to UTF-8
        """
        self.dates = dates
        self.charset_reader = charset_reader or CharsetReader()

    def decode(self, data: bytes, feed_url: str) -> Tuple[Feed, List[Story]]:
        """Unmarshal and extract in one step."""
        return self.extract(self.unmarshal(data), feed_url)

    def unmarshal(self, data: bytes):
        """
        Parse ``data`` into an element tree rooted at this decoder's element.

        Raises:
            UnmarshalError: If the document is malformed or of another format
        """
        try:
            converted = self.charset_reader.to_utf8(data)
        except LookupError as e:
            raise UnmarshalError(f"unsupported charset: {e}") from e

        parser = etree.XMLParser(resolve_entities=False, no_network=True, remove_comments=True)
        try:
            root = etree.fromstring(converted, parser)
        except etree.XMLSyntaxError as e:
            raise UnmarshalError(str(e)) from e

        if root is None:
            raise UnmarshalError("empty document")
        if not self.matches_root(root):
            raise UnmarshalError(f"expected element type <{self.expected_root}> but have <{local_name(root)}>")
        return root

    @abstractmethod
    def matches_root(self, root) -> bool:
        """Whether ``root`` is this format's document element."""
        pass

    @abstractmethod
    def extract(self, root, feed_url: str) -> Tuple[Feed, List[Story]]:
        """Build the draft Feed and Stories from an unmarshalled document."""
        pass

    def parse_date(self, feed_url: str, *values: str) -> Optional[datetime]:
        """Resolve the first parseable value, or None."""
        try:
            return self.dates.resolve(*values, feed_url=feed_url)
        except DateParseError:
            return None
