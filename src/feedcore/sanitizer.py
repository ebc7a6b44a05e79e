#!/usr/bin/env python3
"""
Content sanitization for story bodies.

The normalizer only depends on the ``Sanitizer`` protocol. ``HTMLSanitizer``
is the default implementation: an allow-list cleaner built on BeautifulSoup
that drops active content, resolves relative media against the story link,
and produces the plain text used for the story summary.
"""

import logging
import re
from typing import Protocol, Tuple
from urllib.parse import urlsplit

from bs4 import BeautifulSoup

from .links import resolve

logger = logging.getLogger(__name__)


class Sanitizer(Protocol):
    """Content safety and summarization."""

    def sanitize(self, content: str, base_url: str) -> Tuple[str, str]:
        """Return (clean content, plain text to build a summary from)."""
        ...

    def snip(self, text: str, max_length: int) -> str:
        ...

    def strip_tags(self, text: str) -> str:
        ...


class HTMLSanitizer:
    """Allow-list HTML sanitizer."""

    # Elements removed together with everything inside them
    REMOVED_TAGS = [
        'script', 'style', 'iframe', 'frame', 'frameset', 'object', 'embed',
        'applet', 'form', 'input', 'button', 'select', 'textarea', 'meta',
        'link', 'base', 'noscript', 'title', 'head',
    ]

    ALLOWED_TAGS = {
        'a', 'abbr', 'b', 'blockquote', 'br', 'caption', 'cite', 'code', 'dd',
        'del', 'div', 'dl', 'dt', 'em', 'figcaption', 'figure', 'h1', 'h2',
        'h3', 'h4', 'h5', 'h6', 'hr', 'i', 'img', 'ins', 'kbd', 'li', 'ol',
        'p', 'pre', 'q', 's', 'small', 'span', 'strong', 'sub', 'sup',
        'table', 'tbody', 'td', 'tfoot', 'th', 'thead', 'tr', 'u', 'ul',
        'audio', 'video', 'source',
    }

    ALLOWED_ATTRS = {
        'href', 'src', 'alt', 'title', 'width', 'height', 'colspan',
        'rowspan', 'poster', 'cite', 'controls', 'type',
    }

    URL_ATTRS = {'href', 'src', 'poster', 'cite'}

    ALLOWED_SCHEMES = {'', 'http', 'https', 'mailto'}

    _TAG_PATTERN = re.compile(r'<[^>]*>')
    _WHITESPACE = re.compile(r'\s+')

    def sanitize(self, content: str, base_url: str) -> Tuple[str, str]:
        """
        Clean ``content`` for display.

        Args:
            content: Raw story HTML
            base_url: Story link; relative media URLs resolve against it

        Returns:
            Tuple of (clean HTML, plain text)
        """
        if not content:
            return '', ''

        soup = BeautifulSoup(content, 'html.parser')

        tag = soup.find(self.REMOVED_TAGS)
        while tag is not None:
            tag.decompose()
            tag = soup.find(self.REMOVED_TAGS)

        for tag in soup.find_all(True):
            if tag.name not in self.ALLOWED_TAGS:
                tag.unwrap()
                continue
            for attr in list(tag.attrs):
                if attr not in self.ALLOWED_ATTRS:
                    del tag[attr]
                elif attr in self.URL_ATTRS:
                    url = self._clean_url(tag[attr], base_url)
                    if url:
                        tag[attr] = url
                    else:
                        del tag[attr]
            if tag.name == 'a' and tag.get('href'):
                tag['rel'] = 'nofollow'

        return str(soup), soup.get_text(' ', strip=True)

    def _clean_url(self, value, base_url: str) -> str:
        if isinstance(value, list):
            value = ' '.join(value)
        value = value.strip()
        resolved, ok = resolve(base_url, value)
        if not ok:
            return ''
        scheme = urlsplit(resolved).scheme.lower()
        if scheme not in self.ALLOWED_SCHEMES:
            logger.debug(f"Dropped URL with scheme {scheme!r}")
            return ''
        return resolved

    def snip(self, text: str, max_length: int) -> str:
        """Collapse whitespace and cut ``text`` at a word boundary, adding '...'."""
        text = self._WHITESPACE.sub(' ', text or '').strip()
        if len(text) <= max_length:
            return text
        cut = text[:max_length - 3]
        if ' ' in cut:
            cut = cut.rsplit(' ', 1)[0]
        return cut.rstrip() + '...'

    def strip_tags(self, text: str) -> str:
        """Remove markup, leaving character references for the caller to unescape."""
        return self._TAG_PATTERN.sub('', text or '')
