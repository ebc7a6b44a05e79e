#!/usr/bin/env python3
"""
Feed icon resolution.

The normalizer asks an ``IconResolver`` for the icon of a feed's page.
``FaviconResolver`` looks for ``/favicon.ico`` on the page's host and
caches the answer per icon URL; storing the bytes somewhere public is left
to an optional ``store`` callable supplied by the caller.
"""

import logging
import threading
from dataclasses import dataclass
from typing import Callable, Dict, Optional, Protocol
from urllib.parse import urlunsplit

import requests

from .config import FetchConfig
from .exceptions import IconFetchError
from .links import split_url

logger = logging.getLogger(__name__)

FAVICON_PATH = '/favicon.ico'


@dataclass
class FetchResult:
    """Outcome of an HTTP GET."""
    status: int
    content_type: str = ""
    body: bytes = b""


class Fetcher(Protocol):
    def get(self, url: str) -> FetchResult:
        ...


class IconResolver(Protocol):
    def resolve(self, page_url: str) -> str:
        """Return an icon reference for ``page_url`` or the empty string."""
        ...


class NullIconResolver:
    """Resolver that never finds an icon."""

    def resolve(self, page_url: str) -> str:
        return ""


class RequestsFetcher:
    """Fetcher backed by a ``requests.Session``."""

    def __init__(self, config: Optional[FetchConfig] = None, session: Optional[requests.Session] = None):
        """
        Initialize fetcher.

        Args:
            config: Timeout and User-Agent settings
            session: Session to reuse; a new one is created if omitted
        """
        self.config = config or FetchConfig()
        self.session = session or requests.Session()
        self.session.headers.update({
            "User-Agent": self.config.user_agent,
            "Accept": "image/*,*/*;q=0.8",
        })

    def get(self, url: str) -> FetchResult:
        try:
            response = self.session.get(url, timeout=self.config.timeout)
        except requests.RequestException as e:
            raise IconFetchError(url, str(e)) from e
        return FetchResult(
            status=response.status_code,
            content_type=response.headers.get('Content-Type', ''),
            body=response.content or b'',
        )


def favicon_url(page_url: str) -> str:
    """``scheme://host/favicon.ico`` for the page, or '' if it has no host."""
    parts = split_url((page_url or '').strip())
    if parts is None or not parts.scheme or not parts.netloc:
        return ''
    return urlunsplit((parts.scheme, parts.netloc, FAVICON_PATH, '', ''))


def sniff_content_type(body: bytes) -> str:
    if body.startswith(b'\x89PNG\r\n\x1a\n'):
        return 'image/png'
    if body.startswith((b'GIF87a', b'GIF89a')):
        return 'image/gif'
    if body.startswith(b'\xff\xd8\xff'):
        return 'image/jpeg'
    if body.startswith(b'\x00\x00\x01\x00'):
        return 'image/x-icon'
    return 'application/octet-stream'


class FaviconResolver:
    """Resolves a page's ``/favicon.ico`` with a process-local cache."""

    def __init__(self,
                 fetcher: Optional[Fetcher] = None,
                 store: Optional[Callable[[str, str, bytes], str]] = None):
        """
        Initialize resolver.

        Args:
            fetcher: HTTP fetcher; defaults to ``RequestsFetcher``
            store: Optional callable ``(url, content_type, body) -> public_url``
        """
        self.fetcher = fetcher or RequestsFetcher()
        self.store = store
        self._cache: Dict[str, str] = {}
        self._lock = threading.Lock()

    def resolve(self, page_url: str) -> str:
        icon_url = favicon_url(page_url)
        if not icon_url:
            return ""

        with self._lock:
            if icon_url in self._cache:
                return self._cache[icon_url]

        try:
            image = self._fetch(icon_url)
        except IconFetchError as e:
            logger.debug(f"No icon for {page_url}: {e}")
            return ""

        with self._lock:
            self._cache[icon_url] = image
        return image

    def _fetch(self, icon_url: str) -> str:
        result = self.fetcher.get(icon_url)
        if result.status != 200:
            raise IconFetchError(icon_url, f"status {result.status}")
        if not result.body:
            raise IconFetchError(icon_url, "empty body")

        if self.store is None:
            return icon_url
        return self.store(icon_url, sniff_content_type(result.body), result.body)

    def clear(self) -> None:
        with self._lock:
            self._cache.clear()
