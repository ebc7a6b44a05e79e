#!/usr/bin/env python3
"""
Link resolution policy.

Relative links are resolved against nested base URIs: an entry-level base is
resolved against the document-level base and falls back to it when it cannot
be parsed. An empty or unparsable base leaves references unchanged.
Resolution never raises; failures leave the original link in place.
"""

import logging
import re
from typing import Iterable, Optional, Tuple
from urllib.parse import SplitResult, urljoin, urlsplit

from .models.feed import DecodedLink

logger = logging.getLogger(__name__)

_CONTROL_CHARS = re.compile(r'[\x00-\x1f\x7f]')


def split_url(raw: str) -> Optional[SplitResult]:
    """Parse a URL, returning None when it is malformed."""
    if _CONTROL_CHARS.search(raw):
        return None
    try:
        parts = urlsplit(raw)
        # port is validated lazily
        parts.port
    except ValueError:
        return None
    return parts


def parse_base(raw: Optional[str]) -> str:
    """Return ``raw`` if it is a usable base URI, else the empty base."""
    raw = (raw or '').strip()
    if not raw or split_url(raw) is None:
        return ''
    return raw


def resolve(base: str, ref: str) -> Tuple[str, bool]:
    """
    Resolve ``ref`` against ``base``.

    Returns:
        Tuple of (link, ok). On failure the original ``ref`` is returned with
        ok=False.
    """
    if split_url(ref) is None:
        logger.debug(f"unable to parse link: {ref!r}")
        return ref, False
    if not base:
        return ref, True
    try:
        resolved = urljoin(base, ref)
    except ValueError as e:
        logger.debug(f"unable to resolve {ref!r} against {base!r}: {e}")
        return ref, False
    if split_url(resolved) is None:
        return ref, False
    return resolved, True


def resolve_base(parent: str, raw: Optional[str]) -> str:
    """Resolve a nested base URI (e.g. an entry's xml:base) against its parent."""
    raw = (raw or '').strip()
    if not raw:
        return parent
    resolved, ok = resolve(parent, raw)
    return resolved if ok else parent


def link_score(link: DecodedLink) -> int:
    """Rank an Atom link candidate; higher is a better page link."""
    if link.rel == "hub":
        return 0
    if link.rel == "alternate" and link.type == "text/html":
        return 4
    if link.type == "text/html":
        return 3
    if link.rel != "self":
        return 2
    return 1


def pick_best_link(links: Iterable[DecodedLink]) -> Optional[DecodedLink]:
    """Return the highest scoring link; on ties the first one seen wins."""
    best = None
    best_score = -1
    for link in links:
        score = link_score(link)
        if score > best_score:
            best = link
            best_score = score
    return best
