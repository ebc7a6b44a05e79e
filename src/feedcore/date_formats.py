#!/usr/bin/env python3
"""
Catalog of date formats observed in real-world feeds.

Patterns use strptime-style directives (see ``feedcore.dates`` for the exact
matching rules) and are tried in order; the first one that reads a string
wins. Several entries exist only because some publisher emitted that
malformed variant, so keep the list append-only and the order stable.
"""

from typing import Tuple

DATE_FORMATS: Tuple[str, ...] = (
    # numeric, month first
    "%m-%d-%Y",
    "%m/%d/%Y",
    "%m/%d/%Y - %H:%M",
    "%m/%d/%Y %H:%M:%S %Z",
    "%m/%d/%Y %I:%M %p",
    # numeric, day first
    "%d-%m-%Y",
    "%d/%m/%Y",
    "%d.%m.%Y %z",
    "%d/%m/%Y - %H:%M",
    "%d.%m.%Y %H:%M",
    "%d/%m/%Y %H:%M:%S",
    "%d.%m.%Y %H:%M:%S",
    "%d-%m-%Y %H:%M:%S %Z",
    # day, abbreviated month
    "%d %b %Y",
    "%d %b %Y %H:%M:%S",
    "%d %b %Y %H:%M:%S %z",
    "%d %b %Y %H:%M:%S %Z",
    "%d %b %Y %H:%M:%S UT",
    "%d %b %Y %H:%M %Z",
    # two-digit years
    "%y-%m-%d %H:%M",
    "%y/%m/%d %H:%M",
    "%m/%d/%Y %I:%M:%S %p",
    "%m/%d/%Y %I:%M:%S %p %Z",
    "%H:%M %d.%m.%Y %z",
    # ISO 8601 and near misses
    "%Y-%m-%d",
    "%Y/%m/%d",
    "%Y-%m-%d 00:00:00.0 %H:%M:%S.%f %z",
    "%Y-%m-%d %H:%M",
    "%Y-%m-%d %H:%M:%S %z",
    "%Y-%m-%d %H:%M:%S%z",
    "%Y-%m-%d %H:%M:%S %Z",
    "%Y-%m-%d %H:%M:%SZ",
    "%Y-%m-%dT%H:%M:%S",
    "%Y-%m-%dT%H:%M:%S:00",
    "%Y-%m-%dT%H:%M:%S %z",
    "%Y-%m-%dT%H:%M:%S%z",
    "%Y-%m-%dT%H:%M:%S:%z",
    "%Y-%m-%dT%H:%M:%SZ",
    "%Y-%m-%dT%H:%M%z",
    "%Y-%m-%dT%H:%MZ",
    "%Y-%m-%d %H:%M:%S",
    "%Y %B %d",
    # day, full month
    "%d %b %Y %H:%M:%S Z",
    "%d %B %Y",
    "%d %B %Y %H:%M:%S %z",
    "%d %B %Y %H:%M:%S %Z",
    # month name first
    "%b %d, %Y",
    "%b %d %Y %I:%M:%S%p",
    "%b %d, %Y %H:%M:%S %Z",
    "%b %d, %Y %I:%M:%S %p",
    "%b %d, %Y %I:%M:%S %p %Z",
    "%B %d, %Y",
    "%B %d, %Y %I:%M %p",
    "%B %d, %Y %H:%M",
    "%B %d, %Y %H:%M:%S %Z",
    "%B %d, %Y %H:%M:%S",
    "%B %d, %Y, %I:%M %p",
    # RFC 822 / 1123 and their many cousins
    "%a, %d %b %y %H:%M:%S %Z",
    "%a, %d %b %Y",
    "%a, %d %b %Y %H:%M:%S",
    "%a, %d %b %Y %H:%M:%S 00",
    "%a, %d %b %Y %H:%M:%S %z",
    "%a %d %b %Y %H:%M:%S %z",
    "%a, %d %b %Y %H:%M:%S -%z",
    "%a,%d %b %Y %H:%M:%S %z",
    "%a, %d %b %Y %H:%M:%S GMT%z",
    "%a , %d %b %Y %H:%M:%S %Z",
    "%a, %d %b %Y %H:%M:%S %Z",
    "%a, %d %b %Y %H:%M:%S%Z",
    "%a, %d %b %Y %H:%M:%S %Z %z",
    "%a, %d %b %Y %H:%M:%S %Z%z",
    "%a, %d %b %Y %H:%M:%S UT",
    "%a, %d %b %Y %H:%M:%S Z",
    "%a, %d %b %Y %H:%M %z",
    "%a, %d %b %Y %H:%M %Z",
    "%a,%d %b %Y %H:%M %Z",
    "%a, %d %b %Y %I:%M:%S %p %Z",
    "%a, %d %B %Y",
    "%a,%d %B %Y %H:%M:%S %Z",
    "%a, %Y-%m-%d %H:%M",
    "%a, %d %b %y %H:%M:%S %z",
    "%a,%d %b %Y",
    "%a, %d %b %Y %H:%M",
    "%a, %d %b %Y %H:%M:%S%z",
    "%a, %d %b %Y %H:%M:%S %z %Z",
    "mon,%d %b %Y %H:%M:%S %Z",
    "%a %d %b %Y %H:%M:%S %Z",
    "%a, %d %b %Y, %H:%M %z",
    "%a, %d, %b %Y %H:%M",
    "%a, %d %b %Y %H:%M:%S %z GMT",
    "%a, %d %b %Y %I:%M:%S %p %z",
    "%a, %d %B %Y %H:%M:%S %z",
    "%a, %d %B %Y %H:%M:%S %Z",
    "%a, %d %B %Y, %H:%M:%S %Z",
    "%a, %d %B %Y, %H:%M %z",
    "%a, %d %B %Y %H:%M %Z",
    # full weekday names
    "%A, %d %B %Y %H:%M:%S",
    "%A, %d %B %Y %H:%M:%S %z",
    "%A, %d %B %Y %H:%M:%S %Z",
    "%A, %d %b %Y %H:%M:%S %z",
    "%A, %d %b %Y %H:%M:%S %Z",
    "%A, %B %d, %Y",
    "%A, %B %d, %Y %I:%M %p",
    "%A, %B %d, %Y %H:%M:%S %Z",
    # weekday then month name
    "%a %b %d %Y %H:%M:%S %z",
    "%a, %b %d,%Y %H:%M:%S %Z",
    "%a %b %d, %Y %I:%M %p",
    "%a %b %d %H:%M:%S %Y %Z",
    "%a %b %d %H:%M %Y",
    "%a, %b %d %Y %H:%M:%S %z",
    "%a, %b %d %Y %H:%M:%S -700",
    "%a, %b %d, %Y %H:%M:%S %Z",
    "%a, %B %d, %Y %H:%M:%S %Z",
    "%a, %B %d, %Y, %H:%M:%S %Z",
    "%a, %B %d %Y %H:%M:%S %z",
    # C library and Unix tool layouts
    "%a %b %e %H:%M:%S %Y",
    "%d %b %y %H:%M %Z",
    "%d %b %y %H:%M %z",
    "%A, %d-%b-%y %H:%M:%S %Z",
    "%a %b %d %H:%M:%S %z %Y",
    "%a %b %e %H:%M:%S %Z %Y",
    "Updated %B %d, %Y",
)
