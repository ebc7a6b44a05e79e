#!/usr/bin/env python3
"""
Date resolution against the catalog of known feed date formats.

``DatePattern`` compiles one catalog entry into an anchored regular
expression. Matching rules differ from ``time.strptime`` where feeds need it:

- numeric fields (``%m %d %H %I %M %S``) take one or two digits, ``%e`` is a
  space-padded day;
- month (``%b %B``) and weekday (``%a %A``) names match case-insensitively,
  and the weekday is not checked against the date;
- ``%p`` takes ``AM``/``PM`` in either case, with or without dots;
- ``%z`` takes ``Z``, ``+hh``, ``+hhmm``, ``+hh:mm`` and ``+hh:mm:ss``;
- ``%Z`` takes a zone abbreviation; RFC 822 zones map to their offsets and
  anything else is read as UTC. A numeric ``%z`` beats ``%Z``;
- seconds may carry a fraction even when the pattern has no ``%f``;
- two-digit years map to 1969-2068.

Every result is an aware datetime in UTC.
"""

import logging
import random
import re
from datetime import datetime
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

import pytz
from dateutil import tz

from .config import DateConfig
from .date_formats import DATE_FORMATS
from .exceptions import DateParseError
from .failures import FailureSink
from .models.date_failure import DateFormatFailure

logger = logging.getLogger(__name__)

MONTHS = ('january', 'february', 'march', 'april', 'may', 'june', 'july',
          'august', 'september', 'october', 'november', 'december')
WEEKDAYS = ('monday', 'tuesday', 'wednesday', 'thursday', 'friday', 'saturday', 'sunday')

# RFC 822 section 5.1 zones, in seconds east of UTC
ZONE_OFFSETS: Dict[str, int] = {
    'UT': 0, 'UTC': 0, 'GMT': 0, 'Z': 0,
    'EST': -5 * 3600, 'EDT': -4 * 3600,
    'CST': -6 * 3600, 'CDT': -5 * 3600,
    'MST': -7 * 3600, 'MDT': -6 * 3600,
    'PST': -8 * 3600, 'PDT': -7 * 3600,
}


def _names(names: Iterable[str]) -> str:
    return '(?i:' + '|'.join(names) + ')'


DIRECTIVES: Dict[str, str] = {
    'Y': r'(?P<Y>\d{4})',
    'y': r'(?P<y>\d{2})',
    'm': r'(?P<m>\d{1,2})',
    'd': r'(?P<d>\d{1,2})',
    'e': r'(?P<d>[ \d]?\d)',
    'H': r'(?P<H>\d{1,2})',
    'I': r'(?P<I>\d{1,2})',
    'M': r'(?P<M>\d{1,2})',
    'S': r'(?P<S>\d{1,2})(?:[.,](?P<frac>\d+))?',
    'f': r'(?P<f>\d+)',
    'p': r'(?P<p>(?i:[ap]\.?m\.?))',
    'b': r'(?P<b>' + _names(m[:3] for m in MONTHS) + ')',
    'B': r'(?P<B>' + _names(MONTHS) + ')',
    'a': _names(d[:3] for d in WEEKDAYS),
    'A': _names(WEEKDAYS),
    'z': r'(?P<z>Z|[+-]\d{2}(?::?\d{2}(?::?\d{2})?)?)',
    'Z': r'(?P<Z>[A-Z]{3,5}|UT|Z)',
}


def _compile(fmt: str) -> 're.Pattern':
    parts: List[str] = []
    i = 0
    while i < len(fmt):
        ch = fmt[i]
        if ch == '%' and i + 1 < len(fmt):
            directive = fmt[i + 1]
            if directive == '%':
                parts.append('%')
            elif directive in DIRECTIVES:
                parts.append(DIRECTIVES[directive])
            else:
                raise ValueError(f"unsupported directive %{directive} in {fmt!r}")
            i += 2
        else:
            parts.append(re.escape(ch))
            i += 1
    return re.compile(''.join(parts))


def _offset_seconds(raw: str) -> int:
    if raw == 'Z':
        return 0
    sign = -1 if raw[0] == '-' else 1
    digits = raw[1:].replace(':', '')
    hours = int(digits[0:2])
    minutes = int(digits[2:4] or 0)
    seconds = int(digits[4:6] or 0)
    return sign * (hours * 3600 + minutes * 60 + seconds)


def _tzinfo(offset: int):
    if offset == 0:
        return pytz.utc
    return tz.tzoffset(None, offset)


class DatePattern:
    """One compiled catalog entry."""

    def __init__(self, fmt: str):
        self.format = fmt
        self._regex = _compile(fmt)

    def parse(self, value: str) -> Optional[datetime]:
        """Return the UTC instant ``value`` denotes, or None if it does not match."""
        match = self._regex.fullmatch(value)
        if match is None:
            return None
        fields = match.groupdict()

        if fields.get('Y'):
            year = int(fields['Y'])
        elif fields.get('y'):
            year = int(fields['y'])
            year += 1900 if year >= 69 else 2000
        else:
            return None

        if fields.get('m'):
            month = int(fields['m'])
        elif fields.get('b'):
            month = MONTHS.index(next(m for m in MONTHS if m.startswith(fields['b'].lower()))) + 1
        elif fields.get('B'):
            month = MONTHS.index(fields['B'].lower()) + 1
        else:
            return None

        day = int(fields['d']) if fields.get('d') else 1

        if fields.get('I'):
            hour = int(fields['I'])
            if hour > 12:
                return None
            meridiem = (fields.get('p') or 'a')[0].lower()
            if meridiem == 'p' and hour < 12:
                hour += 12
            elif meridiem == 'a' and hour == 12:
                hour = 0
        else:
            hour = int(fields.get('H') or 0)

        minute = int(fields.get('M') or 0)
        second = int(fields.get('S') or 0)
        fraction = fields.get('f') or fields.get('frac') or ''
        microsecond = int(fraction[:6].ljust(6, '0')) if fraction else 0

        if fields.get('z'):
            offset = _offset_seconds(fields['z'])
        elif fields.get('Z'):
            offset = ZONE_OFFSETS.get(fields['Z'], 0)
        else:
            offset = 0

        try:
            parsed = datetime(year, month, day, hour, minute, second, microsecond,
                              tzinfo=_tzinfo(offset))
            return parsed.astimezone(pytz.utc)
        except (ValueError, OverflowError):
            return None

    def __repr__(self):
        return f"DatePattern({self.format!r})"


DEFAULT_PATTERNS: Tuple[DatePattern, ...] = tuple(DatePattern(f) for f in DATE_FORMATS)


class DateResolver:
    """
    Resolves raw feed date strings against an ordered pattern catalog.

    Unmatched strings are sampled into ``failure_sink`` under a random bucket
    id in ``[0, config.failure_buckets)``. ``rng`` should not be shared
    between threads unless the caller synchronizes it.
    """

    def __init__(self,
                 failure_sink: Optional[FailureSink] = None,
                 config: Optional[DateConfig] = None,
                 rng: Optional[random.Random] = None,
                 patterns: Sequence[DatePattern] = DEFAULT_PATTERNS):
        self.failure_sink = failure_sink
        self.config = config or DateConfig()
        self.rng = rng or random.Random()
        self.patterns = tuple(patterns)

    def parse(self, value: str) -> Optional[datetime]:
        """Try every pattern against one trimmed value, without recording failures."""
        value = value.strip()
        if not value:
            return None
        for pattern in self.patterns:
            parsed = pattern.parse(value)
            if parsed is not None:
                return parsed
        return None

    def resolve(self, *candidates: Optional[str], feed_url: str = "") -> datetime:
        """
        Return the instant of the first candidate that matches a catalog pattern.

        Args:
            *candidates: Raw date strings in order of preference
            feed_url: Feed the strings came from, kept with failure samples

        Returns:
            Aware UTC datetime

        Raises:
            DateParseError: If no candidate matched any pattern
        """
        for candidate in candidates:
            value = (candidate or '').strip()
            if not value:
                continue
            parsed = self.parse(value)
            if parsed is not None:
                return parsed
            self._record_failure(value, feed_url)

        raise DateParseError([c or '' for c in candidates], feed_url)

    def _record_failure(self, value: str, feed_url: str) -> None:
        logger.debug(f"Unknown date format for {feed_url}: {value!r}")
        if self.failure_sink is None:
            return
        failure = DateFormatFailure(
            bucket_id=self.rng.randrange(self.config.failure_buckets),
            feed_url=feed_url,
            value=value,
        )
        self.failure_sink.record(failure)
