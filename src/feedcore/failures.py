#!/usr/bin/env python3
"""
Sinks for date strings the catalog could not read.

Persistence of samples belongs to the caller; these sinks cover tests,
command-line use and logging-only deployments.
"""

import logging
import threading
from typing import Dict, List, Protocol

from .models.date_failure import DateFormatFailure

logger = logging.getLogger(__name__)


class FailureSink(Protocol):
    """Receives date strings no pattern could read. Fire and forget."""

    def record(self, failure: DateFormatFailure) -> None:
        ...


class InMemoryFailureSink:
    """
    Thread-safe sink keyed by bucket id.

    A later failure in the same bucket replaces the earlier one, so the sink
    never holds more entries than there are buckets.
    """

    def __init__(self):
        self._failures: Dict[int, DateFormatFailure] = {}
        self._lock = threading.Lock()

    def record(self, failure: DateFormatFailure) -> None:
        with self._lock:
            self._failures[failure.bucket_id] = failure

    def failures(self) -> List[DateFormatFailure]:
        """Snapshot of stored samples ordered by bucket id."""
        with self._lock:
            return [self._failures[k] for k in sorted(self._failures)]

    def __len__(self):
        with self._lock:
            return len(self._failures)


class LoggingFailureSink:
    """Writes each sample to the log at WARNING level."""

    def record(self, failure: DateFormatFailure) -> None:
        logger.warning(
            f"Unknown date format (bucket {failure.bucket_id}) in {failure.feed_url}: {failure.value!r}"
        )
