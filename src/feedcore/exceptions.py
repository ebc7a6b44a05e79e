#!/usr/bin/env python3
"""
Exception hierarchy for feed decoding, normalization and scheduling.

Every error carries a human-readable message, a machine-readable error code
and a context dictionary so callers can log or serialize it uniformly.
"""

from typing import Optional, Dict, Any, List


class FeedCoreError(Exception):
    """Base exception for all feedcore errors."""

    def __init__(self, message: str, error_code: Optional[str] = None, context: Optional[Dict[str, Any]] = None):
        """
        Initialize base exception.

        Args:
            message: Human-readable error message
            error_code: Machine-readable error code
            context: Additional error context
        """
        super().__init__(message)
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.context = context or {}

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for logging/serialization."""
        return {
            'error_type': self.__class__.__name__,
            'error_code': self.error_code,
            'message': self.message,
            'context': self.context
        }


class FeedDecodeError(FeedCoreError):
    """No format decoder could read the document."""

    def __init__(self, feed_url: str, errors: Dict[str, str]):
        details = '; '.join(f"{name}: {error}" for name, error in errors.items())
        message = f"Could not parse feed data from {feed_url or '<unknown>'} ({details})"
        context = {
            'feed_url': feed_url,
            'errors': dict(errors)
        }
        super().__init__(message, context=context)

    @property
    def errors(self) -> Dict[str, str]:
        return self.context['errors']


class DateParseError(FeedCoreError):
    """None of the candidate strings matched a known date format."""

    def __init__(self, values: List[str], feed_url: str = ""):
        message = f"could not parse date: {', '.join(values)}"
        context = {
            'feed_url': feed_url,
            'values': list(values)
        }
        super().__init__(message, context=context)


class StoryValidationError(FeedCoreError):
    """A story has no id, link or title to identify it by."""

    def __init__(self, feed_url: str, story_repr: str):
        message = f"Bad item data in feed {feed_url}: story has no id"
        context = {
            'feed_url': feed_url,
            'story': story_repr
        }
        super().__init__(message, context=context)


class ResourceLimitError(FeedCoreError):
    """A derived value exceeds a storage limit."""

    def __init__(self, what: str, size: int, limit: int, context: Optional[Dict[str, Any]] = None):
        message = f"{what} too long: {size} > {limit}"
        ctx = {
            'what': what,
            'size': size,
            'limit': limit
        }
        ctx.update(context or {})
        super().__init__(message, context=ctx)


class IconFetchError(FeedCoreError):
    """Fetching or storing a feed icon failed."""

    def __init__(self, url: str, reason: str):
        message = f"Could not load icon {url}: {reason}"
        context = {
            'url': url,
            'reason': reason
        }
        super().__init__(message, context=context)


class ConfigurationError(FeedCoreError):
    """Configuration is invalid or missing."""

    def __init__(self, config_key: str, issue: str):
        message = f"Configuration error for {config_key}: {issue}"
        context = {
            'config_key': config_key,
            'issue': issue
        }
        super().__init__(message, context=context)
