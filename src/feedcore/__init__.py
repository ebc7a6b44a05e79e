"""
feedcore - tolerant syndication feed parsing and adaptive poll scheduling.
"""

from .config import Config, load_config
from .exceptions import (
    FeedCoreError, FeedDecodeError, DateParseError, StoryValidationError,
    ResourceLimitError, IconFetchError, ConfigurationError
)
from .models import Feed, Story, DecodedLink, DateFormatFailure
from .parser import FeedParser, parse_feed
from .scheduler import PollScheduler, FAR_FUTURE

__version__ = "1.0.0"
