#!/usr/bin/env python3
"""
Data models for feed parsing and scheduling.

Contains the records produced by a parse and consumed by the scheduler.
"""

from .feed import Feed, Story, DecodedLink
from .date_failure import DateFormatFailure

__all__ = ['Feed', 'Story', 'DecodedLink', 'DateFormatFailure']
