#!/usr/bin/env python3
"""
Sampled record of a date string no catalog pattern could read.
"""

from dataclasses import dataclass, asdict
from typing import Dict, Any


@dataclass(frozen=True)
class DateFormatFailure:
    """
    An unmatched date string, kept for offline catalog improvement.

    ``bucket_id`` is drawn uniformly from a fixed range, so a store keyed by
    it holds a bounded number of samples no matter how many failures occur.
    """
    bucket_id: int
    feed_url: str
    value: str

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)
