#!/usr/bin/env python3
"""
Poll Scheduler - decides when each feed should be fetched next.

Each feed keeps an exponentially smoothed average of the time between new
stories. The next poll happens after a fraction of that average, stretched
for feeds that have gone quiet, clamped to fixed bounds and jittered so
feeds parsed together do not come due together.
"""

import logging
import random
from datetime import datetime, timedelta, timezone
from typing import Callable, Optional

from .config import SchedulerConfig
from .models.feed import Feed

logger = logging.getLogger(__name__)

# Feeds nobody reads are parked here
FAR_FUTURE = datetime(3000, 1, 1, tzinfo=timezone.utc)


class PollScheduler:
    """Adaptive poll scheduling for feeds."""

    def __init__(self,
                 config: Optional[SchedulerConfig] = None,
                 rng: Optional[random.Random] = None,
                 clock: Optional[Callable[[], datetime]] = None):
        """
        Initialize scheduler.

        Args:
            config: Interval bounds, smoothing weight and jitter
            rng: Random source for jitter
            clock: Returns the current aware UTC time
        """
        self.config = config or SchedulerConfig()
        self.rng = rng or random.Random()
        self.clock = clock or (lambda: datetime.now(timezone.utc))

    def update_average(self, feed: Feed, previous_check: Optional[datetime], update_count: int) -> None:
        """
        Fold the interval since the previous check into ``feed.average``.

        Args:
            feed: Feed to update in place
            previous_check: When the feed was last checked, if ever
            update_count: Number of new or changed stories found this check
        """
        if previous_check is None or update_count < 1:
            return

        interval = (self.clock() - previous_check) / update_count
        weight = self.config.new_interval_weight
        feed.average = feed.average * (1 - weight) + interval * weight
        if feed.average < timedelta(0):
            feed.average = timedelta(0)

        logger.debug(f"Average for {feed.url}: {feed.average} (interval {interval})")

    def schedule_next_update(self, feed: Feed) -> datetime:
        """Set and return ``feed.next_update``."""
        now = self.clock()

        if feed.not_viewed:
            feed.next_update = FAR_FUTURE
            return feed.next_update

        if feed.date is None:
            feed.next_update = now + self.config.update_default
            return feed.next_update

        feed.next_update = now + self.next_pause(feed, now)
        logger.debug(f"Next update for {feed.url}: {feed.next_update.isoformat()}")
        return feed.next_update

    def next_pause(self, feed: Feed, now: datetime) -> timedelta:
        """Wait before the next poll of a viewed feed with a known content date."""
        cfg = self.config

        pause = feed.average * cfg.update_fraction
        if pause == timedelta(0):
            pause = cfg.update_default

        since = now - feed.date
        if since > pause * cfg.update_long_factor:
            pause = since / cfg.update_long_factor

        pause = max(cfg.update_min, min(pause, cfg.update_max))

        jitter = cfg.update_jitter * self.rng.random()
        if self.rng.random() < 0.5:
            pause += jitter
        else:
            pause -= jitter
        return pause

    def is_not_viewed(self, last_viewed: Optional[datetime]) -> bool:
        """True if the feed was never viewed or not within ``not_viewed_after``."""
        if last_viewed is None:
            return True
        return self.clock() - last_viewed > self.config.not_viewed_after
