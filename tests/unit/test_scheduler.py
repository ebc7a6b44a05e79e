import random
from datetime import timedelta

import pytest

from feedcore.config import SchedulerConfig
from feedcore.models import Feed
from feedcore.scheduler import FAR_FUTURE, PollScheduler


@pytest.fixture
def scheduler(rng, clock):
    return PollScheduler(rng=rng, clock=clock)


class TestUpdateAverage:
    def test_no_previous_check_is_noop(self, scheduler):
        feed = Feed(url="u", average=timedelta(hours=2))
        scheduler.update_average(feed, None, 3)
        assert feed.average == timedelta(hours=2)

    @pytest.mark.parametrize("count", [0, -1])
    def test_no_updates_is_noop(self, scheduler, clock, count):
        feed = Feed(url="u", average=timedelta(hours=2))
        scheduler.update_average(feed, clock.now - timedelta(hours=1), count)
        assert feed.average == timedelta(hours=2)

    def test_weighted_moving_average(self, scheduler, clock):
        feed = Feed(url="u", average=timedelta(hours=10))
        # 4 hours since the last check, 2 new stories: 2 hour interval
        scheduler.update_average(feed, clock.now - timedelta(hours=4), 2)
        assert feed.average == timedelta(hours=9, minutes=12)

    def test_first_average_from_zero(self, scheduler, clock):
        feed = Feed(url="u")
        scheduler.update_average(feed, clock.now - timedelta(hours=10), 1)
        assert feed.average == timedelta(hours=1)


class TestScheduleNextUpdate:
    def test_not_viewed_gets_sentinel(self, scheduler):
        feed = Feed(url="u", not_viewed=True, average=timedelta(hours=1))
        assert scheduler.schedule_next_update(feed) == FAR_FUTURE
        assert feed.next_update.year == 3000

    def test_no_content_date_uses_default_wait(self, scheduler, clock):
        feed = Feed(url="u", average=timedelta(hours=1))
        scheduler.schedule_next_update(feed)
        assert feed.next_update == clock.now + timedelta(hours=3)

    def test_pause_is_fraction_of_average(self, clock):
        config = SchedulerConfig(update_jitter=timedelta(0))
        scheduler = PollScheduler(config, random.Random(1), clock)
        feed = Feed(url="u", average=timedelta(hours=4), date=clock.now - timedelta(hours=1))

        scheduler.schedule_next_update(feed)

        assert feed.next_update == clock.now + timedelta(hours=2)

    def test_zero_average_uses_default_wait(self, clock):
        config = SchedulerConfig(update_jitter=timedelta(0))
        scheduler = PollScheduler(config, random.Random(1), clock)
        feed = Feed(url="u", date=clock.now - timedelta(hours=1))

        scheduler.schedule_next_update(feed)

        assert feed.next_update == clock.now + timedelta(hours=3)

    def test_stale_feed_backs_off(self, clock):
        config = SchedulerConfig(update_jitter=timedelta(0))
        scheduler = PollScheduler(config, random.Random(1), clock)
        # quiet for 100 hours with a 1 hour pause: wait a tenth of the silence
        feed = Feed(url="u", average=timedelta(hours=2), date=clock.now - timedelta(hours=100))

        scheduler.schedule_next_update(feed)

        assert feed.next_update == clock.now + timedelta(hours=10)

    def test_pause_is_clamped(self, clock):
        config = SchedulerConfig(update_jitter=timedelta(0))
        scheduler = PollScheduler(config, random.Random(1), clock)

        busy = Feed(url="u", average=timedelta(minutes=1), date=clock.now)
        scheduler.schedule_next_update(busy)
        assert busy.next_update == clock.now + timedelta(minutes=30)

        quiet = Feed(url="u", average=timedelta(days=30), date=clock.now - timedelta(days=400))
        scheduler.schedule_next_update(quiet)
        assert quiet.next_update == clock.now + timedelta(hours=24)

    @pytest.mark.parametrize("seed", range(25))
    def test_pause_stays_within_jittered_bounds(self, clock, seed):
        config = SchedulerConfig()
        scheduler = PollScheduler(config, random.Random(seed), clock)
        rng = random.Random(seed + 100)
        feed = Feed(
            url="u",
            average=timedelta(seconds=rng.uniform(0, 5 * 86400)),
            date=clock.now - timedelta(seconds=rng.uniform(0, 60 * 86400)),
        )

        pause = scheduler.schedule_next_update(feed) - clock.now

        assert config.update_min - config.update_jitter <= pause <= config.update_max + config.update_jitter

    def test_next_update_not_before_check(self, scheduler, clock):
        feed = Feed(url="u", average=timedelta(hours=1), date=clock.now, checked=clock.now)
        scheduler.schedule_next_update(feed)
        assert feed.next_update >= feed.checked

    def test_jitter_is_deterministic_for_seed(self, clock):
        feeds = [Feed(url="u", average=timedelta(hours=6), date=clock.now) for _ in range(2)]
        for feed in feeds:
            PollScheduler(rng=random.Random(42), clock=clock).schedule_next_update(feed)
        assert feeds[0].next_update == feeds[1].next_update


class TestNotViewed:
    def test_never_viewed(self, scheduler):
        assert scheduler.is_not_viewed(None)

    def test_recently_viewed(self, scheduler, clock):
        assert not scheduler.is_not_viewed(clock.now - timedelta(days=20))

    def test_stale_view(self, scheduler, clock):
        assert scheduler.is_not_viewed(clock.now - timedelta(days=22))


@pytest.mark.parametrize("seed", range(25))
def test_next_update_never_before_now_with_tight_config(clock, seed):
    config = SchedulerConfig(update_min=timedelta(minutes=1), update_jitter=timedelta(seconds=59))
    scheduler = PollScheduler(config, random.Random(seed), clock)
    feed = Feed(url="u", average=timedelta(seconds=1), date=clock.now)

    assert scheduler.schedule_next_update(feed) > clock.now
