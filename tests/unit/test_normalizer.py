import logging
from datetime import datetime, timedelta, timezone

import pytest

from feedcore.config import NormalizerConfig
from feedcore.exceptions import StoryValidationError
from feedcore.models import Feed, Story
from feedcore.normalizer import FeedNormalizer


@pytest.fixture
def normalizer(fake_sanitizer, fake_icons, clock):
    return FeedNormalizer(fake_sanitizer, fake_icons, clock=clock)


def make_feed(**kwargs):
    kwargs.setdefault("url", "http://example.com/feed.xml")
    kwargs.setdefault("link", "http://example.com/")
    return Feed(**kwargs)


class TestFeedFields:
    def test_checked_title_and_link(self, normalizer, clock):
        feed, _ = normalizer.normalize(make_feed(title="Tom &amp; Jerry", link="  /home  "), [])

        assert feed.checked == clock.now
        assert feed.title == "Tom & Jerry"
        assert feed.link == "http://example.com/home"

    def test_icon_resolved_from_feed_link(self, normalizer, fake_icons):
        feed, _ = normalizer.normalize(make_feed(), [])

        assert feed.image == "https://example.com/favicon.ico"
        assert fake_icons.requested == ["http://example.com/"]

    def test_icon_falls_back_to_source_url(self, fake_sanitizer, fake_icons, clock):
        normalizer = FeedNormalizer(fake_sanitizer, fake_icons, clock=clock)
        normalizer.normalize(Feed(url="http://example.com/feed.xml"), [])

        assert fake_icons.requested == ["http://example.com/feed.xml"]

    def test_icon_failure_is_not_fatal(self, fake_sanitizer, failing_icons, clock, caplog):
        caplog.set_level(logging.WARNING, logger="feedcore.normalizer")
        normalizer = FeedNormalizer(fake_sanitizer, failing_icons, clock=clock)

        feed, stories = normalizer.normalize(make_feed(), [Story(id="1", title="t")])

        assert feed.image == ""
        assert len(stories) == 1
        assert "Icon lookup failed" in caplog.text

    def test_feed_date_is_latest_story(self, normalizer, clock):
        older = clock.now - timedelta(days=2)
        newer = clock.now - timedelta(hours=3)
        stories = [
            Story(id="a", updated=older),
            Story(id="b", published=newer),
        ]

        feed, _ = normalizer.normalize(make_feed(), stories)

        assert feed.date == newer

    def test_feed_date_kept_for_empty_batch(self, normalizer):
        previous = datetime(2024, 1, 1, tzinfo=timezone.utc)
        feed, _ = normalizer.normalize(make_feed(date=previous), [])
        assert feed.date == previous


class TestStoryTimestamps:
    def test_missing_dates_default_to_checked(self, normalizer, clock):
        _, stories = normalizer.normalize(make_feed(), [Story(id="1")])
        story = stories[0]

        assert story.published == clock.now
        assert story.updated is None
        assert story.date == int(clock.now.timestamp())
        assert story.created == clock.now

    def test_updated_copied_into_published(self, normalizer, clock):
        updated = clock.now - timedelta(hours=1)
        _, stories = normalizer.normalize(make_feed(), [Story(id="1", updated=updated)])

        assert stories[0].published == updated
        assert stories[0].date == int(updated.timestamp())

    def test_future_published_is_clamped(self, normalizer, clock):
        _, stories = normalizer.normalize(
            make_feed(), [Story(id="1", published=clock.now + timedelta(days=1))]
        )
        assert stories[0].published == clock.now

    def test_date_prefers_updated(self, normalizer, clock):
        published = clock.now - timedelta(days=3)
        updated = clock.now - timedelta(days=1)
        _, stories = normalizer.normalize(make_feed(), [Story(id="1", published=published, updated=updated)])

        assert stories[0].published == published
        assert stories[0].date == int(updated.timestamp())


class TestStoryIdentity:
    def test_title_becomes_id(self, normalizer):
        _, stories = normalizer.normalize(make_feed(), [Story(title="Example")])
        assert stories[0].id == "Example"

    def test_link_becomes_id(self, normalizer):
        _, stories = normalizer.normalize(make_feed(), [Story(link=" http://example.com/p/1 ", title="T")])
        assert stories[0].id == "http://example.com/p/1"

    def test_id_becomes_link(self, normalizer):
        _, stories = normalizer.normalize(make_feed(), [Story(id="http://example.com/p/2")])
        assert stories[0].link == "http://example.com/p/2"

    def test_story_without_identity_fails_whole_feed(self, normalizer, caplog):
        caplog.set_level(logging.ERROR, logger="feedcore.normalizer")
        stories = [Story(id="ok", title="fine"), Story(content="orphan")]

        with pytest.raises(StoryValidationError) as exc_info:
            normalizer.normalize(make_feed(), stories)

        assert exc_info.value.context["feed_url"] == "http://example.com/feed.xml"
        assert "story has no id" in caplog.text


class TestStoryLinks:
    def test_relative_link_resolves_against_feed_link(self, normalizer, fake_sanitizer):
        feed = make_feed(link="http://example.com/blog/")
        _, stories = normalizer.normalize(feed, [Story(id="1", link="../img.png", content="<p>x</p>")])

        assert stories[0].link == "http://example.com/img.png"
        assert fake_sanitizer.calls == [("<p>x</p>", "http://example.com/img.png")]

    def test_missing_link_stays_empty_when_id_is_not_a_url(self, normalizer, fake_sanitizer):
        feed = make_feed(link="http://example.com/blog/")
        _, stories = normalizer.normalize(feed, [Story(id="\n   abc-1\n", title="A")])

        assert stories[0].link == ""
        assert fake_sanitizer.calls == [("", "")]

    def test_unparseable_link_is_cleared(self, normalizer, caplog):
        caplog.set_level(logging.WARNING, logger="feedcore.normalizer")
        _, stories = normalizer.normalize(make_feed(), [Story(id="1", link="http://[::1")])

        assert stories[0].link == ""
        assert "Unable to resolve story link" in caplog.text


class TestStoryLimits:
    def test_oversized_key_drops_only_that_story(self, normalizer, caplog):
        caplog.set_level(logging.WARNING, logger="feedcore.normalizer")
        stories = [Story(id="a"), Story(id="x" * 600), Story(id="b")]

        _, kept = normalizer.normalize(make_feed(), stories)

        assert [s.id for s in kept] == ["a", "b"]
        assert "story key too long" in caplog.text

    def test_configured_key_limit(self, fake_sanitizer, clock):
        normalizer = FeedNormalizer(fake_sanitizer, config=NormalizerConfig(max_key_length=40), clock=clock)
        feed = Feed(url="http://example.com/feed.xml")

        _, kept = normalizer.normalize(feed, [Story(id="short"), Story(id="a-much-longer-story-identifier")])

        assert [s.id for s in kept] == ["short"]


class TestStoryContent:
    def test_summary_is_snipped(self, fake_sanitizer, clock):
        normalizer = FeedNormalizer(fake_sanitizer, config=NormalizerConfig(snippet_length=5), clock=clock)
        _, stories = normalizer.normalize(make_feed(), [Story(id="1", content="abcdefghij")])

        assert stories[0].content == "abcdefghij"
        assert stories[0].summary == "abcde"

    def test_title_tags_stripped_and_unescaped(self, normalizer):
        _, stories = normalizer.normalize(make_feed(), [Story(id="1", title="<b>A &amp; B</b>")])
        assert stories[0].title == "A & B"

    def test_stories_keep_source_order_and_owner(self, normalizer):
        stories = [Story(id=str(i)) for i in range(5)]
        _, kept = normalizer.normalize(make_feed(), stories)

        assert [s.id for s in kept] == ["0", "1", "2", "3", "4"]
        assert all(s.feed_url == "http://example.com/feed.xml" for s in kept)
