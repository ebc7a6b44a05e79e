import pytest

from feedcore.sanitizer import HTMLSanitizer


@pytest.fixture
def sanitizer():
    return HTMLSanitizer()


def test_scripts_and_handlers_are_removed(sanitizer):
    content, text = sanitizer.sanitize(
        '<p onclick="steal()">Hi<script>alert(1)</script></p><style>p{}</style>',
        "http://example.com/post",
    )
    assert "script" not in content
    assert "onclick" not in content
    assert "style" not in content
    assert text == "Hi"


def test_relative_media_resolves_against_story_link(sanitizer):
    content, _ = sanitizer.sanitize('<img src="../img.png" alt="x">', "http://a.com/blog/post")
    assert 'src="http://a.com/img.png"' in content


def test_javascript_urls_are_dropped(sanitizer):
    content, text = sanitizer.sanitize('<a href="javascript:alert(1)">click</a>', "http://a.com/")
    assert "javascript" not in content
    assert text == "click"


def test_links_get_nofollow(sanitizer):
    content, _ = sanitizer.sanitize('<a href="/x">x</a>', "http://a.com/")
    assert 'href="http://a.com/x"' in content
    assert 'rel="nofollow"' in content


def test_unknown_tags_are_unwrapped(sanitizer):
    content, text = sanitizer.sanitize("<custom><b>bold</b> text</custom>", "")
    assert "custom" not in content
    assert "<b>bold</b>" in content
    assert text == "bold text"


def test_empty_content(sanitizer):
    assert sanitizer.sanitize("", "http://a.com/") == ("", "")


def test_snip_keeps_short_text(sanitizer):
    assert sanitizer.snip("  short\n text ", 100) == "short text"


def test_snip_truncates_on_word_boundary(sanitizer):
    snipped = sanitizer.snip("one two three four five six", 15)
    assert snipped.endswith("...")
    assert len(snipped) <= 15
    assert snipped == "one two..."


def test_strip_tags_keeps_entities(sanitizer):
    assert sanitizer.strip_tags("<b>Tom &amp; Jerry</b>") == "Tom &amp; Jerry"
    assert sanitizer.strip_tags(None) == ""
