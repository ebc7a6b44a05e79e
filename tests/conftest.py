import random
import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import List, Tuple

import pytest

PROJECT_ROOT = Path(__file__).resolve().parents[1]
SRC_PATH = PROJECT_ROOT / "src"
if str(SRC_PATH) not in sys.path:
    sys.path.insert(0, str(SRC_PATH))

from feedcore.dates import DateResolver  # noqa: E402
from feedcore.failures import InMemoryFailureSink  # noqa: E402


FIXED_NOW = datetime(2024, 5, 1, 12, 0, 0, tzinfo=timezone.utc)


class FakeSanitizer:
    """Passes content through untouched and records each call."""

    def __init__(self) -> None:
        self.calls: List[Tuple[str, str]] = []

    def sanitize(self, content: str, base_url: str) -> Tuple[str, str]:
        self.calls.append((content, base_url))
        return content, content

    def snip(self, text: str, max_length: int) -> str:
        return text[:max_length]

    def strip_tags(self, text: str) -> str:
        return text.replace("<b>", "").replace("</b>", "")


class FakeIconResolver:
    def __init__(self, icon: str = "https://example.com/favicon.ico") -> None:
        self.icon = icon
        self.requested: List[str] = []

    def resolve(self, page_url: str) -> str:
        self.requested.append(page_url)
        return self.icon


class FailingIconResolver:
    def resolve(self, page_url: str) -> str:
        raise RuntimeError("icon service unavailable")


class FixedClock:
    def __init__(self, now: datetime = FIXED_NOW) -> None:
        self.now = now

    def __call__(self) -> datetime:
        return self.now


@pytest.fixture
def clock() -> FixedClock:
    return FixedClock()


@pytest.fixture
def rng() -> random.Random:
    return random.Random(1234)


@pytest.fixture
def failure_sink() -> InMemoryFailureSink:
    return InMemoryFailureSink()


@pytest.fixture
def date_resolver(failure_sink, rng) -> DateResolver:
    return DateResolver(failure_sink=failure_sink, rng=rng)


@pytest.fixture
def fake_sanitizer() -> FakeSanitizer:
    return FakeSanitizer()


@pytest.fixture
def fake_icons() -> FakeIconResolver:
    return FakeIconResolver()


@pytest.fixture
def failing_icons() -> FailingIconResolver:
    return FailingIconResolver()
