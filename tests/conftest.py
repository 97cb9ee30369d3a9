"""Pytest configuration and shared fixtures."""

from collections.abc import Generator

import pytest

from subtitler.core import IntervalStore, PointerStateMachine, Viewport
from subtitler.utils.config import get_settings


@pytest.fixture(autouse=True)
def clear_settings_cache() -> Generator[None, None, None]:
    """Clear the get_settings LRU cache before and after each test."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def store() -> IntervalStore:
    """Empty interval store."""
    return IntervalStore()


@pytest.fixture
def viewport() -> Viewport:
    """A 0-10s view over a 60s timeline."""
    return Viewport(60.0, view_span=10.0)


@pytest.fixture
def machine(store: IntervalStore, viewport: Viewport) -> PointerStateMachine:
    """Pointer machine over the shared store and viewport."""
    return PointerStateMachine(store, viewport)


@pytest.fixture
def sample_srt_content() -> str:
    """Return sample SRT content for testing."""
    return """1
00:00:01,000 --> 00:00:04,000
Hello, this is a test.

2
00:00:05,000 --> 00:00:08,000
This is the second subtitle.

3
00:00:09,000 --> 00:00:12,000
And this is the third one.
"""
