"""Pytest configuration and shared fixtures for integration tests."""

from dataclasses import dataclass

import pytest

from subtitler.session import EditorSession


@dataclass
class FakeMedia:
    """Stand-in for the media element: writable position, fixed duration."""

    current_time: float = 0.0
    duration: float = 60.0


# ---------------------------------------------------------------------------
# Session fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def media() -> FakeMedia:
    return FakeMedia()


@pytest.fixture
def editor(media: FakeMedia) -> EditorSession:
    """Editor bound to 60s of media; the track shows 0-15s."""
    return EditorSession(media=media, file_name="lecture.mp4")
