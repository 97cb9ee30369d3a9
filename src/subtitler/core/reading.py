"""Reading-speed statistics shown next to the text editor."""

import math
import re
from dataclasses import dataclass

from subtitler.core.interval import SubtitleInterval

GOOD_DURATION_RANGE = (2.0, 6.0)
MAX_WORDS = 8
MAX_WORDS_PER_MINUTE = 180


@dataclass(frozen=True)
class ReadingStats:
    """Reading guidelines for one interval."""

    duration: float
    word_count: int
    words_per_minute: int

    @property
    def duration_ok(self) -> bool:
        low, high = GOOD_DURATION_RANGE
        return low <= self.duration <= high

    @property
    def duration_hint(self) -> str:
        """``"good"``, ``"too short"`` or ``"too long"``."""
        if self.duration_ok:
            return "good"
        return "too short" if self.duration < GOOD_DURATION_RANGE[0] else "too long"

    @property
    def length_ok(self) -> bool:
        return self.word_count <= MAX_WORDS

    @property
    def speed_ok(self) -> bool:
        return self.words_per_minute <= MAX_WORDS_PER_MINUTE


def word_count(text: str) -> int:
    """Count whitespace separated words."""
    return len([word for word in re.split(r"\s+", text) if word])


def words_per_minute(text: str, duration: float) -> int:
    """Reading speed of ``text`` shown for ``duration`` seconds.

    Returns 0 for empty text or a non-positive duration.
    """
    if not text or duration <= 0:
        return 0
    # Halves round up
    return math.floor(word_count(text) / (duration / 60) + 0.5)


def reading_stats(interval: SubtitleInterval) -> ReadingStats:
    """Compute reading statistics for an interval."""
    return ReadingStats(
        duration=interval.duration,
        word_count=word_count(interval.text),
        words_per_minute=words_per_minute(interval.text, interval.duration),
    )
