"""Tests for reading-speed statistics."""

import pytest

from subtitler.core.interval import SubtitleInterval
from subtitler.core.reading import reading_stats, word_count, words_per_minute


@pytest.mark.unit
class TestWordCount:
    @pytest.mark.parametrize(
        ("text", "expected"),
        [("", 0), ("   ", 0), ("one", 1), ("two  words", 2), (" a\nb\tc ", 3)],
    )
    def test_word_count(self, text: str, expected: int) -> None:
        assert word_count(text) == expected


@pytest.mark.unit
class TestWordsPerMinute:
    def test_rounded_rate(self) -> None:
        assert words_per_minute("one two three", 2.0) == 90

    def test_half_rounds_up(self) -> None:
        assert words_per_minute("a", 120.0) == 1
        assert words_per_minute("a b c d e", 120.0) == 3

    def test_empty_text(self) -> None:
        assert words_per_minute("", 3.0) == 0

    def test_non_positive_duration(self) -> None:
        assert words_per_minute("hello", 0.0) == 0


@pytest.mark.unit
class TestReadingStats:
    def test_good_subtitle(self) -> None:
        stats = reading_stats(SubtitleInterval("a", 1.0, 4.0, "Nice and short"))
        assert stats.duration == 3.0
        assert stats.word_count == 3
        assert stats.words_per_minute == 60
        assert stats.duration_ok and stats.length_ok and stats.speed_ok
        assert stats.duration_hint == "good"

    def test_too_short_and_fast(self) -> None:
        stats = reading_stats(
            SubtitleInterval("a", 0.0, 1.0, "one two three four five six seven eight nine")
        )
        assert stats.duration_hint == "too short"
        assert not stats.length_ok
        assert stats.words_per_minute == 540
        assert not stats.speed_ok

    def test_too_long(self) -> None:
        stats = reading_stats(SubtitleInterval("a", 0.0, 7.5, "slow"))
        assert stats.duration_hint == "too long"
        assert not stats.duration_ok
