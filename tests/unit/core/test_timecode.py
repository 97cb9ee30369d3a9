"""Tests for timestamp formatting and parsing."""

import pytest

from subtitler.core.timecode import format_clock, format_short, format_timestamp, parse_time


@pytest.mark.unit
class TestFormat:
    @pytest.mark.parametrize(
        ("seconds", "expected"),
        [
            (0.0, "00:00:00,000"),
            (1.5, "00:00:01,500"),
            (61.001, "00:01:01,001"),
            (3661.999, "01:01:01,999"),
            (1.0009, "00:00:01,000"),
            (360000.0, "100:00:00,000"),
        ],
    )
    def test_format_timestamp(self, seconds: float, expected: str) -> None:
        assert format_timestamp(seconds) == expected

    def test_negative_clamped_to_zero(self) -> None:
        assert format_timestamp(-4.2) == "00:00:00,000"

    def test_format_clock_uses_dot(self) -> None:
        assert format_clock(75.25) == "00:01:15.250"

    def test_vtt_separator(self) -> None:
        assert format_timestamp(2.5, ".") == "00:00:02.500"

    @pytest.mark.parametrize(
        ("seconds", "expected"),
        [
            (0.0, "0:00.00"),
            (5.5, "0:05.50"),
            (65.25, "1:05.25"),
            (600.0, "10:00.00"),
            (59.996, "1:00.00"),
            (119.994, "1:59.99"),
        ],
    )
    def test_format_short(self, seconds: float, expected: str) -> None:
        assert format_short(seconds) == expected


@pytest.mark.unit
class TestParse:
    @pytest.mark.parametrize(
        ("text", "expected"),
        [
            ("00:00:01.500", 1.5),
            ("00:00:01,500", 1.5),
            ("01:02:03.004", 3723.004),
            ("0:0:7", 7.0),
            (" 00:01:00.000 ", 60.0),
        ],
    )
    def test_parse_valid(self, text: str, expected: float) -> None:
        assert parse_time(text) == pytest.approx(expected)

    @pytest.mark.parametrize(
        "text", ["", "garbage", "1:30", "00:00:00:01", "aa:bb:cc", "00:00:nan"]
    )
    def test_parse_invalid_is_zero(self, text: str) -> None:
        assert parse_time(text) == 0.0

    def test_bad_segment_counts_as_zero(self) -> None:
        assert parse_time("xx:01:02.5") == pytest.approx(62.5)

    @pytest.mark.parametrize("seconds", [0.0, 0.001, 1.5, 59.999, 61.25, 3599.5, 7322.123])
    def test_round_trip_within_a_millisecond(self, seconds: float) -> None:
        assert abs(parse_time(format_clock(seconds)) - seconds) < 0.001
        assert abs(parse_time(format_timestamp(seconds)) - seconds) < 0.001
