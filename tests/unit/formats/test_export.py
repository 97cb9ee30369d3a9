"""Unit tests for export serializers and dispatch."""

import pytest

from subtitler.core.interval import SubtitleInterval
from subtitler.formats.export import (
    EmptyExportError,
    ExportFormat,
    export_filename,
    export_subtitles,
)


@pytest.fixture
def intervals() -> list[SubtitleInterval]:
    """Two intervals out of order plus one without text."""
    return [
        SubtitleInterval("b", 1.0, 2.5, "Hi"),
        SubtitleInterval("c", 3.0, 4.0, "   "),
        SubtitleInterval("a", 0.0, 1.0, "Hello"),
    ]


@pytest.mark.unit
class TestExportSubtitles:
    """Test cases for each export format."""

    def test_srt_is_deterministic(self, intervals):
        """Test that SRT output does not depend on input order."""
        first = export_subtitles(intervals, ExportFormat.SRT)
        second = export_subtitles(list(reversed(intervals)), ExportFormat.SRT)

        assert first == second
        assert first.startswith(
            "1\n00:00:00,000 --> 00:00:01,000\nHello\n\n"
            "2\n00:00:01,000 --> 00:00:02,500\nHi\n\n"
        )

    def test_vtt(self, intervals):
        """Test WebVTT header, separators and missing numbers."""
        result = export_subtitles(intervals[::2], ExportFormat.VTT)

        assert result == (
            "WEBVTT\n\n"
            "00:00:00.000 --> 00:00:01.000\nHello\n\n"
            "00:00:01.000 --> 00:00:02.500\nHi\n"
        )

    def test_plain_text_skips_blank(self, intervals):
        """Test plain text keeps one line per non-blank interval."""
        assert export_subtitles(intervals, ExportFormat.TXT) == "Hello\nHi"

    def test_text_with_timestamps(self, intervals):
        """Test bracketed timestamps precede each non-blank text."""
        result = export_subtitles(intervals, ExportFormat.TXT_TIME)

        assert result == (
            "[00:00:00,000 --> 00:00:01,000]\nHello\n\n"
            "[00:00:01,000 --> 00:00:02,500]\nHi"
        )

    def test_plain_text_keeps_surrounding_whitespace(self):
        """Test that kept text is written as stored."""
        result = export_subtitles(
            [SubtitleInterval("a", 0.0, 1.0, " padded ")], ExportFormat.TXT
        )

        assert result == " padded "

    def test_accepts_format_value(self, intervals):
        """Test dispatch by plain string value."""
        assert export_subtitles(intervals, "txt") == "Hello\nHi"

    def test_empty_raises(self):
        """Test that exporting nothing raises."""
        with pytest.raises(EmptyExportError, match="No subtitles to export"):
            export_subtitles([], ExportFormat.SRT)

    def test_unknown_format_raises(self, intervals):
        """Test that an unknown format is rejected."""
        with pytest.raises(ValueError):
            export_subtitles(intervals, "ass")


@pytest.mark.unit
class TestExportFormat:
    """Test cases for format metadata."""

    @pytest.mark.parametrize(
        ("export_format", "extension"),
        [
            (ExportFormat.SRT, "srt"),
            (ExportFormat.VTT, "vtt"),
            (ExportFormat.TXT, "txt"),
            (ExportFormat.TXT_TIME, "txt"),
        ],
    )
    def test_extension(self, export_format, extension):
        """Test file extension per format."""
        assert export_format.extension == extension

    def test_every_format_has_description(self):
        """Test that every format is described."""
        assert all(export_format.description for export_format in ExportFormat)


@pytest.mark.unit
class TestExportFilename:
    """Test cases for download naming."""

    @pytest.mark.parametrize(
        ("file_name", "language", "export_format", "expected"),
        [
            ("movie.mp4", "hi", ExportFormat.SRT, "movie-hi.srt"),
            ("movie.final.mp4", "en", ExportFormat.VTT, "movie.final-en.vtt"),
            ("noext", "hi", ExportFormat.TXT, "noext-hi.txt"),
            ("/videos/clip.webm", "ta", ExportFormat.TXT_TIME, "clip-ta.txt"),
            (None, "hi", ExportFormat.SRT, "subtitles-hi.srt"),
            ("", "en", ExportFormat.VTT, "subtitles-en.vtt"),
        ],
    )
    def test_filename(self, file_name, language, export_format, expected):
        """Test name built from media file name and language."""
        assert export_filename(file_name, language, export_format) == expected
