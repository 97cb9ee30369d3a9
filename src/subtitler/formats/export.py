"""Export dispatch and download file naming."""

import re
from collections.abc import Callable, Iterable, Sequence
from enum import StrEnum
from pathlib import PurePath

from subtitler.core.interval import SubtitleInterval
from subtitler.formats.srt import serialize_srt
from subtitler.formats.text import (
    serialize_plain_text,
    serialize_text_with_timestamps,
)
from subtitler.formats.vtt import serialize_vtt


class ExportFormat(StrEnum):
    """Download formats offered by the export panel."""

    SRT = "srt"
    VTT = "vtt"
    TXT = "txt"
    TXT_TIME = "txt-time"

    @property
    def extension(self) -> str:
        return "txt" if self is ExportFormat.TXT_TIME else self.value

    @property
    def description(self) -> str:
        return _DESCRIPTIONS[self]


_DESCRIPTIONS = {
    ExportFormat.SRT: "SubRip subtitle format",
    ExportFormat.VTT: "WebVTT subtitle format",
    ExportFormat.TXT: "Plain text without timestamps",
    ExportFormat.TXT_TIME: "Plain text with timestamps",
}

_SERIALIZERS: dict[ExportFormat, Callable[[Iterable[SubtitleInterval]], str]] = {
    ExportFormat.SRT: serialize_srt,
    ExportFormat.VTT: serialize_vtt,
    ExportFormat.TXT: serialize_plain_text,
    ExportFormat.TXT_TIME: serialize_text_with_timestamps,
}


class EmptyExportError(Exception):
    """Exception raised when there is nothing to export."""


def export_subtitles(
    intervals: Sequence[SubtitleInterval], export_format: ExportFormat
) -> str:
    """Serialize intervals in the requested format.

    Raises:
        EmptyExportError: If there are no intervals
    """
    if not intervals:
        raise EmptyExportError(
            "No subtitles to export. Create some subtitles first."
        )
    return _SERIALIZERS[ExportFormat(export_format)](intervals)


def export_filename(
    file_name: str | None, language: str, export_format: ExportFormat
) -> str:
    """Build the download name ``<media-name>-<language>.<ext>``.

    Falls back to ``subtitles-<language>.<ext>`` without a media file name.
    Only the last extension of the media name is dropped.
    """
    extension = ExportFormat(export_format).extension
    base = PurePath(file_name).name if file_name else ""
    if not base:
        return f"subtitles-{language}.{extension}"
    stem = re.sub(r"\.[^/.]+$", "", base)
    return f"{stem}-{language}.{extension}"
