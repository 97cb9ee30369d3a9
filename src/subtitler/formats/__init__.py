"""Subtitle format handlers."""

from subtitler.formats.export import (
    EmptyExportError,
    ExportFormat,
    export_filename,
    export_subtitles,
)
from subtitler.formats.srt import SRTParseError, parse_srt, serialize_srt
from subtitler.formats.text import (
    serialize_plain_text,
    serialize_text_with_timestamps,
)
from subtitler.formats.vtt import serialize_vtt

__all__ = [
    "EmptyExportError",
    "ExportFormat",
    "SRTParseError",
    "export_filename",
    "export_subtitles",
    "parse_srt",
    "serialize_plain_text",
    "serialize_srt",
    "serialize_text_with_timestamps",
    "serialize_vtt",
]
