"""SRT format parser and serializer."""

import re
from collections.abc import Iterable

from subtitler.core.interval import SubtitleCue, SubtitleInterval
from subtitler.core.timecode import format_timestamp

_TIMING_RE = re.compile(
    r"(\d{2,}):(\d{2}):(\d{2}),(\d{3})\s*-->\s*(\d{2,}):(\d{2}):(\d{2}),(\d{3})"
)


class SRTParseError(Exception):
    """Exception raised when SRT parsing fails."""


def _seconds(hours: str, minutes: str, seconds: str, millis: str) -> float:
    return int(hours) * 3600 + int(minutes) * 60 + int(seconds) + int(millis) / 1000


def parse_srt(content: str) -> list[SubtitleCue]:
    """Parse SRT format string into cues.

    Args:
        content: SRT format string content

    Returns:
        Cues in file order; a block without text lines gives an empty text

    Raises:
        SRTParseError: If content is invalid or malformed
    """
    if not content.strip():
        raise SRTParseError("Content cannot be empty")

    # Split into blocks by blank lines
    blocks = re.split(r"\n\s*\n", content.replace("\r\n", "\n").strip())

    cues = []
    for block_num, block in enumerate(blocks, start=1):
        lines = block.strip().split("\n")

        if len(lines) < 2:
            raise SRTParseError(
                f"Block {block_num}: Invalid format, expected at least 2 lines "
                f"(index, timing), got {len(lines)}"
            )

        # Parse index
        try:
            int(lines[0].strip())
        except ValueError as e:
            raise SRTParseError(
                f"Block {block_num}: Invalid index '{lines[0].strip()}', "
                "must be integer"
            ) from e

        # Parse timing line
        timing_line = lines[1].strip()
        timing_match = _TIMING_RE.match(timing_line)
        if not timing_match:
            raise SRTParseError(
                f"Block {block_num}: Invalid timing format '{timing_line}', "
                f"expected 'HH:MM:SS,mmm --> HH:MM:SS,mmm'"
            )

        groups = timing_match.groups()
        start = _seconds(*groups[:4])
        end = _seconds(*groups[4:])

        text = "\n".join(lines[2:]).strip()

        try:
            cues.append(SubtitleCue(start_time=start, end_time=end, text=text))
        except ValueError as e:
            raise SRTParseError(f"Block {block_num}: {e}") from e

    return cues


def serialize_srt(intervals: Iterable[SubtitleInterval]) -> str:
    """Serialize intervals to SRT format string.

    Args:
        intervals: Intervals in any order; output is sorted by start time

    Returns:
        SRT format string, numbered from 1
    """
    blocks = []
    ordered = sorted(intervals, key=lambda interval: interval.start_time)
    for index, interval in enumerate(ordered, start=1):
        timing = (
            f"{format_timestamp(interval.start_time)} --> "
            f"{format_timestamp(interval.end_time)}"
        )
        blocks.append(f"{index}\n{timing}\n{interval.text}")

    return "\n\n".join(blocks) + "\n"
