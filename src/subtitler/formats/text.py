"""Plain text exports."""

from collections.abc import Iterable

from subtitler.core.interval import SubtitleInterval
from subtitler.core.timecode import format_timestamp


def _with_text(intervals: Iterable[SubtitleInterval]) -> list[SubtitleInterval]:
    ordered = sorted(intervals, key=lambda interval: interval.start_time)
    return [interval for interval in ordered if interval.text.strip()]


def serialize_plain_text(intervals: Iterable[SubtitleInterval]) -> str:
    """One line of text per interval, time ordered, blank texts skipped."""
    return "\n".join(interval.text for interval in _with_text(intervals))


def serialize_text_with_timestamps(intervals: Iterable[SubtitleInterval]) -> str:
    """``[start --> end]`` line plus text per interval, blank texts skipped."""
    blocks = [
        f"[{format_timestamp(interval.start_time)} --> "
        f"{format_timestamp(interval.end_time)}]\n{interval.text}"
        for interval in _with_text(intervals)
    ]
    return "\n\n".join(blocks)
