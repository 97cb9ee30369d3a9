"""WebVTT serializer."""

from collections.abc import Iterable

from subtitler.core.interval import SubtitleInterval
from subtitler.core.timecode import format_timestamp


def serialize_vtt(intervals: Iterable[SubtitleInterval]) -> str:
    """Serialize intervals to WebVTT.

    Same block layout as SRT without sequence numbers, a ``WEBVTT`` header
    and ``.`` as the millisecond separator.
    """
    blocks = []
    for interval in sorted(intervals, key=lambda interval: interval.start_time):
        timing = (
            f"{format_timestamp(interval.start_time, '.')} --> "
            f"{format_timestamp(interval.end_time, '.')}"
        )
        blocks.append(f"{timing}\n{interval.text}")

    return "WEBVTT\n\n" + "\n\n".join(blocks) + "\n"
