"""Core timeline and interval model modules."""

from subtitler.core.autosave import AutoSaver
from subtitler.core.autoscroll import AutoScrollController
from subtitler.core.errors import (
    IntervalLockedError,
    IntervalNotFoundError,
    InvalidRangeError,
)
from subtitler.core.gap_fill import create_after, create_at, gap_fill_range
from subtitler.core.interaction import (
    DragState,
    PointerKind,
    PointerOutcome,
    PointerStateMachine,
)
from subtitler.core.interval import MIN_DURATION, SubtitleCue, SubtitleInterval
from subtitler.core.playhead import MediaTimeSource, Playhead
from subtitler.core.projection import ListRow, search
from subtitler.core.reading import ReadingStats, reading_stats
from subtitler.core.store import IntervalStore
from subtitler.core.timecode import format_timestamp, parse_time
from subtitler.core.viewport import Viewport

__all__ = [
    "MIN_DURATION",
    "AutoSaver",
    "AutoScrollController",
    "DragState",
    "IntervalLockedError",
    "IntervalNotFoundError",
    "IntervalStore",
    "InvalidRangeError",
    "ListRow",
    "MediaTimeSource",
    "Playhead",
    "PointerKind",
    "PointerOutcome",
    "PointerStateMachine",
    "ReadingStats",
    "SubtitleCue",
    "SubtitleInterval",
    "Viewport",
    "create_after",
    "create_at",
    "format_timestamp",
    "gap_fill_range",
    "parse_time",
    "reading_stats",
    "search",
]
