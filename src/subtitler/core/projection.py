"""Filtered, time-sorted list view over the interval store."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from subtitler.core.timecode import format_short

if TYPE_CHECKING:
    from subtitler.core.interval import SubtitleInterval
    from subtitler.core.store import IntervalStore


@dataclass(frozen=True)
class ListRow:
    """One row of the subtitle list, numbered from 1 in display order."""

    number: int
    interval: SubtitleInterval


def matches(interval: SubtitleInterval, term: str) -> bool:
    """Case-insensitive text match, or a match on the short start/end times."""
    return (
        term.lower() in interval.text.lower()
        or term in format_short(interval.start_time)
        or term in format_short(interval.end_time)
    )


def search(store: IntervalStore, term: str = "") -> list[ListRow]:
    """Return the rows matching ``term``; an empty term matches everything."""
    intervals = store.query(lambda interval: matches(interval, term))
    return [
        ListRow(number=number, interval=interval)
        for number, interval in enumerate(intervals, start=1)
    ]
