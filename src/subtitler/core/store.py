"""In-memory interval store enforcing per-interval timing invariants."""

from __future__ import annotations

import math
import uuid
from dataclasses import replace
from typing import TYPE_CHECKING

import structlog

from subtitler.core.errors import IntervalNotFoundError, InvalidRangeError
from subtitler.core.interval import (
    MIN_DURATION,
    SubtitleInterval,
    max_start,
    min_end,
)

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable, Iterator

    from subtitler.core.interval import SubtitleCue

logger = structlog.get_logger()

# Length used when an edit collapses an interval whose old length is unusable
_FALLBACK_DURATION = 1.0


class IntervalStore:
    """Owns the authoritative collection of subtitle intervals.

    Every mutation is applied synchronously and leaves each interval with
    ``start_time >= 0`` and ``end_time - start_time >= min_duration``.
    Overlap between intervals is allowed.
    """

    def __init__(self, min_duration: float = MIN_DURATION) -> None:
        self.min_duration = min_duration
        self._intervals: dict[str, SubtitleInterval] = {}
        self._created: dict[str, int] = {}
        self._sequence = 0

    def __len__(self) -> int:
        """Return number of intervals."""
        return len(self._intervals)

    def __contains__(self, interval_id: object) -> bool:
        return interval_id in self._intervals

    def __iter__(self) -> Iterator[SubtitleInterval]:
        """Iterate over intervals in display order."""
        return iter(self.query())

    def create(self, start_time: float, end_time: float, text: str = "") -> str:
        """Create an interval and return its id.

        Args:
            start_time: Start in seconds, must be non-negative
            end_time: End in seconds, must be after start_time
            text: Subtitle text, may be empty

        Returns:
            The new interval's id

        Raises:
            InvalidRangeError: If end_time <= start_time, start_time < 0 or
                either bound is not finite
        """
        finite = math.isfinite(start_time) and math.isfinite(end_time)
        if not finite or start_time < 0 or end_time <= start_time:
            raise InvalidRangeError(start_time, end_time)

        if end_time - start_time < self.min_duration:
            end_time = min_end(start_time, self.min_duration)
        interval_id = uuid.uuid4().hex[:12]
        self._intervals[interval_id] = SubtitleInterval(
            id=interval_id, start_time=start_time, end_time=end_time, text=text
        )
        self._sequence += 1
        self._created[interval_id] = self._sequence
        logger.info(
            "interval_created",
            interval_id=interval_id,
            start_time=start_time,
            end_time=end_time,
        )
        return interval_id

    def get(self, interval_id: str) -> SubtitleInterval:
        """Get an interval by id.

        Raises:
            IntervalNotFoundError: If the id is unknown
        """
        try:
            return self._intervals[interval_id]
        except KeyError:
            raise IntervalNotFoundError(interval_id) from None

    def update(
        self,
        interval_id: str,
        *,
        start_time: float | None = None,
        end_time: float | None = None,
        text: str | None = None,
    ) -> SubtitleInterval:
        """Apply a partial change and return the stored result.

        A start moved onto or past the end pushes the end forward by the
        previous duration; an end moved onto or before the start pulls the
        start back by the previous duration (never below zero). Any leftover
        shortfall below the minimum duration moves the opposite boundary.
        When both times are given the start is applied first.

        Raises:
            IntervalNotFoundError: If the id is unknown
            InvalidRangeError: If a given time is not finite
        """
        current = self.get(interval_id)
        start, end = current.start_time, current.end_time
        if any(
            value is not None and not math.isfinite(value)
            for value in (start_time, end_time)
        ):
            raise InvalidRangeError(
                start if start_time is None else start_time,
                end if end_time is None else end_time,
            )

        if start_time is not None:
            start, end = self._apply_start(start, end, start_time)
        if end_time is not None:
            start, end = self._apply_end(start, end, end_time)

        updated = replace(
            current,
            start_time=start,
            end_time=end,
            text=current.text if text is None else text,
        )
        self._intervals[interval_id] = updated
        logger.debug(
            "interval_updated",
            interval_id=interval_id,
            start_time=start,
            end_time=end,
        )
        return updated

    def delete(self, interval_id: str) -> bool:
        """Remove an interval. Returns False when the id was already absent."""
        if self._intervals.pop(interval_id, None) is None:
            return False
        del self._created[interval_id]
        logger.info("interval_deleted", interval_id=interval_id)
        return True

    def query(
        self, predicate: Callable[[SubtitleInterval], bool] | None = None
    ) -> list[SubtitleInterval]:
        """Return matching intervals sorted by start time.

        Ties keep insertion order. Evaluated on every call.
        """
        matches = [
            interval
            for interval in self._intervals.values()
            if predicate is None or predicate(interval)
        ]
        return sorted(matches, key=lambda interval: interval.start_time)

    def containing(self, time: float) -> list[SubtitleInterval]:
        """Return intervals containing ``time``, oldest first."""
        return [
            interval for interval in self._intervals.values() if interval.contains(time)
        ]

    def created_order(self, interval_id: str) -> int:
        """Return the creation sequence number of an interval."""
        try:
            return self._created[interval_id]
        except KeyError:
            raise IntervalNotFoundError(interval_id) from None

    def load(self, cues: Iterable[SubtitleCue]) -> list[str]:
        """Create one interval per cue, returning the new ids in order."""
        return [self.create(cue.start_time, cue.end_time, cue.text) for cue in cues]

    def clear(self) -> None:
        """Remove every interval."""
        self._intervals.clear()
        self._created.clear()
        logger.info("intervals_cleared")

    def _apply_start(
        self, start: float, end: float, new_start: float
    ) -> tuple[float, float]:
        duration = end - start
        new_start = max(0.0, new_start)
        if new_start >= end:
            end = new_start + (duration if duration > 0 else _FALLBACK_DURATION)
        if end - new_start < self.min_duration:
            end = min_end(new_start, self.min_duration)
        return new_start, end

    def _apply_end(
        self, start: float, end: float, new_end: float
    ) -> tuple[float, float]:
        duration = end - start
        if new_end <= start:
            start = max(
                0.0, new_end - (duration if duration > 0 else _FALLBACK_DURATION)
            )
        if new_end - start < self.min_duration:
            start = max(0.0, max_start(new_end, self.min_duration))
        if new_end - start < self.min_duration:
            new_end = min_end(start, self.min_duration)
        return start, new_end
