"""Creation of default-sized intervals in the gaps between existing ones."""

from __future__ import annotations

from typing import TYPE_CHECKING

import structlog

from subtitler.core.interval import min_end

if TYPE_CHECKING:
    from subtitler.core.store import IntervalStore

logger = structlog.get_logger()

DEFAULT_DURATION = 3.0


def gap_fill_range(
    store: IntervalStore,
    time: float,
    total_duration: float,
    default_duration: float = DEFAULT_DURATION,
) -> tuple[float, float] | None:
    """Compute a non-overlapping range starting at or after ``time``.

    Args:
        store: Store holding the existing intervals
        time: Requested creation time in seconds
        total_duration: Media length; nothing is placed beyond it
        default_duration: Preferred length of the new interval

    Returns:
        ``(start, end)`` or None when there is no room

    Notes:
        - The range starts at the later of ``time`` and the latest end at or
          before ``time``
        - It ends at the earliest of the default length, the next start at or
          after ``time`` and the media end
        - A ``time`` strictly inside an existing interval has no room
        - A gap shorter than the store's minimum duration has no room, since
          widening it would overlap the neighbour
    """
    intervals = store.query()
    if any(i.start_time < time < i.end_time for i in intervals):
        return None

    last_end = max((i.end_time for i in intervals if i.end_time <= time), default=0.0)
    next_start = min(
        (i.start_time for i in intervals if i.start_time >= time),
        default=total_duration,
    )

    new_start = max(time, last_end)
    new_end = min(new_start + default_duration, next_start, total_duration)
    if new_end <= new_start or min_end(new_start, store.min_duration) > new_end:
        return None
    return new_start, new_end


def create_at(
    store: IntervalStore,
    time: float,
    total_duration: float,
    default_duration: float = DEFAULT_DURATION,
) -> str | None:
    """Create a gap-filling interval near ``time``.

    Returns:
        The new interval id, or None when no space is available
    """
    span = gap_fill_range(store, time, total_duration, default_duration)
    if span is None:
        logger.info("gap_fill_skipped", time=time, total_duration=total_duration)
        return None
    return store.create(*span)


def create_after(
    store: IntervalStore,
    anchor_id: str,
    total_duration: float,
    default_duration: float = DEFAULT_DURATION,
) -> str | None:
    """Create a gap-filling interval right after an existing interval.

    Raises:
        IntervalNotFoundError: If the anchor id is unknown
    """
    anchor = store.get(anchor_id)
    return create_at(store, anchor.end_time, total_duration, default_duration)
