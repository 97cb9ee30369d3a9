"""Mapping between timeline time and track coordinates."""

from __future__ import annotations

import math
from dataclasses import dataclass

import structlog

logger = structlog.get_logger()

MIN_VIEW_SPAN = 1.0
INITIAL_VIEW_SPAN = 15.0


@dataclass(frozen=True)
class TimeMarker:
    """A ruler tick at ``time`` drawn at track ``position`` (0..1)."""

    time: float
    position: float


class Viewport:
    """Visible time window over the full timeline.

    ``view_start`` is the time at the left edge of the track and ``view_span``
    the number of seconds the track shows. A total duration of zero or less
    means the media duration is not known yet; the span then has no upper
    bound.
    """

    def __init__(
        self,
        total_duration: float = 0.0,
        *,
        view_span: float = INITIAL_VIEW_SPAN,
        min_span: float = MIN_VIEW_SPAN,
    ) -> None:
        self.min_span = min_span
        self.total_duration = max(0.0, total_duration)
        self.view_start = 0.0
        self.view_span = self._clamp_span(view_span)

    @property
    def view_end(self) -> float:
        return self.view_start + self.view_span

    def visible_range(self) -> tuple[float, float]:
        """Return ``(view_start, view_end)``."""
        return self.view_start, self.view_end

    def time_at(self, fraction: float) -> float:
        """Convert a pointer's fractional track position into a time."""
        return self.view_start + fraction * self.view_span

    def coordinate_of(self, time: float) -> float:
        """Convert a time into a fractional track position (may be outside 0..1)."""
        return (time - self.view_start) / self.view_span

    def is_visible(self, time: float) -> bool:
        return 0.0 <= self.coordinate_of(time) <= 1.0

    def set_total_duration(self, total_duration: float) -> None:
        """Update the timeline length once the media reports it."""
        self.total_duration = max(0.0, total_duration)
        self.view_span = self._clamp_span(self.view_span)
        self.view_start = self._clamp_start(self.view_start)
        logger.info(
            "viewport_duration_set",
            total_duration=self.total_duration,
            view_span=self.view_span,
        )

    def zoom_in(self) -> None:
        """Halve the visible span, never below the minimum span."""
        self.view_span = self._clamp_span(self.view_span / 2)
        self.view_start = self._clamp_start(self.view_start)

    def zoom_out(self) -> None:
        """Double the visible span, showing the whole timeline at the cap."""
        span = self.view_span * 2
        upper = self._max_span()
        if upper is not None and span >= upper:
            self.view_span = self._clamp_span(upper)
            self.view_start = 0.0
            return
        self.view_span = self._clamp_span(span)
        self.view_start = self._clamp_start(self.view_start)

    def pan_by(self, fraction_of_span: float) -> None:
        """Shift the window by a fraction of the visible span."""
        self.view_start = self._clamp_start(
            self.view_start + fraction_of_span * self.view_span
        )

    def recenter(self, time: float) -> None:
        """Place ``time`` in the middle of the window."""
        self.view_start = max(0.0, time - self.view_span / 2)

    def time_markers(self) -> list[TimeMarker]:
        """Ruler ticks for the visible window.

        The step is 0.5s up to a 5s span, 1s up to 15s and 5s beyond.
        Ticks outside ``[0, total_duration]`` are skipped.
        """
        if self.view_span <= 5:
            step = 0.5
        elif self.view_span <= 15:
            step = 1.0
        else:
            step = 5.0

        markers = []
        tick = math.ceil(self.view_start / step)
        while tick * step <= self.view_end:
            time = tick * step
            in_media = self.total_duration <= 0 or time <= self.total_duration
            if time >= 0 and in_media:
                markers.append(TimeMarker(time=time, position=self.coordinate_of(time)))
            tick += 1
        return markers

    def _max_span(self) -> float | None:
        if self.total_duration <= 0:
            return None
        return max(self.total_duration, self.min_span)

    def _clamp_span(self, span: float) -> float:
        span = max(self.min_span, span)
        upper = self._max_span()
        return span if upper is None else min(span, upper)

    def _clamp_start(self, start: float) -> float:
        start = max(0.0, start)
        if self.total_duration > 0:
            start = min(start, max(0.0, self.total_duration - self.view_span))
        return start
