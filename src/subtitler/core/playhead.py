"""Playhead tracking against an external media time source."""

from __future__ import annotations

from typing import Protocol

import structlog

logger = structlog.get_logger()

RESYNC_THRESHOLD = 0.5


class MediaTimeSource(Protocol):
    """What the editor needs from the media element.

    Writing ``current_time`` is a seek request. ``duration`` is only valid
    after the media has loaded and reads as 0 before that.
    """

    current_time: float

    @property
    def duration(self) -> float: ...


class Playhead:
    """Last known playback position, kept in step with the media.

    Time updates from the media are taken as they come. Seeks requested by
    the editor are written to the media only when the media's own position
    differs from the requested one by more than the resync threshold.
    """

    def __init__(
        self,
        media: MediaTimeSource | None = None,
        *,
        resync_threshold: float = RESYNC_THRESHOLD,
    ) -> None:
        self.media = media
        self.resync_threshold = resync_threshold
        self.current_time = 0.0
        self.duration = media.duration if media is not None else 0.0

    def attach(self, media: MediaTimeSource) -> None:
        """Bind a media element and adopt its duration."""
        self.media = media
        self.duration = media.duration
        self.resync()

    def on_time_update(self, time: float) -> None:
        """Record a time update event from the media."""
        self.current_time = max(0.0, time)

    def on_duration_change(self, duration: float) -> None:
        """Record the media duration once it becomes known."""
        self.duration = max(0.0, duration)
        logger.info("media_duration_changed", duration=self.duration)

    def seek(self, time: float) -> float:
        """Move the playhead to ``time`` and resync the media if needed."""
        if self.duration > 0:
            time = min(time, self.duration)
        self.current_time = max(0.0, time)
        self.resync()
        return self.current_time

    def resync(self) -> bool:
        """Write the known time to the media if it drifted. Returns True on a write."""
        if self.media is None:
            return False
        if abs(self.media.current_time - self.current_time) <= self.resync_threshold:
            return False
        self.media.current_time = self.current_time
        logger.debug("media_resynced", current_time=self.current_time)
        return True
