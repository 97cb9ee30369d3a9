"""Editor session: owner of the interval store, viewport and pointer machine."""

from __future__ import annotations

from typing import TYPE_CHECKING

import structlog

from subtitler.core.autoscroll import AutoScrollController
from subtitler.core.errors import IntervalLockedError
from subtitler.core.gap_fill import create_after
from subtitler.core.interaction import PointerKind, PointerStateMachine
from subtitler.core.playhead import Playhead
from subtitler.core.projection import search
from subtitler.core.reading import reading_stats
from subtitler.core.store import IntervalStore
from subtitler.core.timecode import parse_time
from subtitler.core.viewport import Viewport
from subtitler.formats import (
    ExportFormat,
    export_filename,
    export_subtitles,
    parse_srt,
)
from subtitler.utils.config import get_settings

if TYPE_CHECKING:
    from subtitler.core.autosave import AutoSaver
    from subtitler.core.interaction import PointerOutcome
    from subtitler.core.interval import SubtitleInterval
    from subtitler.core.playhead import MediaTimeSource
    from subtitler.core.projection import ListRow
    from subtitler.core.reading import ReadingStats
    from subtitler.utils.config import Settings

logger = structlog.get_logger()


class EditorSession:
    """One user's editing state.

    All mutations run synchronously; the optional auto-saver is told about
    every interval that changed so it can notify collaborators once edits go
    quiet. The interval captured by an active drag cannot be edited or
    deleted from outside the drag.
    """

    def __init__(
        self,
        *,
        duration: float = 0.0,
        file_name: str | None = None,
        language: str | None = None,
        media: MediaTimeSource | None = None,
        autosaver: AutoSaver | None = None,
        settings: Settings | None = None,
    ) -> None:
        self.settings = settings or get_settings()
        self.file_name = file_name
        self.language = language or self.settings.default_language
        self.autosaver = autosaver
        self.selected_id: str | None = None

        self.store = IntervalStore(self.settings.min_duration)
        self.viewport = Viewport(
            duration,
            view_span=self.settings.initial_view_span,
            min_span=self.settings.min_view_span,
        )
        self.machine = PointerStateMachine(
            self.store,
            self.viewport,
            handle_fraction=self.settings.handle_fraction,
            click_tolerance=self.settings.click_tolerance,
            default_duration=self.settings.default_duration,
        )
        self.autoscroll = AutoScrollController(self.viewport, self.machine)
        self.playhead = Playhead(resync_threshold=self.settings.resync_threshold)
        self.playhead.on_duration_change(duration)
        if media is not None:
            self.attach_media(media)

    @property
    def duration(self) -> float:
        return self.viewport.total_duration

    @property
    def selected(self) -> SubtitleInterval | None:
        if self.selected_id is None:
            return None
        return self.store.get(self.selected_id)

    # -- intervals ---------------------------------------------------------

    def intervals(self) -> list[SubtitleInterval]:
        """All intervals in display order."""
        return self.store.query()

    def create_interval(self, start_time: float, end_time: float, text: str = "") -> str:
        """Create and select an interval.

        Raises:
            InvalidRangeError: If end_time <= start_time
        """
        interval_id = self.store.create(start_time, end_time, text)
        self.selected_id = interval_id
        self._touch(interval_id)
        return interval_id

    def update_interval(
        self,
        interval_id: str,
        *,
        start_time: float | None = None,
        end_time: float | None = None,
        text: str | None = None,
    ) -> SubtitleInterval:
        """Edit an interval's times and/or text.

        Raises:
            IntervalNotFoundError: If the id is unknown
            IntervalLockedError: If the interval is being dragged
        """
        self._check_lease(interval_id)
        interval = self.store.update(
            interval_id, start_time=start_time, end_time=end_time, text=text
        )
        self._touch(interval_id)
        return interval

    def edit_times(
        self,
        interval_id: str,
        *,
        start_text: str | None = None,
        end_text: str | None = None,
    ) -> SubtitleInterval:
        """Apply times typed into the timing fields (``HH:MM:SS.mmm``).

        Malformed text reads as 0 rather than failing.
        """
        return self.update_interval(
            interval_id,
            start_time=None if start_text is None else parse_time(start_text),
            end_time=None if end_text is None else parse_time(end_text),
        )

    def delete_interval(self, interval_id: str) -> bool:
        """Delete an interval, clearing the selection if it was selected."""
        self._check_lease(interval_id)
        deleted = self.store.delete(interval_id)
        if self.selected_id == interval_id:
            self.selected_id = None
        if deleted:
            self._touch(interval_id)
        return deleted

    def select(self, interval_id: str | None) -> SubtitleInterval | None:
        """Select an interval, or clear the selection with None.

        Raises:
            IntervalNotFoundError: If the id is unknown
        """
        if interval_id is None:
            self.selected_id = None
            return None
        interval = self.store.get(interval_id)
        self.selected_id = interval_id
        return interval

    def insert_after(self, anchor_id: str | None = None) -> str | None:
        """Gap-fill a new interval after the anchor (default: the selection).

        Returns:
            The new interval id, or None when there is nothing to anchor on or
            no room after it
        """
        anchor_id = anchor_id or self.selected_id
        if anchor_id is None:
            return None
        created_id = create_after(
            self.store, anchor_id, self.duration, self.settings.default_duration
        )
        if created_id is not None:
            self.selected_id = created_id
            self._touch(created_id)
        return created_id

    def search(self, term: str = "") -> list[ListRow]:
        return search(self.store, term)

    def reading_stats(self, interval_id: str | None = None) -> ReadingStats | None:
        """Reading statistics for an interval (default: the selection)."""
        interval_id = interval_id or self.selected_id
        if interval_id is None:
            return None
        return reading_stats(self.store.get(interval_id))

    # -- pointer and view --------------------------------------------------

    def pointer(self, kind: PointerKind | str, fraction: float = 0.0) -> PointerOutcome:
        """Feed one pointer input to the timeline and apply its outcome."""
        kind = PointerKind(kind)
        dragged_id = self.machine.captured_id
        outcome = self.machine.handle(kind, fraction)

        if dragged_id is not None and kind in (PointerKind.MOVE, PointerKind.RELEASE):
            self._touch(dragged_id)
        if outcome.created_id is not None:
            self._touch(outcome.created_id)
        if outcome.selected_id is not None:
            self.selected_id = outcome.selected_id
        if outcome.seek_time is not None:
            self.seek(outcome.seek_time)
        return outcome

    def zoom_in(self) -> None:
        self.viewport.zoom_in()

    def zoom_out(self) -> None:
        self.viewport.zoom_out()

    def pan_by(self, fraction_of_span: float) -> None:
        self.viewport.pan_by(fraction_of_span)

    # -- media -------------------------------------------------------------

    def attach_media(self, media: MediaTimeSource) -> None:
        self.playhead.attach(media)
        if media.duration > 0:
            self.on_duration_change(media.duration)

    def on_time_update(self, time: float) -> None:
        """Playback moved; keep the view following it."""
        self.playhead.on_time_update(time)
        self.autoscroll.follow(self.playhead.current_time)

    def on_duration_change(self, duration: float) -> None:
        self.playhead.on_duration_change(duration)
        self.viewport.set_total_duration(duration)

    def seek(self, time: float) -> float:
        """Request a seek; returns the position actually sought to."""
        position = self.playhead.seek(time)
        self.autoscroll.follow(position)
        return position

    # -- import / export ---------------------------------------------------

    def import_srt(self, content: str, *, replace: bool = True) -> list[str]:
        """Load SRT content, replacing the current intervals by default.

        Raises:
            SRTParseError: If the content is malformed
            IntervalLockedError: If a drag is in progress
        """
        cues = parse_srt(content)
        if self.machine.is_dragging:
            raise IntervalLockedError(str(self.machine.captured_id))
        if replace:
            for interval in self.store.query():
                self._touch(interval.id)
            self.store.clear()
            self.selected_id = None
        ids = self.store.load(cues)
        for interval_id in ids:
            self._touch(interval_id)
        logger.info("srt_imported", count=len(ids), replace=replace)
        return ids

    def export(self, export_format: ExportFormat | str) -> str:
        """Serialize the current intervals.

        Raises:
            EmptyExportError: If there are no intervals
        """
        return export_subtitles(self.store.query(), ExportFormat(export_format))

    def export_filename(self, export_format: ExportFormat | str) -> str:
        return export_filename(self.file_name, self.language, ExportFormat(export_format))

    def _check_lease(self, interval_id: str) -> None:
        if self.machine.is_dragging and self.machine.captured_id == interval_id:
            raise IntervalLockedError(interval_id)

    def _touch(self, interval_id: str) -> None:
        if self.autosaver is not None:
            self.autosaver.schedule(interval_id)
