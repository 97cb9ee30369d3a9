"""Keeps the viewport following the media playhead."""

from __future__ import annotations

from typing import TYPE_CHECKING

import structlog

if TYPE_CHECKING:
    from subtitler.core.interaction import PointerStateMachine
    from subtitler.core.viewport import Viewport

logger = structlog.get_logger()


class AutoScrollController:
    """Recenters the viewport when the playhead leaves it.

    Recentering is suppressed while a drag is in progress so the pointer's
    time reference stays put for the whole gesture.
    """

    def __init__(self, viewport: Viewport, machine: PointerStateMachine) -> None:
        self.viewport = viewport
        self.machine = machine

    def follow(self, playhead_time: float) -> bool:
        """React to a playhead update. Returns True when the view moved."""
        if self.machine.is_dragging:
            return False
        view_start, view_end = self.viewport.visible_range()
        if view_start <= playhead_time <= view_end:
            return False
        self.viewport.recenter(playhead_time)
        logger.debug(
            "viewport_recentered",
            playhead_time=playhead_time,
            view_start=self.viewport.view_start,
        )
        return True
