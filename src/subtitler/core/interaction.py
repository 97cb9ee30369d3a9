"""Pointer interaction state machine for the timeline track.

Pointer positions arrive as fractions of the track width (0 at the left
edge, 1 at the right edge; values outside that range are valid while a drag
has captured the pointer). The machine converts them to times through the
viewport and turns them into select, seek, create, move and resize
operations on the interval store.
"""

from __future__ import annotations

from contextlib import contextmanager
from dataclasses import dataclass
from enum import StrEnum
from typing import TYPE_CHECKING

import structlog

from subtitler.core.gap_fill import DEFAULT_DURATION, create_at
from subtitler.core.interval import max_start, min_end

if TYPE_CHECKING:
    from collections.abc import Iterator

    from subtitler.core.interval import SubtitleInterval
    from subtitler.core.store import IntervalStore
    from subtitler.core.viewport import Viewport

logger = structlog.get_logger()

HANDLE_FRACTION = 0.01
CLICK_TOLERANCE = 0.003


class DragState(StrEnum):
    """States of the pointer interaction machine."""

    IDLE = "idle"
    DRAGGING_MOVE = "dragging_move"
    DRAGGING_RESIZE_LEFT = "dragging_resize_left"
    DRAGGING_RESIZE_RIGHT = "dragging_resize_right"


class PointerKind(StrEnum):
    """Raw pointer inputs accepted by the machine."""

    PRESS = "press"
    MOVE = "move"
    RELEASE = "release"
    DOUBLE_CLICK = "double_click"
    LOST = "lost"


class HitZone(StrEnum):
    """Part of an interval under the pointer."""

    BODY = "body"
    LEFT_HANDLE = "left_handle"
    RIGHT_HANDLE = "right_handle"


_ZONE_STATES = {
    HitZone.BODY: DragState.DRAGGING_MOVE,
    HitZone.LEFT_HANDLE: DragState.DRAGGING_RESIZE_LEFT,
    HitZone.RIGHT_HANDLE: DragState.DRAGGING_RESIZE_RIGHT,
}


@dataclass(frozen=True)
class Hit:
    """Result of hit-testing a time against the store."""

    interval: SubtitleInterval
    zone: HitZone


@dataclass(frozen=True)
class PointerOutcome:
    """What a single pointer input did.

    ``selected_id`` asks the owner to select an interval, ``seek_time`` asks
    the media collaborator to seek and ``created_id`` names an interval the
    input created. Selection and seek never both appear.
    """

    state: DragState
    selected_id: str | None = None
    seek_time: float | None = None
    created_id: str | None = None


@dataclass
class DragCapture:
    """Pointer capture held from press to release.

    While a capture is active it holds an exclusive lease on
    ``interval_id``. An empty-space press holds a capture with no interval
    so that its release can be recognised as a click.
    """

    mode: DragState
    press_fraction: float
    press_time: float
    interval_id: str | None = None
    anchor_start: float = 0.0
    anchor_end: float = 0.0
    moved: bool = False

    @property
    def original_duration(self) -> float:
        return self.anchor_end - self.anchor_start


class Gesture:
    """Handle for a press..release sequence driven inside ``with``."""

    def __init__(self, machine: PointerStateMachine, outcome: PointerOutcome) -> None:
        self._machine = machine
        self.outcomes = [outcome]

    @property
    def outcome(self) -> PointerOutcome:
        """Outcome of the most recent input of this gesture."""
        return self.outcomes[-1]

    def move(self, fraction: float) -> PointerOutcome:
        outcome = self._machine.move(fraction)
        self.outcomes.append(outcome)
        return outcome


class PointerStateMachine:
    """Interprets pointer input against a viewport and an interval store."""

    def __init__(
        self,
        store: IntervalStore,
        viewport: Viewport,
        *,
        handle_fraction: float = HANDLE_FRACTION,
        click_tolerance: float = CLICK_TOLERANCE,
        default_duration: float = DEFAULT_DURATION,
    ) -> None:
        self.store = store
        self.viewport = viewport
        self.handle_fraction = handle_fraction
        self.click_tolerance = click_tolerance
        self.default_duration = default_duration
        self._capture: DragCapture | None = None
        self._last_fraction = 0.0

    @property
    def state(self) -> DragState:
        if self._capture is None:
            return DragState.IDLE
        return self._capture.mode

    @property
    def is_dragging(self) -> bool:
        """True while an interval is captured by a move or resize drag."""
        return self._capture is not None and self._capture.interval_id is not None

    @property
    def captured_id(self) -> str | None:
        """Id of the interval leased by the active drag, if any."""
        return self._capture.interval_id if self._capture is not None else None

    def hit_test(self, time: float) -> Hit | None:
        """Find the interval part under ``time``.

        When several intervals contain ``time`` the most recently created one
        wins. Handles sit inside the body edges and are ``handle_fraction`` of
        the track wide; if both handles cover ``time`` the nearer edge wins.
        """
        candidates = self.store.containing(time)
        if not candidates:
            return None
        interval = max(candidates, key=lambda i: self.store.created_order(i.id))

        tolerance = self.handle_fraction * self.viewport.view_span
        from_left = time - interval.start_time
        from_right = interval.end_time - time
        if from_left <= tolerance and from_left <= from_right:
            zone = HitZone.LEFT_HANDLE
        elif from_right <= tolerance:
            zone = HitZone.RIGHT_HANDLE
        else:
            zone = HitZone.BODY
        return Hit(interval=interval, zone=zone)

    def handle(self, kind: PointerKind, fraction: float = 0.0) -> PointerOutcome:
        """Dispatch a raw pointer input."""
        if kind == PointerKind.PRESS:
            return self.press(fraction)
        if kind == PointerKind.MOVE:
            return self.move(fraction)
        if kind == PointerKind.RELEASE:
            return self.release(fraction)
        if kind == PointerKind.DOUBLE_CLICK:
            return self.double_click(fraction)
        return self.lost()

    def press(self, fraction: float) -> PointerOutcome:
        """Start a gesture at ``fraction``."""
        if self._capture is not None:
            # A press without a release in between: the old gesture is gone.
            self.lost()

        self._last_fraction = fraction
        time = self.viewport.time_at(fraction)
        hit = self.hit_test(time)
        if hit is None:
            self._capture = DragCapture(
                mode=DragState.IDLE, press_fraction=fraction, press_time=time
            )
            return PointerOutcome(state=self.state)

        interval = hit.interval
        self._capture = DragCapture(
            mode=_ZONE_STATES[hit.zone],
            press_fraction=fraction,
            press_time=time,
            interval_id=interval.id,
            anchor_start=interval.start_time,
            anchor_end=interval.end_time,
        )
        logger.debug(
            "drag_started",
            interval_id=interval.id,
            mode=str(self._capture.mode),
            press_time=time,
        )
        return PointerOutcome(state=self.state, selected_id=interval.id)

    def move(self, fraction: float) -> PointerOutcome:
        """Track the pointer; applies the drag once it leaves the click tolerance."""
        self._last_fraction = fraction
        capture = self._capture
        if capture is None:
            return PointerOutcome(state=self.state)

        if abs(fraction - capture.press_fraction) > self.click_tolerance:
            capture.moved = True
        if not capture.moved or capture.interval_id is None:
            return PointerOutcome(state=self.state)

        if capture.interval_id not in self.store:
            logger.warning("drag_target_missing", interval_id=capture.interval_id)
            return self.lost()

        self._apply_drag(capture, self.viewport.time_at(fraction))
        return PointerOutcome(state=self.state)

    def release(self, fraction: float) -> PointerOutcome:
        """End the gesture; a release without travel is a click."""
        capture = self._capture
        if capture is None:
            return PointerOutcome(state=self.state)

        self.move(fraction)
        # move() may have ended the gesture when its target vanished
        if self._capture is None:
            return PointerOutcome(state=self.state)
        self._release_capture()

        if capture.moved:
            if capture.interval_id is not None:
                logger.debug("drag_finished", interval_id=capture.interval_id)
            return PointerOutcome(state=self.state)
        if capture.interval_id is not None:
            return PointerOutcome(state=self.state, selected_id=capture.interval_id)
        return PointerOutcome(state=self.state, seek_time=capture.press_time)

    def lost(self) -> PointerOutcome:
        """End the gesture abnormally. The last applied update stands."""
        if self._capture is not None:
            logger.debug("pointer_capture_lost", interval_id=self._capture.interval_id)
            self._release_capture()
        return PointerOutcome(state=self.state)

    def double_click(self, fraction: float) -> PointerOutcome:
        """Create an interval in the gap under the pointer.

        Double-clicking an existing interval does nothing.
        """
        if self._capture is not None:
            return PointerOutcome(state=self.state)

        time = self.viewport.time_at(fraction)
        if self.hit_test(time) is not None:
            return PointerOutcome(state=self.state)

        created_id = create_at(
            self.store,
            time,
            self.viewport.total_duration,
            self.default_duration,
        )
        return PointerOutcome(
            state=self.state, selected_id=created_id, created_id=created_id
        )

    @contextmanager
    def gesture(self, fraction: float) -> Iterator[Gesture]:
        """Press at ``fraction`` and guarantee the capture is released.

        A normal exit releases at the last pointer position. An exception
        ends the gesture as a lost capture and propagates.
        """
        handle = Gesture(self, self.press(fraction))
        try:
            yield handle
        except BaseException:
            handle.outcomes.append(self.lost())
            raise
        handle.outcomes.append(self.release(self._last_fraction))

    def _apply_drag(self, capture: DragCapture, pointer_time: float) -> None:
        assert capture.interval_id is not None
        delta = pointer_time - capture.press_time
        min_duration = self.store.min_duration

        if capture.mode is DragState.DRAGGING_MOVE:
            new_start = max(0.0, capture.anchor_start + delta)
            self.store.update(
                capture.interval_id,
                start_time=new_start,
                end_time=new_start + capture.original_duration,
            )
        elif capture.mode is DragState.DRAGGING_RESIZE_LEFT:
            current = self.store.get(capture.interval_id)
            latest = max_start(current.end_time, min_duration)
            new_start = min(max(capture.anchor_start + delta, 0.0), latest)
            self.store.update(capture.interval_id, start_time=new_start)
        elif capture.mode is DragState.DRAGGING_RESIZE_RIGHT:
            current = self.store.get(capture.interval_id)
            new_end = max(
                min_end(current.start_time, min_duration), capture.anchor_end + delta
            )
            self.store.update(capture.interval_id, end_time=new_end)

    def _release_capture(self) -> None:
        self._capture = None
